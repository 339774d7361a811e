"""Uploaded file models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UploadedFile(BaseModel):
    """Metadata of one stored upload, as tracked by a merge session."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    original_name: str = Field(alias="originalName")
    stored_name: str = Field(alias="filename", description="Name of the file inside the upload store.")
    path: str
    size_bytes: int = Field(alias="size", ge=0)
    page_count: int = Field(alias="pageCount", ge=0)
    selected_pages: str | None = Field(
        default=None,
        alias="selectedPages",
        description="Either 'all' or a range string such as '1-3,5'.",
    )

    @property
    def has_selection(self) -> bool:
        """Return whether a page selection was attached."""
        return bool(self.selected_pages)


class UploadResponse(BaseModel):
    """Response of the upload endpoint."""

    model_config = ConfigDict(extra="forbid")

    success: bool = True
    files: list[UploadedFile]
