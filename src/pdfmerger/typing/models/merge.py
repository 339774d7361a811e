"""Merge request/result models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class MergeFileEntry(BaseModel):
    """One file reference of a merge request, in merge order."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    filename: str
    original_name: str | None = Field(default=None, alias="originalName")
    selected_pages: str | None = Field(default=None, alias="selectedPages")

    @property
    def label(self) -> str:
        """Return a human readable label for logs."""
        return self.original_name or self.filename


class MergeRequest(BaseModel):
    """Ordered merge request as sent by clients."""

    model_config = ConfigDict(extra="ignore")

    files: list[MergeFileEntry] = Field(default_factory=list)


class MergeItem(BaseModel):
    """Resolved merge input: a local path and its selection string."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: Path | None = Field(description="Local file, None when the reference could not be resolved.")
    selected_pages: str | None = None
    label: str


class MergeResult(BaseModel):
    """Serialized merge output with per-file bookkeeping."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    data: bytes
    page_count: int = Field(ge=1)
    included: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)


class MergedOutput(BaseModel):
    """Stored merge result, answered by the merge endpoint."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    success: bool = True
    download_url: str = Field(alias="downloadUrl")
    filename: str
    page_count: int = Field(alias="pageCount", ge=1)
