"""Ordered, session-scoped collection of uploaded files."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from pdfmerger import logger
from pdfmerger.exceptions import SessionError
from pdfmerger.processing.page_ranges import ALL_PAGES, validate_page_range
from pdfmerger.storage import UploadStore
from pdfmerger.typing.enums import MoveDirection
from pdfmerger.typing.models import MergeFileEntry, MergeItem, MergeRequest, UploadedFile


class MergeSession(BaseModel):
    """Files of one user session, in merge order.

    The position of an entry in `files` is its merge order. When a store is
    attached, removing an entry also deletes the stored upload.
    """

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    files: list[UploadedFile] = Field(default_factory=list)
    store: UploadStore | None = None
    min_files: int = Field(default=2, ge=1)

    def __len__(self) -> int:
        """Return the number of files in the session."""
        return len(self.files)

    def _check_index(self, index: int) -> UploadedFile:
        """Return the entry at `index`.

        Raises:
            SessionError: If the index is out of range.
        """
        if not 0 <= index < len(self.files):
            raise SessionError(message=f"No file at position {index}")
        return self.files[index]

    def add(self, uploaded: UploadedFile) -> None:
        """Append one file at the end of the merge order."""
        self.files.append(uploaded)

    def extend(self, uploaded: list[UploadedFile]) -> None:
        """Append files at the end of the merge order, keeping their order."""
        self.files.extend(uploaded)

    def remove(self, index: int) -> UploadedFile:
        """Remove the file at `index` and clean up its stored upload.

        Args:
            index (int): Position of the file.

        Returns:
            UploadedFile: Removed entry.
        """
        self._check_index(index)
        removed = self.files.pop(index)
        if self.store is not None and not self.store.discard(removed.stored_name):
            logger.warning("Stored upload already gone", extra={"stored_name": removed.stored_name})
        return removed

    def clear(self) -> None:
        """Remove every file, cleaning up stored uploads."""
        while self.files:
            self.remove(len(self.files) - 1)

    def move(self, index: int, direction: MoveDirection) -> bool:
        """Swap the file at `index` with its neighbour.

        Args:
            index (int): Position of the file.
            direction (MoveDirection): Neighbour to swap with.

        Returns:
            bool: False when the file is already first (up) or last (down).
        """
        self._check_index(index)
        target = index + direction.offset
        if not 0 <= target < len(self.files):
            return False
        self.files[index], self.files[target] = self.files[target], self.files[index]
        return True

    def set_selection(self, index: int, selection: str) -> UploadedFile:
        """Attach a page selection to one file.

        ``"all"`` is accepted as is; any other selection must pass the strict
        validator against the file's page count.

        Args:
            index (int): Position of the file.
            selection (str): ``"all"`` or a range string such as ``"1-3,5"``.

        Raises:
            PageRangeError: If the selection is rejected; the entry is left unchanged.

        Returns:
            UploadedFile: Updated entry.
        """
        current = self._check_index(index)
        normalized = selection.strip()
        if normalized != ALL_PAGES:
            validate_page_range(normalized, current.page_count)
        updated = current.model_copy(update={"selected_pages": normalized})
        self.files[index] = updated
        return updated

    @property
    def files_needed(self) -> int:
        """Return how many more files are needed to reach the minimum."""
        return max(self.min_files - len(self.files), 0)

    @property
    def is_ready(self) -> bool:
        """Return whether every file has a selection and the minimum count is reached."""
        return self.files_needed == 0 and all(uploaded.has_selection for uploaded in self.files)

    def _ensure_ready(self) -> None:
        """Raise when the session cannot be merged yet.

        Raises:
            SessionError: If files are missing or lack a selection.
        """
        if self.files_needed:
            raise SessionError(message=f"Please add at least {self.min_files} PDF files")
        if not all(uploaded.has_selection for uploaded in self.files):
            raise SessionError(message="Please select pages for all files")

    def build_request(self) -> MergeRequest:
        """Build the merge request sent to the merge endpoint.

        Returns:
            MergeRequest: Entries in session order.
        """
        self._ensure_ready()
        return MergeRequest(
            files=[
                MergeFileEntry(
                    filename=uploaded.stored_name,
                    original_name=uploaded.original_name,
                    selected_pages=uploaded.selected_pages,
                )
                for uploaded in self.files
            ],
        )

    def build_items(self) -> list[MergeItem]:
        """Build merge inputs pointing at each file's local path.

        Returns:
            list[MergeItem]: Inputs in session order.
        """
        self._ensure_ready()
        return [
            MergeItem(path=Path(uploaded.path), selected_pages=uploaded.selected_pages, label=uploaded.original_name)
            for uploaded in self.files
        ]
