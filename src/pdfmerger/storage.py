"""Upload directory store shared by upload, merge, download and sweep."""

from __future__ import annotations

import re
import secrets
import time
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from pdfmerger import logger
from pdfmerger.exceptions import StorageError

_RANDOM_SUFFIX_DIGITS = 9
_MERGED_PREFIX = "merged"


def _timestamp_ms(now: float | None = None) -> int:
    """Return a millisecond timestamp."""
    return int((time.time() if now is None else now) * 1000)


def _random_suffix() -> str:
    """Return a zero-padded random numeric suffix."""
    return f"{secrets.randbelow(10**_RANDOM_SUFFIX_DIGITS):0{_RANDOM_SUFFIX_DIGITS}d}"


def sanitize_filename(name: str) -> str:
    """Reduce a client supplied name to a safe single path component.

    Args:
        name (str): Original file name.

    Returns:
        str: Name made of letters, digits, dots, dashes and underscores.
    """
    base = name.replace("\\", "/").rsplit("/", 1)[-1]
    safe = re.sub(r"[^A-Za-z0-9._-]+", "-", base).strip("-.")
    return safe or "document.pdf"


def build_stored_name(original_name: str, now: float | None = None) -> str:
    """Build a unique stored name: ``<ms>-<random>-<sanitized original>``."""
    return f"{_timestamp_ms(now)}-{_random_suffix()}-{sanitize_filename(original_name)}"


def build_merged_name(now: float | None = None) -> str:
    """Build a unique name for a merge result."""
    return f"{_MERGED_PREFIX}-{_timestamp_ms(now)}-{_random_suffix()}.pdf"


class UploadStore(BaseModel):
    """Filesystem store for uploaded files and merge results."""

    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    root: Path = Field(description="Upload directory.")

    def model_post_init(self, __context: object, /) -> None:
        """Ensure the upload directory exists after model initialization.

        Args:
            __context (object): Pydantic model context.
        """
        self.root.mkdir(parents=True, exist_ok=True)

    def resolve(self, filename: str) -> Path:
        """Return the path of a stored file.

        Args:
            filename (str): Stored name, a single path component.

        Raises:
            StorageError: If the name could point outside the store.

        Returns:
            Path: Path inside the store (the file may not exist).
        """
        if not filename or filename in {".", ".."} or "/" in filename or "\\" in filename:
            raise StorageError(filename=filename, message="Invalid file name")
        return self.root / filename

    def exists(self, filename: str) -> bool:
        """Return whether a stored file exists; unsafe names never exist."""
        try:
            return self.resolve(filename).is_file()
        except StorageError:
            return False

    def save_upload(self, original_name: str, data: bytes) -> Path:
        """Persist uploaded bytes under a unique name.

        Args:
            original_name (str): Name given by the client.
            data (bytes): File content.

        Returns:
            Path: Written file path.
        """
        path = self.root / build_stored_name(original_name)
        path.write_bytes(data)
        logger.info("Upload stored", extra={"stored_name": path.name, "size": len(data)})
        return path

    def write_output(self, data: bytes) -> str:
        """Persist a merge result.

        Args:
            data (bytes): Merged PDF bytes.

        Returns:
            str: Stored name of the result.
        """
        filename = build_merged_name()
        (self.root / filename).write_bytes(data)
        logger.info("Merged PDF stored", extra={"stored_name": filename, "size": len(data)})
        return filename

    def delete(self, filename: str) -> None:
        """Delete a stored file.

        Args:
            filename (str): Stored name.

        Raises:
            StorageError: If the file does not exist or the name is invalid.
        """
        path = self.resolve(filename)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise StorageError(filename=filename) from exc
        logger.info("Stored file deleted", extra={"stored_name": filename})

    def discard(self, filename: str) -> bool:
        """Delete a stored file if it is still there.

        Returns:
            bool: True when a file was removed.
        """
        try:
            self.delete(filename)
        except StorageError:
            return False
        return True

    def list_files(self) -> list[Path]:
        """List stored files.

        Returns:
            list[Path]: Files sorted by name.
        """
        return sorted(path for path in self.root.iterdir() if path.is_file())

    def sweep_expired(self, max_age_seconds: float, now: float | None = None) -> list[str]:
        """Delete every stored file older than `max_age_seconds`.

        Args:
            max_age_seconds (float): Age threshold, compared with the file mtime.
            now (float | None): Reference time, defaults to the current time.

        Returns:
            list[str]: Names of the deleted files.
        """
        reference = time.time() if now is None else now
        removed: list[str] = []
        for path in self.list_files():
            try:
                age = reference - path.stat().st_mtime
                if age <= max_age_seconds:
                    continue
                path.unlink()
            except FileNotFoundError:
                continue
            removed.append(path.name)
            logger.info("Cleaned up expired file", extra={"stored_name": path.name, "age_seconds": round(age)})
        return removed
