"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


@dataclass
class PageRangeError(PackageError):
    """Raised when a selection string fails strict validation."""

    range_string: str
    token: str | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        detail = f" (bad token '{self.token}')" if self.token is not None else ""
        return f"Invalid page range '{self.range_string}'{detail}. Use a format like: 1-3, 5, 8-10"


@dataclass
class DocumentError(PackageError):
    """Raised when a PDF cannot be opened or read."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass
class StorageError(PackageError):
    """Raised when a stored file is missing or its name is not acceptable."""

    filename: str
    message: str = "File not found"

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass
class MergeError(PackageError):
    """Raised when a merge cannot produce any output."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass
class SessionError(PackageError):
    """Raised when a merge session operation is not allowed."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message
