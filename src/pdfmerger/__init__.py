"""PDF merger package."""

from pdfmerger.exceptions import (
    DependencyError,
    DocumentError,
    MergeError,
    PackageError,
    PageRangeError,
    SessionError,
    SettingsError,
    StorageError,
)
from pdfmerger.logging import configure_logging, get_logger
from pdfmerger.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("pdfmerger")

__all__ = [
    "DependencyError",
    "DocumentError",
    "MergeError",
    "PackageError",
    "PageRangeError",
    "SessionError",
    "Settings",
    "SettingsError",
    "StorageError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
