"""Core domain model exports."""

from pdfmerger.typing.models.files import UploadedFile, UploadResponse
from pdfmerger.typing.models.merge import (
    MergedOutput,
    MergeFileEntry,
    MergeItem,
    MergeRequest,
    MergeResult,
)

__all__ = [
    "MergeFileEntry",
    "MergeItem",
    "MergeRequest",
    "MergeResult",
    "MergedOutput",
    "UploadResponse",
    "UploadedFile",
]
