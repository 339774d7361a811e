"""Typing-centric domain modules."""

from pdfmerger.typing.enums import MoveDirection
from pdfmerger.typing.models import (
    MergedOutput,
    MergeFileEntry,
    MergeItem,
    MergeRequest,
    MergeResult,
    UploadedFile,
    UploadResponse,
)

__all__ = [
    "MergeFileEntry",
    "MergeItem",
    "MergeRequest",
    "MergeResult",
    "MergedOutput",
    "MoveDirection",
    "UploadResponse",
    "UploadedFile",
]
