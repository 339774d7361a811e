"""PyMuPDF helpers for reading and assembling PDFs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import fitz

from pdfmerger import logger
from pdfmerger.exceptions import DocumentError

if TYPE_CHECKING:
    from pathlib import Path


def open_pdf_bytes(data: bytes, *, label: str = "<memory>") -> fitz.Document:
    """Open PDF bytes as a document.

    Args:
        data: Raw PDF bytes.
        label: Name used in error messages.

    Raises:
        DocumentError: If the bytes are empty or are not a readable PDF.

    Returns:
        fitz.Document: Open document, to be closed by the caller.
    """
    if not data:
        raise DocumentError(message=f"Empty PDF: {label}")
    try:
        return fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise DocumentError(message=f"Failed to open PDF: {label}") from exc


def open_pdf(pdf_path: Path) -> fitz.Document:
    """Open a PDF file regardless of its extension.

    Args:
        pdf_path: PDF file to open.

    Raises:
        DocumentError: If the file cannot be read or is not a PDF.

    Returns:
        fitz.Document: Open document, to be closed by the caller.
    """
    try:
        data = pdf_path.read_bytes()
    except OSError as exc:
        raise DocumentError(message=f"Failed to read PDF: {pdf_path}") from exc
    return open_pdf_bytes(data, label=str(pdf_path))


def read_page_count(pdf_path: Path) -> int:
    """Return the number of pages of a PDF file.

    Args:
        pdf_path: PDF file to inspect.

    Raises:
        DocumentError: If the file is not a readable PDF.

    Returns:
        int: Page count.
    """
    with open_pdf(pdf_path) as doc:
        return doc.page_count


def append_pages(output: fitz.Document, source: fitz.Document, page_indices: list[int]) -> int:
    """Copy pages from `source` to the end of `output`, one by one, in the given order.

    Args:
        output: Destination document.
        source: Source document.
        page_indices: 0-based page indices of `source`.

    Returns:
        int: Number of pages appended.
    """
    for index in page_indices:
        output.insert_pdf(source, from_page=index, to_page=index)
    return len(page_indices)


def truncate_pages(doc: fitz.Document, page_count: int) -> int:
    """Drop every page after the first `page_count` pages.

    Args:
        doc: Document being assembled.
        page_count: Number of leading pages to keep.

    Returns:
        int: Number of pages removed.
    """
    extra = doc.page_count - page_count
    if extra <= 0:
        return 0
    doc.delete_pages(from_page=page_count, to_page=doc.page_count - 1)
    logger.debug("Partial pages rolled back", extra={"removed": extra, "kept": page_count})
    return extra


def serialize(doc: fitz.Document) -> bytes:
    """Serialize a document to compact PDF bytes."""
    data = doc.tobytes(garbage=3, deflate=True)
    logger.debug("PDF serialized", extra={"pages": doc.page_count, "bytes": len(data)})
    return data
