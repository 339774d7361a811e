"""Merge orchestration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import fitz

from pdfmerger import logger
from pdfmerger.exceptions import DocumentError, MergeError, StorageError
from pdfmerger.pdf_io import append_pages, open_pdf, serialize, truncate_pages
from pdfmerger.processing.page_ranges import parse_page_ranges
from pdfmerger.typing.models import MergedOutput, MergeItem, MergeRequest, MergeResult

if TYPE_CHECKING:
    from pathlib import Path

    from pdfmerger.storage import UploadStore

DOWNLOAD_ROUTE = "/api/download"


def _append_item(output: fitz.Document, item: MergeItem) -> int:
    """Append the selected pages of one input to the output.

    Args:
        output (fitz.Document): Document being assembled.
        item (MergeItem): Input file and its selection.

    Returns:
        int: Pages appended; 0 when the file is missing, unreadable or selects nothing.
            A file failing part way through leaves no page behind.
    """
    if item.path is None or not item.path.is_file():
        logger.warning("File not found, skipping", extra={"file": item.label, "path": str(item.path)})
        return 0

    start = output.page_count
    try:
        with open_pdf(item.path) as source:
            page_indices = parse_page_ranges(item.selected_pages, source.page_count)
            logger.debug(
                "Pages resolved",
                extra={
                    "file": item.label,
                    "total_pages": source.page_count,
                    "selected_pages": item.selected_pages,
                    "page_indices": page_indices,
                },
            )
            if not page_indices:
                logger.warning("No valid pages to copy, skipping", extra={"file": item.label})
                return 0
            return append_pages(output, source, page_indices)
    except DocumentError:
        truncate_pages(output, start)
        logger.warning("Unreadable PDF, skipping", extra={"file": item.label})
        return 0
    except Exception:
        truncate_pages(output, start)
        logger.exception("Failed to copy pages, skipping", extra={"file": item.label})
        return 0


def merge_documents(items: list[MergeItem]) -> MergeResult:
    """Concatenate the selected pages of every input, in input order.

    Per-file failures never abort the merge: the file contributes no pages.

    Args:
        items (list[MergeItem]): Ordered inputs.

    Raises:
        MergeError: If no page at all could be merged.

    Returns:
        MergeResult: Serialized PDF and per-file bookkeeping.
    """
    included: list[str] = []
    skipped: list[str] = []

    with fitz.open() as output:
        for position, item in enumerate(items, start=1):
            logger.info("Processing file", extra={"position": position, "file": item.label})
            if _append_item(output, item):
                included.append(item.label)
            else:
                skipped.append(item.label)

        page_count = output.page_count
        logger.info("Merge assembled", extra={"pages": page_count, "skipped": len(skipped)})
        if page_count == 0:
            raise MergeError(message="No pages were successfully merged")
        data = serialize(output)

    return MergeResult(data=data, page_count=page_count, included=included, skipped=skipped)


def build_merge_items(request: MergeRequest, store: UploadStore) -> list[MergeItem]:
    """Resolve request entries to paths inside the upload store.

    Entries whose name is not a plain stored name get no path, so the merge
    treats them as missing files.

    Args:
        request (MergeRequest): Client request.
        store (UploadStore): Upload store.

    Returns:
        list[MergeItem]: Ordered merge inputs.
    """
    items: list[MergeItem] = []
    for entry in request.files:
        path: Path | None
        try:
            path = store.resolve(entry.filename)
        except StorageError:
            logger.warning("Rejected file name in merge request", extra={"filename": entry.filename})
            path = None
        items.append(MergeItem(path=path, selected_pages=entry.selected_pages, label=entry.label))
    return items


def run_merge(request: MergeRequest, store: UploadStore) -> MergedOutput:
    """Merge stored uploads and persist the result in the store.

    Args:
        request (MergeRequest): Ordered files with their selections.
        store (UploadStore): Upload store.

    Raises:
        MergeError: If the request is empty or nothing could be merged.

    Returns:
        MergedOutput: Stored result name and its download URL.
    """
    if not request.files:
        raise MergeError(message="No files to merge")

    logger.info("Starting merge", extra={"files": len(request.files)})
    result = merge_documents(build_merge_items(request, store))
    filename = store.write_output(result.data)
    logger.info(
        "Merge completed",
        extra={
            "stored_name": filename,
            "pages": result.page_count,
            "included": result.included,
            "skipped": result.skipped,
        },
    )

    return MergedOutput(
        download_url=f"{DOWNLOAD_ROUTE}/{filename}",
        filename=filename,
        page_count=result.page_count,
    )
