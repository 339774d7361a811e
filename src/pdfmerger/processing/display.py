"""Human readable labels for files and selections."""

from __future__ import annotations

from pdfmerger.processing.page_ranges import ALL_PAGES

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
_KIBI = 1024


def format_file_size(size_bytes: int) -> str:
    """Format a byte count with a binary unit.

    Args:
        size_bytes (int): Size in bytes.

    Returns:
        str: Label such as ``"0 Bytes"`` or ``"1.5 KB"`` (at most two decimals).
    """
    if size_bytes <= 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit = 0
    while value >= _KIBI and unit < len(_SIZE_UNITS) - 1:
        value /= _KIBI
        unit += 1
    return f"{round(value, 2):g} {_SIZE_UNITS[unit]}"


def describe_selection(selection: str | None) -> str:
    """Describe a page selection the way it is shown next to a file."""
    if not selection:
        return "No page selection"
    if selection == ALL_PAGES:
        return "All pages selected"
    return f"Pages: {selection}"
