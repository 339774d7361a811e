"""Page selection processing helpers."""

from pdfmerger.processing.display import describe_selection, format_file_size
from pdfmerger.processing.page_ranges import (
    ALL_PAGES,
    is_valid_page_range,
    parse_page_ranges,
    validate_page_range,
)

__all__ = [
    "ALL_PAGES",
    "describe_selection",
    "format_file_size",
    "is_valid_page_range",
    "parse_page_ranges",
    "validate_page_range",
]
