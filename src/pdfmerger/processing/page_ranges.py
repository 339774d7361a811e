"""Selection-string parsing.

``parse_page_ranges`` is the lenient merge-time parser: bad tokens are dropped
and an empty selection means every page. ``is_valid_page_range`` and
``validate_page_range`` are the strict selection-time checks: one bad token
rejects the whole string.
"""

from __future__ import annotations

import re

from pdfmerger.exceptions import PageRangeError

ALL_PAGES = "all"

_NUMBER_RE = re.compile(r"\d+", re.ASCII)


def _parse_number(raw: str) -> int | None:
    """Parse one endpoint of a token.

    Args:
        raw (str): Endpoint text.

    Returns:
        int | None: Parsed value, or None when the text is not a plain integer.
    """
    candidate = raw.strip()
    if not _NUMBER_RE.fullmatch(candidate):
        return None
    return int(candidate)


def _token_bounds(token: str, total_pages: int) -> tuple[int, int] | None:
    """Resolve one comma-separated token to inclusive 1-based bounds.

    Args:
        token (str): Single page (``"5"``) or range (``"2-4"``).
        total_pages (int): Page count of the owning document.

    Returns:
        tuple[int, int] | None: ``(start, end)`` when the token is valid, otherwise None.
    """
    token = token.strip()
    if "-" in token:
        parts = token.split("-")
        if len(parts) != 2:  # noqa: PLR2004
            return None
        start = _parse_number(parts[0])
        end = _parse_number(parts[1])
    else:
        start = end = _parse_number(token)

    if start is None or end is None:
        return None
    if start < 1 or end > total_pages or start > end:
        return None
    return start, end


def _is_all_pages(range_string: str) -> bool:
    """Return whether the selection means every page in the lenient parser."""
    return range_string.strip() in {"", ALL_PAGES}


def parse_page_ranges(range_string: str | None, total_pages: int) -> list[int]:
    """Resolve a selection string to 0-based page indices.

    Args:
        range_string (str | None): Selection such as ``"1-3,5"``, ``"all"`` or empty.
        total_pages (int): Page count of the document.

    Returns:
        list[int]: Deduplicated, ascending 0-based indices. Invalid tokens contribute nothing.
    """
    if range_string is None or _is_all_pages(range_string):
        return list(range(max(total_pages, 0)))

    pages: set[int] = set()
    for token in range_string.split(","):
        bounds = _token_bounds(token, total_pages)
        if bounds is None:
            continue
        start, end = bounds
        pages.update(range(start - 1, end))
    return sorted(pages)


def validate_page_range(range_string: str, total_pages: int) -> None:
    """Strictly validate a selection string.

    Args:
        range_string (str): Selection entered by the user.
        total_pages (int): Page count of the document.

    Raises:
        PageRangeError: On the first token that is malformed or out of bounds.
    """
    for token in range_string.split(","):
        if _token_bounds(token, total_pages) is None:
            raise PageRangeError(range_string=range_string, token=token.strip())


def is_valid_page_range(range_string: str, total_pages: int) -> bool:
    """Return whether every token of the selection is valid.

    Args:
        range_string (str): Selection entered by the user.
        total_pages (int): Page count of the document.

    Returns:
        bool: False as soon as one token is rejected.
    """
    try:
        validate_page_range(range_string, total_pages)
    except PageRangeError:
        return False
    return True
