"""Pytest marker auto-assignment by folder, and PDF fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import fitz
import pytest

from pdfmerger import logger
from pdfmerger.settings import Settings


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.fspath)).resolve()
        except Exception:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")


def build_pdf_bytes(labels: list[str]) -> bytes:
    """Build a PDF with one page per label, the label written on the page."""
    with fitz.open() as doc:
        for label in labels:
            page = doc.new_page()
            page.insert_text((72, 72), label)
        return doc.tobytes()


def read_page_labels(data: bytes) -> list[str]:
    """Return the text of every page of a PDF, in page order."""
    with fitz.open(stream=data, filetype="pdf") as doc:
        return [page.get_text().strip() for page in doc]


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[[str, list[str]], Path]:
    """Return a factory writing labelled PDFs under `tmp_path`."""

    def _make(name: str, labels: list[str]) -> Path:
        path = tmp_path / name
        path.write_bytes(build_pdf_bytes(labels))
        return path

    return _make


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a temporary upload directory, without background sweep."""
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        sweep_enabled=False,
        download_cleanup_delay_seconds=0,
        log_json=False,
    )


@pytest.fixture
def pdf_bytes() -> Callable[[list[str]], bytes]:
    """Return the in-memory PDF builder."""
    return build_pdf_bytes


@pytest.fixture
def page_labels() -> Callable[[bytes], list[str]]:
    """Return the page text reader."""
    return read_page_labels
