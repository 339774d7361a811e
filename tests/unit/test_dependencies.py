from __future__ import annotations

import pytest

from pdfmerger.dependencies import (
    ensure_cli_dependencies_for_serve,
    ensure_package_dependencies,
    missing_dependencies,
)
from pdfmerger.exceptions import DependencyError


def _find_spec_without(*absent: str):
    def _find_spec(module_name: str):
        return None if module_name in absent else object()

    return _find_spec


def test_ensure_cli_dependencies_for_serve_succeeds(monkeypatch) -> None:
    monkeypatch.setattr("pdfmerger.dependencies.find_spec", _find_spec_without())
    ensure_cli_dependencies_for_serve()


def test_ensure_cli_dependencies_for_serve_raises(monkeypatch) -> None:
    monkeypatch.setattr("pdfmerger.dependencies.find_spec", _find_spec_without("uvicorn"))
    with pytest.raises(DependencyError, match="Missing runtime dependencies for 'serve': uvicorn"):
        ensure_cli_dependencies_for_serve()


def test_multipart_is_reported_by_distribution_name(monkeypatch) -> None:
    monkeypatch.setattr("pdfmerger.dependencies.find_spec", _find_spec_without("python_multipart"))
    assert missing_dependencies("serve") == ["python-multipart"]


def test_ensure_package_dependencies_succeeds(monkeypatch) -> None:
    monkeypatch.setattr("pdfmerger.dependencies.find_spec", _find_spec_without())
    ensure_package_dependencies()


def test_ensure_package_dependencies_raises(monkeypatch) -> None:
    monkeypatch.setattr("pdfmerger.dependencies.find_spec", _find_spec_without("fitz", "pydantic"))
    with pytest.raises(DependencyError, match="'merge': pymupdf, pydantic"):
        ensure_package_dependencies()


def test_unknown_feature_is_rejected() -> None:
    with pytest.raises(KeyError):
        missing_dependencies("ocr")
