"""Runtime checks for optional third-party modules."""

from __future__ import annotations

from importlib.util import find_spec

from pdfmerger.exceptions import DependencyError

# Distribution name -> import name, per feature.
_REQUIREMENTS: dict[str, dict[str, str]] = {
    "merge": {
        "pymupdf": "fitz",
        "pydantic": "pydantic",
    },
    "serve": {
        "fastapi": "fastapi",
        "uvicorn": "uvicorn",
        "python-multipart": "python_multipart",
    },
}


def missing_dependencies(feature: str) -> list[str]:
    """Return the distributions a feature needs but cannot import.

    Args:
        feature (str): Key of the requirement table (``"merge"`` or ``"serve"``).

    Raises:
        KeyError: If the feature is unknown.

    Returns:
        list[str]: Missing distribution names, in declaration order.
    """
    return [
        package
        for package, module in _REQUIREMENTS[feature].items()
        if find_spec(module) is None
    ]


def _ensure(feature: str) -> None:
    missing = missing_dependencies(feature)
    if missing:
        raise DependencyError(missing_package=missing, message=feature)


def ensure_package_dependencies() -> None:
    """Validate what merging, page counting and the sweep rely on.

    Raises:
        DependencyError: If PyMuPDF or pydantic cannot be imported.
    """
    _ensure("merge")


def ensure_cli_dependencies_for_serve() -> None:
    """Validate the web stack needed by `pdfmerger serve`.

    Raises:
        DependencyError: If fastapi, uvicorn or python-multipart is missing.
    """
    _ensure("serve")
