"""HTTP boundary of the merger."""

from pdfmerger.api.app import create_app

__all__ = ["create_app"]
