"""CLI entry point for pdfmerger."""

from __future__ import annotations

import argparse
from pathlib import Path

from pdfmerger import __version__, logger
from pdfmerger.dependencies import ensure_cli_dependencies_for_serve, ensure_package_dependencies
from pdfmerger.exceptions import PackageError
from pdfmerger.logging import configure_logging
from pdfmerger.merger import merge_documents
from pdfmerger.pdf_io import read_page_count
from pdfmerger.processing.display import describe_selection, format_file_size
from pdfmerger.processing.page_ranges import ALL_PAGES
from pdfmerger.session import MergeSession
from pdfmerger.settings import Settings, get_settings
from pdfmerger.storage import UploadStore
from pdfmerger.typing.models import UploadedFile


def _split_input_spec(value: str) -> tuple[Path, str]:
    """Split a ``PATH[:PAGES]`` argument.

    The selection suffix is only recognised after a ``.pdf`` path, so paths
    containing colons keep working.

    Args:
        value (str): Raw CLI value such as ``report.pdf:1-3,5``.

    Returns:
        tuple[Path, str]: Input path and its selection (``"all"`` when omitted).
    """
    head, sep, tail = value.rpartition(":")
    if sep and head.lower().endswith(".pdf") and tail.strip():
        return Path(head), tail.strip()
    return Path(value), ALL_PAGES


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="pdfmerger")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", help="Run the upload/merge HTTP API")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    merge_parser = subparsers.add_parser("merge", help="Merge selected pages of local PDFs")
    merge_parser.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT[:PAGES]",
        help="PDF path, optionally followed by a selection such as ':1-3,5' (default: all pages)",
    )
    merge_parser.add_argument("--output", "-o", required=True, type=Path, dest="output_path")

    sweep_parser = subparsers.add_parser("sweep", help="Delete expired files from the upload directory")
    sweep_parser.add_argument("--max-age", type=float, default=None, dest="max_age_seconds")

    return parser


def _build_session(inputs: list[str], settings: Settings) -> MergeSession:
    """Build a merge session from ``PATH[:PAGES]`` arguments.

    Args:
        inputs (list[str]): CLI input specs, in merge order.
        settings (Settings): Runtime settings.

    Raises:
        PageRangeError: If a selection fails strict validation.
        DocumentError: If an input is not a readable PDF.

    Returns:
        MergeSession: Session with every selection attached.
    """
    session = MergeSession(min_files=settings.min_merge_files)
    for raw in inputs:
        path, selection = _split_input_spec(raw)
        session.add(
            UploadedFile(
                id=str(len(session)),
                original_name=path.name,
                stored_name=path.name,
                path=str(path),
                size_bytes=path.stat().st_size if path.is_file() else 0,
                page_count=read_page_count(path),
            ),
        )
        uploaded = session.set_selection(len(session) - 1, selection)
        logger.info(
            "Input added",
            extra={
                "file": uploaded.original_name,
                "size": format_file_size(uploaded.size_bytes),
                "pages": uploaded.page_count,
                "selection": describe_selection(uploaded.selected_pages),
            },
        )
    return session


def _run_merge_command(args: argparse.Namespace, settings: Settings) -> int:
    """Run `pdfmerger merge`.

    Returns:
        int: Exit code.
    """
    session = _build_session(args.inputs, settings)
    result = merge_documents(session.build_items())

    output_path: Path = args.output_path
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.data)
    logger.info(
        "Merge completed",
        extra={
            "output_path": str(output_path),
            "pages": result.page_count,
            "included": result.included,
            "skipped": result.skipped,
        },
    )
    return 0


def _run_sweep_command(args: argparse.Namespace, settings: Settings) -> int:
    """Run `pdfmerger sweep`.

    Returns:
        int: Exit code.
    """
    max_age = args.max_age_seconds if args.max_age_seconds is not None else settings.file_ttl_seconds
    removed = UploadStore(root=settings.upload_path).sweep_expired(max_age)
    logger.info("Sweep completed", extra={"removed": len(removed), "upload_dir": settings.upload_dir})
    return 0


def _run_serve_command(args: argparse.Namespace, settings: Settings) -> int:
    """Run `pdfmerger serve`.

    Returns:
        int: Exit code.
    """
    ensure_cli_dependencies_for_serve()
    import uvicorn  # noqa: PLC0415

    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("PDF merger API starting", extra={"url": f"http://{host}:{port}"})
    uvicorn.run("pdfmerger.api.app:create_app", factory=True, host=host, port=port, log_config=None)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "merge": _run_merge_command,
        "serve": _run_serve_command,
        "sweep": _run_sweep_command,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        ensure_package_dependencies()
        return command(args, settings)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    except Exception:
        logger.exception("Unexpected error", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
