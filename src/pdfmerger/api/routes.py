"""HTTP routes: upload, merge, download and cleanup."""

from __future__ import annotations

from stat import S_ISREG

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from pdfmerger import logger
from pdfmerger.exceptions import DocumentError, StorageError
from pdfmerger.merger import run_merge
from pdfmerger.pdf_io import read_page_count
from pdfmerger.processing.display import format_file_size
from pdfmerger.settings import Settings
from pdfmerger.storage import UploadStore
from pdfmerger.sweeper import delete_after
from pdfmerger.typing.models import MergedOutput, MergeRequest, UploadedFile, UploadResponse

PDF_MEDIA_TYPE = "application/pdf"
DOWNLOAD_NAME = "merged-document.pdf"

router = APIRouter(prefix="/api", tags=["PDF Merge"])


def get_store(request: Request) -> UploadStore:
    """Return the upload store attached to the application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


@router.post("/upload", response_model=UploadResponse, response_model_exclude_none=True)
async def upload_pdfs(
    pdfs: list[UploadFile] | None = File(default=None),
    store: UploadStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    if not pdfs:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded")
    if len(pdfs) > settings.max_upload_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files. Upload at most {settings.max_upload_files} PDFs at once",
        )
    for upload in pdfs:
        if upload.content_type != PDF_MEDIA_TYPE:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only PDF files are allowed!")

    contents: list[tuple[str, bytes]] = []
    for upload in pdfs:
        data = await upload.read(settings.max_upload_size_bytes + 1)
        await upload.close()
        if len(data) > settings.max_upload_size_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"{upload.filename} is too large. Max allowed is {format_file_size(settings.max_upload_size_bytes)}",
            )
        contents.append((upload.filename or "document.pdf", data))

    accepted: list[UploadedFile] = []
    for original_name, data in contents:
        path = store.save_upload(original_name, data)
        try:
            page_count = read_page_count(path)
        except DocumentError:
            logger.warning("Uploaded file is not a readable PDF, dropping it", extra={"file": original_name})
            store.discard(path.name)
            continue
        accepted.append(
            UploadedFile(
                id=path.name,
                original_name=original_name,
                stored_name=path.name,
                path=str(path),
                size_bytes=len(data),
                page_count=page_count,
            ),
        )

    logger.info("Upload processed", extra={"received": len(contents), "accepted": len(accepted)})
    return UploadResponse(files=accepted)


@router.post("/merge", response_model=MergedOutput)
def merge_pdfs(
    payload: MergeRequest,
    store: UploadStore = Depends(get_store),
):
    return run_merge(payload, store)


@router.get("/download/{filename}")
async def download_merged(
    filename: str,
    store: UploadStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    path = store.resolve(filename)
    try:
        stat_result = path.stat()
    except FileNotFoundError as exc:
        raise StorageError(filename=filename) from exc
    if not S_ISREG(stat_result.st_mode):
        raise StorageError(filename=filename)
    return FileResponse(
        path,
        stat_result=stat_result,
        media_type=PDF_MEDIA_TYPE,
        filename=DOWNLOAD_NAME,
        background=BackgroundTask(delete_after, store, filename, settings.download_cleanup_delay_seconds),
    )


@router.delete("/cleanup/{filename}")
def cleanup_file(
    filename: str,
    store: UploadStore = Depends(get_store),
):
    store.delete(filename)
    return {"success": True}
