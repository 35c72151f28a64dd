"""Routes for sharing files and text, downloading files and reporting status."""
from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from lanshare.api.deps import get_container, get_content_factory, get_content_service
from lanshare.core.container import ApplicationContainer
from lanshare.core.network import get_local_ip
from lanshare.domain.content import (
    ContentExpiredError,
    ContentFactory,
    ContentNotFoundError,
    ContentService,
    ContentTooLargeError,
    ContentValidationError,
)
from lanshare.schemas import (
    ContentListResponse,
    ServerStatusResponse,
    ShareTextRequest,
    ShareTextResponse,
    UploadResponse,
    download_path,
    entry_view,
    to_millis,
)

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_MIME_TYPE = "application/octet-stream"


def _validation_error(exc: ContentValidationError) -> HTTPException:
    if isinstance(exc, ContentTooLargeError):
        return HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


async def _read_upload(upload: UploadFile, max_size: int, chunk_size: int) -> bytes:
    """Buffer the whole upload, giving up as soon as it passes ``max_size``."""
    chunks: list[bytes] = []
    total_size = 0
    try:
        while True:
            chunk = await upload.read(chunk_size)
            if not chunk:
                break
            total_size += len(chunk)
            if total_size > max_size:
                raise ContentTooLargeError(f"File exceeds the {max_size} byte limit")
            chunks.append(chunk)
    finally:
        await upload.close()
    return b"".join(chunks)


def _content_disposition(filename: str) -> str:
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "'")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.post("/upload", response_model=UploadResponse, summary="Share a file")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    container: ApplicationContainer = Depends(get_container),
    factory: ContentFactory = Depends(get_content_factory),
    service: ContentService = Depends(get_content_service),
) -> UploadResponse:
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    content_settings = container.settings.content
    filename = file.filename or ""
    mime_type = file.content_type or DEFAULT_MIME_TYPE
    try:
        factory.policy.check_file(filename, mime_type, 0)
        payload = await _read_upload(file, content_settings.max_file_size, content_settings.upload_chunk_size)
        entry = factory.make_file_entry(filename, mime_type, len(payload), payload)
    except ContentValidationError as exc:
        logger.warning("Rejected upload %r: %s", filename, exc)
        raise _validation_error(exc) from exc

    service.share(entry)
    return UploadResponse(
        file_id=entry.id,
        download_url=download_path(entry.id, container.settings.api_prefix),
        expires_at=to_millis(entry.expires_at),
    )


@router.post("/share-text", response_model=ShareTextResponse, summary="Share a text snippet")
async def share_text(
    payload: ShareTextRequest,
    factory: ContentFactory = Depends(get_content_factory),
    service: ContentService = Depends(get_content_service),
) -> ShareTextResponse:
    try:
        entry = factory.make_text_entry(payload.text, render_as_markdown=payload.type == "markdown")
    except ContentValidationError as exc:
        raise _validation_error(exc) from exc

    service.share(entry)
    return ShareTextResponse(content_id=entry.id, expires_at=to_millis(entry.expires_at))


@router.get("/download/{content_id}", summary="Download a shared file")
async def download_file(content_id: str, service: ContentService = Depends(get_content_service)) -> Response:
    try:
        entry = service.fetch_file(content_id)
    except ContentExpiredError as exc:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail="File has expired") from exc
    except ContentNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found") from exc

    return Response(
        content=entry.payload,
        media_type=entry.mime_type,
        headers={"Content-Disposition": _content_disposition(entry.filename)},
    )


@router.get("/content", response_model=ContentListResponse, summary="List live content")
async def list_content(
    container: ApplicationContainer = Depends(get_container),
    service: ContentService = Depends(get_content_service),
) -> ContentListResponse:
    entries = service.list_entries()
    items = [entry_view(entry, container.settings.api_prefix) for entry in entries]
    return ContentListResponse(total=len(items), items=items)


@router.get("/status", response_model=ServerStatusResponse, summary="Server status")
async def server_status(
    container: ApplicationContainer = Depends(get_container),
    service: ContentService = Depends(get_content_service),
) -> ServerStatusResponse:
    snapshot = service.status()
    return ServerStatusResponse(
        host=get_local_ip(),
        port=container.settings.port,
        connected_clients=snapshot.connected_clients,
        active_content=snapshot.active_content,
    )
