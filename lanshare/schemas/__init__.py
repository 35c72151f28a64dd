"""Pydantic schemas used across the project."""
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from lanshare.domain.content.models import ContentEntry, FileEntry, TextEntry


def to_millis(timestamp: float) -> int:
    return int(timestamp * 1000)


class WSMessage(BaseModel):
    type: str
    data: Any = None


class LinkMetadataView(BaseModel):
    has_links: bool = False
    first_url: Optional[str] = None


class FileEntryView(BaseModel):
    id: str
    type: Literal["file"] = "file"
    filename: str
    mime_type: str
    size: int
    download_url: str
    uploaded_at: int
    expires_at: int


class TextEntryView(BaseModel):
    id: str
    type: Literal["text"] = "text"
    content: str
    rendered_content: str
    metadata: LinkMetadataView = Field(default_factory=LinkMetadataView)
    shared_at: int
    expires_at: int


EntryView = Union[FileEntryView, TextEntryView]


def download_path(content_id: str, api_prefix: str = "/api") -> str:
    return f"{api_prefix}/download/{content_id}"


def entry_view(entry: ContentEntry, api_prefix: str = "/api") -> EntryView:
    """Broadcast-safe view of an entry. File payload bytes never appear here."""
    if isinstance(entry, FileEntry):
        return FileEntryView(
            id=entry.id,
            filename=entry.filename,
            mime_type=entry.mime_type,
            size=entry.size_bytes,
            download_url=download_path(entry.id, api_prefix),
            uploaded_at=to_millis(entry.created_at),
            expires_at=to_millis(entry.expires_at),
        )
    if isinstance(entry, TextEntry):
        metadata = LinkMetadataView()
        if entry.link_metadata is not None:
            metadata = LinkMetadataView(
                has_links=entry.link_metadata.has_links,
                first_url=entry.link_metadata.first_url,
            )
        return TextEntryView(
            id=entry.id,
            content=entry.raw_content,
            rendered_content=entry.rendered_content,
            metadata=metadata,
            shared_at=to_millis(entry.created_at),
            expires_at=to_millis(entry.expires_at),
        )
    raise TypeError(f"Unsupported content entry: {type(entry).__name__}")


class ShareTextRequest(BaseModel):
    text: str
    type: Literal["text", "markdown"] = "text"


class UploadResponse(BaseModel):
    success: bool = True
    file_id: str
    download_url: str
    expires_at: int


class ShareTextResponse(BaseModel):
    success: bool = True
    content_id: str
    expires_at: int


class ContentListResponse(BaseModel):
    total: int
    items: list[EntryView]


class ServerStatusResponse(BaseModel):
    server: str = "running"
    host: str
    port: int
    connected_clients: int
    active_content: int
