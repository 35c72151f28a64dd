"""Content domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class ContentKind(str, Enum):
    FILE = "file"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class LinkMetadata:
    has_links: bool
    first_url: str


@dataclass(frozen=True, slots=True)
class FileEntry:
    id: str
    filename: str
    mime_type: str
    size_bytes: int
    payload: bytes = field(repr=False, compare=False)
    created_at: float
    expires_at: float

    kind: ClassVar[ContentKind] = ContentKind.FILE

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True, slots=True)
class TextEntry:
    id: str
    raw_content: str
    rendered_content: str
    link_metadata: Optional[LinkMetadata]
    created_at: float
    expires_at: float

    kind: ClassVar[ContentKind] = ContentKind.TEXT

    def is_live(self, now: float) -> bool:
        return now < self.expires_at


ContentEntry = Union[FileEntry, TextEntry]


@dataclass(slots=True)
class StoreStatus:
    """Snapshot used by the status endpoint."""

    connected_clients: int
    active_content: int
