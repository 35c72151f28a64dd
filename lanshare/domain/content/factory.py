"""Constructors for file and text entries.

Uploads and text shares are checked against the content policy here, before
anything reaches the store. The store trusts whatever it is given.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

import markdown

from lanshare.core.clock import Clock, SystemClock, generate_uuid

from .exceptions import ContentTooLargeError, ContentValidationError
from .models import FileEntry, LinkMetadata, TextEntry

URL_PATTERN = re.compile(r"https?://[^\s]+")

Renderer = Callable[[str], str]


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=["fenced_code", "tables"])


def extract_link_metadata(text: str) -> Optional[LinkMetadata]:
    match = URL_PATTERN.search(text)
    if match is None:
        return None
    return LinkMetadata(has_links=True, first_url=match.group(0))


@dataclass(slots=True)
class ContentPolicy:
    max_file_size: int
    max_text_length: int
    allowed_mime_prefixes: Sequence[str]

    def is_mime_allowed(self, mime_type: str) -> bool:
        return any(mime_type.startswith(prefix) for prefix in self.allowed_mime_prefixes)

    def check_file(self, filename: str, mime_type: str, size_bytes: int) -> None:
        if not filename:
            raise ContentValidationError("File name is required")
        if size_bytes < 0:
            raise ContentValidationError("File size cannot be negative")
        if size_bytes > self.max_file_size:
            raise ContentTooLargeError(f"File exceeds the {self.max_file_size} byte limit")
        if not self.is_mime_allowed(mime_type):
            raise ContentValidationError(f"File type not allowed: {mime_type}")

    def check_text(self, text: str) -> None:
        if not text or not text.strip():
            raise ContentValidationError("Text content is required")
        if len(text) > self.max_text_length:
            raise ContentValidationError(f"Text exceeds the {self.max_text_length} character limit")


@dataclass(slots=True)
class ContentFactory:
    policy: ContentPolicy
    ttl_seconds: float
    clock: Clock = field(default_factory=SystemClock)
    id_factory: Callable[[], str] = generate_uuid
    renderer: Renderer = render_markdown

    def make_file_entry(self, filename: str, mime_type: str, size_bytes: int, payload: bytes) -> FileEntry:
        self.policy.check_file(filename, mime_type, size_bytes)
        if size_bytes != len(payload):
            raise ContentValidationError("Declared size does not match the uploaded bytes")
        created_at = self.clock.now()
        return FileEntry(
            id=self.id_factory(),
            filename=filename,
            mime_type=mime_type,
            size_bytes=size_bytes,
            payload=bytes(payload),
            created_at=created_at,
            expires_at=created_at + self.ttl_seconds,
        )

    def make_text_entry(self, raw_content: str, render_as_markdown: bool = False) -> TextEntry:
        self.policy.check_text(raw_content)
        rendered = self.renderer(raw_content) if render_as_markdown else raw_content
        created_at = self.clock.now()
        return TextEntry(
            id=self.id_factory(),
            raw_content=raw_content,
            rendered_content=rendered,
            link_metadata=extract_link_metadata(raw_content),
            created_at=created_at,
            expires_at=created_at + self.ttl_seconds,
        )


__all__ = [
    "ContentFactory",
    "ContentPolicy",
    "URL_PATTERN",
    "extract_link_metadata",
    "render_markdown",
]
