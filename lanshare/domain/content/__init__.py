"""Domain layer utilities for shared content."""

from .exceptions import (
    ContentError,
    ContentExpiredError,
    ContentNotFoundError,
    ContentTooLargeError,
    ContentValidationError,
)
from .factory import ContentFactory, ContentPolicy
from .models import ContentEntry, ContentKind, FileEntry, LinkMetadata, StoreStatus, TextEntry
from .service import ContentService
from .store import ContentStore

__all__ = [
    "ContentEntry",
    "ContentKind",
    "FileEntry",
    "TextEntry",
    "LinkMetadata",
    "StoreStatus",
    "ContentStore",
    "ContentFactory",
    "ContentPolicy",
    "ContentService",
    "ContentError",
    "ContentValidationError",
    "ContentTooLargeError",
    "ContentNotFoundError",
    "ContentExpiredError",
]
