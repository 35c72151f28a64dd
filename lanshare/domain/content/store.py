"""In-memory store holding every shared entry until it expires."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from lanshare.core.clock import Clock, SystemClock

from .exceptions import ContentExpiredError, ContentNotFoundError
from .models import ContentEntry

logger = logging.getLogger(__name__)


class ContentStore:
    """Thread-safe mapping of content id to entry.

    Every operation runs under a single lock. Nothing performs I/O while the
    lock is held, so request handlers and the sweeper never wait on a client.
    """

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or SystemClock()
        self._entries: dict[str, ContentEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, content_id: object) -> bool:
        with self._lock:
            return content_id in self._entries

    def insert(self, entry: ContentEntry) -> str:
        with self._lock:
            if entry.id in self._entries:
                raise ValueError(f"content id already stored: {entry.id}")
            self._entries[entry.id] = entry
        return entry.id

    def get(self, content_id: str, now: Optional[float] = None) -> ContentEntry:
        """Return a live entry, evicting it instead when it has expired."""
        now = self._now(now)
        with self._lock:
            entry = self._entries.get(content_id)
            if entry is None:
                raise ContentNotFoundError(content_id)
            if not entry.is_live(now):
                del self._entries[content_id]
                logger.debug("Lazily evicted expired content %s", content_id)
                raise ContentExpiredError(content_id)
            return entry

    def peek(self, content_id: str) -> Optional[ContentEntry]:
        """Return the stored entry, live or not, without evicting it."""
        with self._lock:
            return self._entries.get(content_id)

    def list_all(self, now: Optional[float] = None) -> list[ContentEntry]:
        """Live entries, most recent first. Expired ones are skipped, not removed."""
        now = self._now(now)
        with self._lock:
            return [entry for entry in reversed(self._entries.values()) if entry.is_live(now)]

    def remove(self, content_id: str) -> bool:
        with self._lock:
            return self._entries.pop(content_id, None) is not None

    def sweep_expired(self, now: Optional[float] = None) -> list[str]:
        now = self._now(now)
        with self._lock:
            expired = [content_id for content_id, entry in self._entries.items() if entry.expires_at <= now]
            for content_id in expired:
                del self._entries[content_id]
        return expired

    def _now(self, now: Optional[float]) -> float:
        return self._clock.now() if now is None else now


__all__ = ["ContentStore"]
