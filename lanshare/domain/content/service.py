"""Domain service orchestrating store writes and their broadcasts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .exceptions import ContentExpiredError, ContentNotFoundError
from .models import ContentEntry, FileEntry, StoreStatus
from .store import ContentStore

if TYPE_CHECKING:
    from lanshare.websocket.manager import BroadcastHub

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ContentService:
    store: ContentStore
    hub: "BroadcastHub"

    def share(self, entry: ContentEntry) -> ContentEntry:
        """Store the entry, then announce it. Never announced before it is queryable."""
        with self.hub.lock:
            self.store.insert(entry)
            self.hub.publish_added(entry)
        logger.info("Shared %s %s (expires at %.0f)", entry.kind.value, entry.id, entry.expires_at)
        return entry

    def get_entry(self, content_id: str, now: Optional[float] = None) -> ContentEntry:
        with self.hub.lock:
            try:
                return self.store.get(content_id, now)
            except ContentExpiredError:
                # the store already dropped it; tell observers so they drop it too
                self.hub.publish_removed(content_id)
                raise

    def fetch_file(self, content_id: str, now: Optional[float] = None) -> FileEntry:
        """Return a live file entry. Text ids are not found here, expired or not."""
        if not isinstance(self.store.peek(content_id), FileEntry):
            raise ContentNotFoundError(content_id)
        return self.get_entry(content_id, now)

    def list_entries(self, now: Optional[float] = None) -> list[ContentEntry]:
        return self.store.list_all(now)

    def status(self) -> StoreStatus:
        return StoreStatus(connected_clients=self.hub.client_count, active_content=len(self.store))


__all__ = ["ContentService"]
