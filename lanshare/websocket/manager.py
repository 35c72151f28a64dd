"""Observer registry that fans store changes out to every connected client."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Protocol

from lanshare.domain.content.models import ContentEntry
from lanshare.domain.content.store import ContentStore
from lanshare.schemas import WSMessage, entry_view

logger = logging.getLogger(__name__)

MESSAGE_INITIAL_SNAPSHOT = "initial-snapshot"
MESSAGE_CONTENT_ADDED = "content-added"
MESSAGE_CONTENT_REMOVED = "content-removed"
MESSAGE_CLIENT_COUNT = "client-count"


class Observer(Protocol):
    observer_id: str

    def deliver(self, message: dict) -> None:
        """Queue one message for the client without waiting on I/O."""


class BroadcastHub:
    """Tracks connected observers and publishes content events to them.

    All methods are synchronous and safe to call from any thread: the
    registry and every delivery sit behind ``lock``. An observer registered
    by ``connect`` gets its snapshot before any later publish can reach it.
    Callers that change the store and then publish hold ``lock`` across both,
    so an entry shows up either in a snapshot or as ``content-added``, never
    both.
    """

    def __init__(self, store: ContentStore, api_prefix: str = "/api") -> None:
        self.store = store
        self.api_prefix = api_prefix
        self.observers: Dict[str, Observer] = {}
        self.lock = threading.RLock()

    @property
    def client_count(self) -> int:
        with self.lock:
            return len(self.observers)

    def is_connected(self, observer_id: str) -> bool:
        with self.lock:
            return observer_id in self.observers

    def connect(self, observer: Observer) -> None:
        with self.lock:
            self.observers[observer.observer_id] = observer
            snapshot = [self._view(entry) for entry in self.store.list_all()]
            self._send(observer, self._message(MESSAGE_INITIAL_SNAPSHOT, snapshot))
            logger.info("Observer %s connected (%d online)", observer.observer_id, len(self.observers))
            self.publish_client_count()

    def disconnect(self, observer_id: str) -> None:
        with self.lock:
            if self.observers.pop(observer_id, None) is None:
                return
            logger.info("Observer %s disconnected (%d online)", observer_id, len(self.observers))
            self.publish_client_count()

    def publish_added(self, entry: ContentEntry) -> None:
        self.broadcast(self._message(MESSAGE_CONTENT_ADDED, self._view(entry)))

    def publish_removed(self, content_id: str) -> None:
        self.broadcast(self._message(MESSAGE_CONTENT_REMOVED, content_id))

    def publish_client_count(self) -> None:
        with self.lock:
            self.broadcast(self._message(MESSAGE_CLIENT_COUNT, len(self.observers)))

    def broadcast(self, message: dict) -> None:
        # deliver only enqueues, so holding the lock never waits on a socket
        with self.lock:
            for observer in list(self.observers.values()):
                self._send(observer, message)

    def _send(self, observer: Observer, message: dict) -> bool:
        try:
            observer.deliver(message)
            return True
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Failed to deliver %s to observer %s: %s", message.get("type"), observer.observer_id, exc)
            return False

    def _view(self, entry: ContentEntry) -> dict[str, Any]:
        return entry_view(entry, self.api_prefix).model_dump(mode="json")

    @staticmethod
    def _message(message_type: str, data: Any) -> dict:
        return WSMessage(type=message_type, data=data).model_dump(mode="json")


__all__ = [
    "BroadcastHub",
    "Observer",
    "MESSAGE_INITIAL_SNAPSHOT",
    "MESSAGE_CONTENT_ADDED",
    "MESSAGE_CONTENT_REMOVED",
    "MESSAGE_CLIENT_COUNT",
]
