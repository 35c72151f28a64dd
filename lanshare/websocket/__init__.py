"""Push channel: observer registry and WebSocket transport."""

from .manager import BroadcastHub, Observer
from .observer import WebSocketObserver

__all__ = ["BroadcastHub", "Observer", "WebSocketObserver"]
