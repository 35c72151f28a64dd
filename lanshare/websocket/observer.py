"""WebSocket transport for hub observers."""
import asyncio
import json
import logging
from typing import Optional

from fastapi import WebSocket

from lanshare.core.clock import generate_uuid

logger = logging.getLogger(__name__)


class WebSocketObserver:
    """Queues hub messages and writes them to one socket in order.

    ``deliver`` never blocks and may be called from any thread; a background
    pump on the socket's event loop owns all writes. Must be created inside
    that loop. The pump task finishes on the first failed write, so the
    connection handler can wait on it and drop the observer.
    """

    def __init__(self, websocket: WebSocket, observer_id: Optional[str] = None) -> None:
        self.websocket = websocket
        self.observer_id = observer_id or generate_uuid()
        self._loop = asyncio.get_running_loop()
        self._queue: asyncio.Queue[dict] = asyncio.Queue()
        self._pump_task: Optional[asyncio.Task] = None
        self.closed = False

    def start(self) -> asyncio.Task:
        if self._pump_task is None:
            self._pump_task = asyncio.create_task(self._pump())
        return self._pump_task

    def deliver(self, message: dict) -> None:
        if self.closed:
            return
        if self._in_loop():
            self._queue.put_nowait(message)
        else:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, message)

    async def close(self) -> None:
        self.closed = True
        task, self._pump_task = self._pump_task, None
        if task:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    def _in_loop(self) -> bool:
        try:
            return asyncio.get_running_loop() is self._loop
        except RuntimeError:
            return False

    async def _pump(self) -> None:
        try:
            while True:
                message = await self._queue.get()
                await self.websocket.send_text(json.dumps(message))
        except asyncio.CancelledError:
            logger.debug("Observer %s pump cancelled", self.observer_id)
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("Sending to observer %s failed: %s", self.observer_id, exc)
            self.closed = True


__all__ = ["WebSocketObserver"]
