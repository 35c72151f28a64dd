"""Periodic removal of expired content."""
import asyncio
import logging
from enum import Enum
from typing import Optional

from lanshare.core.clock import Clock, SystemClock
from lanshare.domain.content.store import ContentStore
from lanshare.websocket.manager import BroadcastHub

logger = logging.getLogger(__name__)


class SweeperState(str, Enum):
    IDLE = "idle"
    SCANNING = "scanning"


class ExpirySweeper:
    def __init__(
        self,
        store: ContentStore,
        hub: BroadcastHub,
        interval: float = 30,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.hub = hub
        self.interval = interval
        self.clock = clock or SystemClock()
        self.state = SweeperState.IDLE
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Expiry sweeper started (every %ss)", self.interval)

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Expiry sweeper stopped")

    def tick(self, now: Optional[float] = None) -> list[str]:
        """Sweep once and announce every removed id.

        A failing announcement is logged and does not stop the others.
        """
        self.state = SweeperState.SCANNING
        try:
            with self.hub.lock:
                removed = self.store.sweep_expired(self.clock.now() if now is None else now)
                for content_id in removed:
                    try:
                        self.hub.publish_removed(content_id)
                    except Exception as exc:  # pylint: disable=broad-except
                        logger.error("Failed to announce removal of %s: %s", content_id, exc)
        finally:
            self.state = SweeperState.IDLE
        if removed:
            logger.info("Swept %d expired entries", len(removed))
        return removed

    async def _run(self) -> None:
        try:
            while True:
                await asyncio.sleep(self.interval)
                try:
                    self.tick()
                except Exception:  # pylint: disable=broad-except
                    logger.exception("Expiry sweep failed")
        except asyncio.CancelledError:
            logger.debug("Expiry sweeper task cancelled")
            raise


__all__ = ["ExpirySweeper", "SweeperState"]
