"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from lanshare.core.clock import Clock, SystemClock, generate_uuid
from lanshare.core.config import Settings, get_settings
from lanshare.domain.content import ContentFactory, ContentPolicy, ContentService, ContentStore
from lanshare.domain.content.factory import Renderer, render_markdown
from lanshare.services.expiry import ExpirySweeper
from lanshare.websocket.manager import BroadcastHub


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    clock: Clock = field(default_factory=SystemClock)
    id_factory: Callable[[], str] = generate_uuid
    renderer: Renderer = render_markdown
    store: ContentStore = field(init=False)
    hub: BroadcastHub = field(init=False)
    factory: ContentFactory = field(init=False)
    service: ContentService = field(init=False)
    sweeper: ExpirySweeper = field(init=False)

    def __post_init__(self) -> None:
        content = self.settings.content
        self.store = ContentStore(clock=self.clock)
        self.hub = BroadcastHub(self.store, api_prefix=self.settings.api_prefix)
        self.factory = ContentFactory(
            policy=ContentPolicy(
                max_file_size=content.max_file_size,
                max_text_length=content.max_text_length,
                allowed_mime_prefixes=tuple(content.allowed_mime_prefixes),
            ),
            ttl_seconds=content.ttl_seconds,
            clock=self.clock,
            id_factory=self.id_factory,
            renderer=self.renderer,
        )
        self.service = ContentService(store=self.store, hub=self.hub)
        self.sweeper = ExpirySweeper(self.store, self.hub, interval=content.sweep_interval, clock=self.clock)

    async def start(self) -> None:
        """Start background tasks. Must run inside the event loop."""
        self.sweeper.start()

    async def shutdown(self) -> None:
        await self.sweeper.stop()


def build_container(settings: Optional[Settings] = None, **overrides) -> ApplicationContainer:
    return ApplicationContainer(settings=settings or get_settings(), **overrides)


__all__ = ["ApplicationContainer", "build_container"]
