"""Test configuration."""

import pytest
from fastapi.testclient import TestClient

from lanshare.core.clock import ManualClock
from lanshare.core.config import ContentSettings, Settings
from lanshare.core.container import build_container
from lanshare.domain.content import ContentFactory, ContentPolicy, ContentStore
from lanshare.main import create_app
from lanshare.websocket.manager import BroadcastHub

TTL = 600
START = 1_700_000_000.0


class RecordingObserver:
    """Observer that keeps every delivered message in memory."""

    def __init__(self, observer_id: str) -> None:
        self.observer_id = observer_id
        self.messages: list[dict] = []

    def deliver(self, message: dict) -> None:
        self.messages.append(message)

    def of_type(self, message_type: str) -> list:
        return [message["data"] for message in self.messages if message["type"] == message_type]


class BrokenObserver:
    def __init__(self, observer_id: str = "broken") -> None:
        self.observer_id = observer_id

    def deliver(self, message: dict) -> None:
        raise RuntimeError("socket gone")


@pytest.fixture()
def clock() -> ManualClock:
    return ManualClock(START)


@pytest.fixture()
def store(clock) -> ContentStore:
    return ContentStore(clock=clock)


@pytest.fixture()
def hub(store) -> BroadcastHub:
    return BroadcastHub(store)


@pytest.fixture()
def factory(clock) -> ContentFactory:
    ids = iter(f"id-{n}" for n in range(1, 10_000))
    return ContentFactory(
        policy=ContentPolicy(
            max_file_size=100 * 1024 * 1024,
            max_text_length=1000,
            allowed_mime_prefixes=ContentSettings().allowed_mime_prefixes,
        ),
        ttl_seconds=TTL,
        clock=clock,
        id_factory=lambda: next(ids),
    )


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        static_dir=tmp_path / "missing-dist",
        content=ContentSettings(max_file_size=1024, upload_chunk_size=100, max_text_length=50),
    )


@pytest.fixture()
def container(settings, clock):
    return build_container(settings, clock=clock)


@pytest.fixture()
def app(container):
    return create_app(container=container)


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client
