"""Time and identifier sources shared by the content domain."""

from __future__ import annotations

import time
import uuid
from typing import Protocol


class Clock(Protocol):
    def now(self) -> float:
        ...


class SystemClock:
    """Wall clock in POSIX seconds."""

    def now(self) -> float:
        return time.time()


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        self._now = value

    def advance(self, seconds: float) -> float:
        self._now += seconds
        return self._now


def generate_uuid() -> str:
    return str(uuid.uuid4())


__all__ = ["Clock", "SystemClock", "ManualClock", "generate_uuid"]
