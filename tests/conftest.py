"""Global test fixtures for temify."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from temify.core.events import Event, EventBus, ListenerFailure


@dataclass
class Recorder:
    """Listener that records every event it receives."""

    name: str = "recorder"
    log: list[tuple[str, Any]] | None = None
    received: list[Event[Any]] = field(default_factory=list)

    def __call__(self, event: Event[Any]) -> None:
        self.received.append(event)
        if self.log is not None:
            self.log.append((self.name, event))


@dataclass
class FailureSink:
    """Failure hook that keeps every reported batch."""

    batches: list[tuple[Event[Any], list[ListenerFailure]]] = field(default_factory=list)

    def __call__(self, event: Event[Any], failures: list[ListenerFailure]) -> None:
        self.batches.append((event, failures))

    @property
    def failures(self) -> list[ListenerFailure]:
        return [f for _, batch in self.batches for f in batch]


@pytest.fixture
def failure_sink() -> FailureSink:
    return FailureSink()


@pytest.fixture
def bus(failure_sink: FailureSink) -> EventBus:
    return EventBus(failure_hook=failure_sink)


@pytest.fixture
def call_log() -> list[tuple[str, Any]]:
    """Shared log for checking invocation order across recorders."""
    return []


@pytest.fixture
def make_recorder(call_log: list[tuple[str, Any]]):
    def _make(name: str) -> Recorder:
        return Recorder(name=name, log=call_log)

    return _make


@pytest.fixture
def order_created() -> Event[dict[str, Any]]:
    return Event(
        type="order.created",
        player_id="player-1",
        payload={"order_id": "o-1", "total": 42},
        timestamp="2024-01-01T00:00:00+00:00",
    )
