"""Event data shapes passed through the bus."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from temify.core.errors import ValidationError

P = TypeVar("P")


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string."""
    return datetime.now(UTC).isoformat()


@dataclass(frozen=True)
class EventMetadata:
    """Tracking information attached to an event."""

    correlation_id: str | None = None
    causation_id: str | None = None
    source: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, skipping unset keys."""
        data: dict[str, Any] = dict(self.extra)
        if self.correlation_id is not None:
            data["correlationId"] = self.correlation_id
        if self.causation_id is not None:
            data["causationId"] = self.causation_id
        if self.source is not None:
            data["source"] = self.source
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventMetadata:
        """Create metadata from its dictionary form."""
        extra = {
            k: v
            for k, v in data.items()
            if k not in ("correlationId", "causationId", "source")
        }
        return cls(
            correlation_id=data.get("correlationId"),
            causation_id=data.get("causationId"),
            source=data.get("source"),
            extra=extra,
        )


@dataclass(frozen=True)
class Event(Generic[P]):
    """
    Immutable record of something that happened to a player.

    The bus never mutates or retains events; the emitter owns them.
    """

    type: str
    player_id: Any
    payload: P = None  # type: ignore[assignment]
    timestamp: str = field(default_factory=utc_now_iso)
    metadata: EventMetadata | None = None

    def __post_init__(self) -> None:
        """Reject events without a type."""
        if not isinstance(self.type, str) or not self.type:
            raise ValidationError(
                "Event type must be a non-empty string",
                {"type": self.type},
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "type": self.type,
            "playerId": self.player_id,
            "timestamp": self.timestamp,
            "payload": self.payload,
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Event[Any]:
        """Create an event from its dictionary form."""
        metadata = data.get("metadata")
        return cls(
            type=data["type"],
            player_id=data["playerId"],
            payload=data.get("payload"),
            timestamp=data.get("timestamp") or utc_now_iso(),
            metadata=EventMetadata.from_dict(metadata) if metadata is not None else None,
        )

    def caused(self, event_type: str, payload: Any = None) -> Event[Any]:
        """Create a follow-up event for the same player, linked to this one."""
        parent = self.metadata or EventMetadata()
        return Event(
            type=event_type,
            player_id=self.player_id,
            payload=payload,
            metadata=EventMetadata(
                correlation_id=parent.correlation_id,
                causation_id=parent.correlation_id,
                source=parent.source,
            ),
        )


# Listeners either finish immediately or hand back detached async work
Listener = Callable[[Event[Any]], Awaitable[None] | None]


@dataclass(frozen=True)
class EventSubscription:
    """Handle for one listener registered on a bus."""

    event_type: str
    listener: Listener
    unsubscribe: Callable[[], None]


__all__ = [
    "Event",
    "EventMetadata",
    "EventSubscription",
    "Listener",
    "utc_now_iso",
]
