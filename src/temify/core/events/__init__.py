"""Event system for decoupled communication."""

from temify.core.events.bus import WILDCARD, EventBus, FailureHook, ListenerFailure
from temify.core.events.types import Event, EventMetadata, EventSubscription, Listener

__all__ = [
    "WILDCARD",
    "Event",
    "EventBus",
    "EventMetadata",
    "EventSubscription",
    "FailureHook",
    "Listener",
    "ListenerFailure",
]
