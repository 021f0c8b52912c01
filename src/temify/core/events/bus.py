"""Synchronous event bus for decoupled communication."""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import structlog

from temify.core.events.types import Event, EventSubscription, Listener
from temify.core.models.config import EventConfig

logger = structlog.get_logger(__name__)

# Reserved event type that matches every emitted event
WILDCARD = "*"


@dataclass(frozen=True)
class ListenerFailure:
    """A listener that raised while handling an event."""

    event_type: str
    listener_name: str
    error: Exception
    wildcard: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "event_type": self.event_type,
            "listener": self.listener_name,
            "error": repr(self.error),
            "wildcard": self.wildcard,
        }


FailureHook = Callable[[Event[Any], list[ListenerFailure]], None]

ListenerKey = int | tuple[int, int]


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


def _listener_key(listener: Listener) -> ListenerKey:
    """Identity of a listener, independent of its __eq__ and __hash__."""
    if inspect.ismethod(listener):
        # A fresh bound method object is created on every attribute access
        return (id(listener.__self__), id(listener.__func__))
    return id(listener)


class EventBus:
    """
    In-process pub/sub dispatcher.

    Listeners run synchronously, in subscription order, inside ``emit``.
    Type-specific listeners run before wildcard listeners. A listener that
    raises never stops the others and never reaches the emitter; failures
    are logged and passed to the optional failure hook.

    Listeners returning an awaitable are started and detached: ``emit``
    does not wait for them. Their failures are reported once they finish.

    The registry is not locked. Mutating it from several threads at once
    is the caller's responsibility.
    """

    def __init__(
        self,
        config: EventConfig | None = None,
        failure_hook: FailureHook | None = None,
    ) -> None:
        """
        Initialize the event bus.

        Args:
            config: Event bus configuration
            failure_hook: Called with the event and its listener failures
        """
        self.config = config or EventConfig()
        self._failure_hook = failure_hook
        # Insertion-ordered, keyed by identity; registered listeners stay
        # referenced so their ids cannot be reused while subscribed
        self._listeners: dict[str, dict[ListenerKey, Listener]] = {}
        self._wildcard_listeners: dict[ListenerKey, Listener] = {}
        self._pending: set[asyncio.Future[Any]] = set()
        self._stats = {
            "events_emitted": 0,
            "listeners_invoked": 0,
            "listener_errors": 0,
            "async_listeners_started": 0,
        }

    def subscribe(self, event_type: str, listener: Listener) -> Callable[[], None]:
        """
        Subscribe to events.

        Args:
            event_type: Event type to subscribe to, or ``"*"`` for all events
            listener: Callable receiving the event

        Returns:
            Unsubscribe function, safe to call more than once
        """
        if event_type == WILDCARD:
            listeners = self._wildcard_listeners
        else:
            listeners = self._listeners.setdefault(event_type, {})
        listeners.setdefault(_listener_key(listener), listener)

        logger.debug(
            "Listener subscribed",
            event_type=event_type,
            listener=_listener_name(listener),
        )
        return lambda: self.unsubscribe(event_type, listener)

    def subscription(self, event_type: str, listener: Listener) -> EventSubscription:
        """Subscribe and return a handle describing the registration."""
        unsubscribe = self.subscribe(event_type, listener)
        return EventSubscription(
            event_type=event_type,
            listener=listener,
            unsubscribe=unsubscribe,
        )

    def unsubscribe(self, event_type: str, listener: Listener) -> None:
        """
        Unsubscribe from events.

        Args:
            event_type: Event type the listener was registered under
            listener: Listener to remove
        """
        if event_type == WILDCARD:
            listeners = self._wildcard_listeners
        else:
            listeners = self._listeners.get(event_type, {})

        key = _listener_key(listener)
        if key not in listeners:
            return

        del listeners[key]
        if not listeners and event_type != WILDCARD:
            del self._listeners[event_type]

        logger.debug(
            "Listener unsubscribed",
            event_type=event_type,
            listener=_listener_name(listener),
        )

    def emit(self, event: Event[Any]) -> None:
        """
        Deliver an event to every matching listener.

        Args:
            event: Event to deliver
        """
        self._stats["events_emitted"] += 1

        # Snapshot so listeners may (un)subscribe during dispatch
        typed = list(self._listeners.get(event.type, {}).values())
        wildcard = list(self._wildcard_listeners.values())

        failures: list[ListenerFailure] = []
        for listener in typed:
            self._invoke(listener, event, failures, wildcard=False)
        for listener in wildcard:
            self._invoke(listener, event, failures, wildcard=True)

        if failures:
            self._report(event, failures)

    def _invoke(
        self,
        listener: Listener,
        event: Event[Any],
        failures: list[ListenerFailure],
        wildcard: bool,
    ) -> None:
        """Invoke a single listener with error isolation."""
        self._stats["listeners_invoked"] += 1
        try:
            result = listener(event)
            if inspect.isawaitable(result):
                self._detach(result, listener, event, wildcard)
        except Exception as e:
            failures.append(
                ListenerFailure(
                    event_type=event.type,
                    listener_name=_listener_name(listener),
                    error=e,
                    wildcard=wildcard,
                )
            )

    def _detach(
        self,
        work: Awaitable[Any],
        listener: Listener,
        event: Event[Any],
        wildcard: bool,
    ) -> None:
        """
        Start async listener work without waiting for it.

        Raises if the work cannot be scheduled, e.g. without a running loop
        or for a future bound to another loop.
        """
        try:
            loop = asyncio.get_running_loop()
            future = asyncio.ensure_future(work, loop=loop)
        except Exception:
            if inspect.iscoroutine(work):
                work.close()
            raise

        self._stats["async_listeners_started"] += 1
        self._pending.add(future)

        def _done(fut: asyncio.Future[Any]) -> None:
            self._pending.discard(fut)
            if fut.cancelled():
                return
            error = fut.exception()
            if not isinstance(error, Exception):
                # None, or BaseException already re-raised by the loop
                return
            self._report(
                event,
                [
                    ListenerFailure(
                        event_type=event.type,
                        listener_name=_listener_name(listener),
                        error=error,
                        wildcard=wildcard,
                    )
                ],
            )

        future.add_done_callback(_done)

    def _report(self, event: Event[Any], failures: list[ListenerFailure]) -> None:
        """Report listener failures without raising."""
        self._stats["listener_errors"] += len(failures)

        if self.config.log_failures:
            logger.error(
                "Event listeners failed",
                event_type=event.type,
                count=len(failures),
                failures=[f.to_dict() for f in failures],
            )

        if self._failure_hook is None:
            return
        try:
            self._failure_hook(event, failures)
        except Exception as e:
            logger.exception(
                "Failure hook raised",
                event_type=event.type,
                error=str(e),
            )

    def listener_count(self, event_type: str) -> int:
        """Number of listeners registered for an event type."""
        if event_type == WILDCARD:
            return len(self._wildcard_listeners)
        return len(self._listeners.get(event_type, ()))

    def has_listeners(self, event_type: str) -> bool:
        """Check if any listener is registered for an event type."""
        return self.listener_count(event_type) > 0

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()
        self._wildcard_listeners.clear()
        logger.debug("Event bus cleared")

    def get_event_types(self) -> list[str]:
        """Event types that currently have at least one listener."""
        return list(self._listeners)

    @property
    def pending_tasks(self) -> int:
        """Number of detached async listeners still running."""
        return len(self._pending)

    @property
    def stats(self) -> dict[str, int]:
        """Get event bus statistics."""
        return self._stats.copy()


__all__ = [
    "WILDCARD",
    "EventBus",
    "FailureHook",
    "ListenerFailure",
]
