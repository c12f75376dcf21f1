"""Event enumeration and the emitter shared by models and collections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from .utils.logging import get_logger

_logger = get_logger(__name__)

ALL = "all"


class EventKind(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    RESET = "reset"
    SORT = "sort"
    CHANGE = "change"
    DESTROY = "destroy"
    LOADING = "loading"


@dataclass(frozen=True)
class Event:
    """A single emitted event.

    ``args`` is the positional payload handed to named-channel handlers.
    ``source`` tags the collection an ``add``/``remove`` event belongs to and
    is compared by identity. ``origin`` is the emitter that first triggered
    the event; re-dispatching the event elsewhere keeps it.
    """

    name: str
    args: tuple = ()
    source: Any = field(default=None, compare=False)
    origin: Any = field(default=None, compare=False)

    @property
    def kind(self) -> Optional[EventKind]:
        try:
            return EventKind(self.name)
        except ValueError:
            return None

    @property
    def is_custom(self) -> bool:
        return self.kind is None


def _channel_name(name: Any) -> str:
    if isinstance(name, Enum):
        return str(name.value)
    return str(name)


@dataclass(frozen=True)
class Listener:
    """One registration: *channel* is an event name or :data:`ALL`."""

    channel: str
    handler: Callable

    def accepts(self, event: Event) -> bool:
        return self.channel == ALL or self.channel == event.name

    def deliver(self, event: Event) -> None:
        if self.channel == ALL:
            self.handler(event)
        else:
            self.handler(*event.args)


class EventEmitter:
    """Single ordered listener list covering named channels and ``all``.

    Handlers registered with ``on(name, ...)`` receive ``*event.args``;
    handlers registered on :data:`ALL` receive the :class:`Event` itself.
    Registering the same handler twice on a channel is ignored. A failing
    handler is logged and the remaining listeners still run.
    """

    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def on(self, name: str, handler: Callable) -> None:
        listener = Listener(_channel_name(name), handler)
        if listener not in self._listeners:
            self._listeners.append(listener)

    def off(self, name: str, handler: Callable) -> None:
        """Unregister *handler*; raises ``ValueError`` if it is not registered."""
        self._listeners.remove(Listener(_channel_name(name), handler))

    def is_listening(self, name: str, handler: Callable) -> bool:
        return Listener(_channel_name(name), handler) in self._listeners

    def listener_count(self, name: Optional[str] = None) -> int:
        if name is None:
            return len(self._listeners)
        channel = _channel_name(name)
        return sum(1 for listener in self._listeners if listener.channel == channel)

    def trigger(self, name: str, *args: Any, source: Any = None) -> Event:
        event = Event(name=_channel_name(name), args=args, source=source, origin=self)
        self.dispatch(event)
        return event

    def dispatch(self, event: Event) -> None:
        # Snapshot: handlers may (un)register listeners while being called.
        for listener in list(self._listeners):
            if not listener.accepts(event):
                continue
            try:
                listener.deliver(event)
            except Exception as exc:
                _logger.error("Handler %r for %r failed: %s", listener.handler, event.name, exc)
