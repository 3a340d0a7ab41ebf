"""Event bus used by the shell and its controllers.

Controllers publish what happened (recent files changed, language switched,
something worth telling the user) and the window decides how to show it, so
neither side holds a reference to the other.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, TypeVar
from weakref import WeakMethod

from ..theme.models import ThemeId

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")
Handler = Callable[[Any], None]


@dataclass(slots=True)
class Event:
    """Base class for all events published on the bus."""


@dataclass(slots=True)
class RecentFilesChanged(Event):
    """Emitted after the MRU list was reordered, extended, or cleared.

    Attributes:
        paths: The new list, most recent first.
    """

    paths: tuple[str, ...]


@dataclass(slots=True)
class LanguageChanged(Event):
    """Emitted when the UI language switches; views re-render their strings."""

    language: str


@dataclass(slots=True)
class ThemeApplied(Event):
    """Emitted after a theme has been applied to the window surfaces."""

    theme: ThemeId
    glass: bool = False


@dataclass(slots=True)
class StatusMessage(Event):
    """A short message for the status line.

    Attributes:
        message: Text to display.
        timeout_ms: How long to keep it visible; ``0`` keeps it until replaced.
    """

    message: str
    timeout_ms: int = 5_000


class EventBus:
    """Synchronous publish/subscribe bus.

    Bound-method handlers are held weakly so a closed window does not keep
    receiving events. Not thread-safe; use it from the Qt event loop thread.
    """

    __slots__ = ("_handlers",)

    def __init__(self) -> None:
        self._handlers: DefaultDict[type[Event], list[_HandlerRef]] = defaultdict(list)

    def subscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        self._handlers[event_type].append(_HandlerRef.create(handler))
        logger.debug("Subscribed %s to %s", _handler_name(handler), event_type.__name__)

    def unsubscribe(self, event_type: type[E], handler: Callable[[E], None]) -> None:
        handlers = self._handlers.get(event_type)
        if not handlers:
            return
        for index, handler_ref in enumerate(handlers):
            if handler_ref.matches(handler):
                handlers.pop(index)
                return

    def publish(self, event: Event) -> None:
        """Invoke every handler for ``event``; a failing handler is logged and skipped."""

        event_type = type(event)
        handlers = self._handlers.get(event_type)
        if not handlers:
            logger.debug("No handlers for event type %s", event_type.__name__)
            return

        dead: list[_HandlerRef] = []
        for handler_ref in list(handlers):
            handler = handler_ref.resolve()
            if handler is None:
                dead.append(handler_ref)
                continue
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Handler %s raised exception for event %s",
                    _handler_name(handler),
                    event_type.__name__,
                )
        # The live list may have shifted while handlers ran.
        for handler_ref in dead:
            for index, live in enumerate(handlers):
                if live is handler_ref:
                    handlers.pop(index)
                    break

    def handler_count(self, event_type: type[Event] | None = None) -> int:
        if event_type is not None:
            return len(self._handlers.get(event_type, []))
        return sum(len(handlers) for handlers in self._handlers.values())

    def clear(self) -> None:
        self._handlers.clear()


class _HandlerRef:
    """Weak reference for bound methods, strong reference for plain callables."""

    __slots__ = ("_ref", "_is_weak")

    def __init__(self, handler_ref: Any, is_weak: bool) -> None:
        self._ref = handler_ref
        self._is_weak = is_weak

    @classmethod
    def create(cls, handler: Handler) -> "_HandlerRef":
        if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
            try:
                return cls(WeakMethod(handler), is_weak=True)
            except TypeError:
                pass
        return cls(handler, is_weak=False)

    def resolve(self) -> Handler | None:
        if not self._is_weak:
            return self._ref
        return self._ref()

    def matches(self, handler: Handler) -> bool:
        resolved = self.resolve()
        return resolved is not None and resolved == handler


def _handler_name(handler: Handler) -> str:
    if hasattr(handler, "__self__") and hasattr(handler, "__func__"):
        return f"{type(handler.__self__).__name__}.{handler.__func__.__name__}"
    return getattr(handler, "__name__", repr(handler))


__all__ = [
    "Event",
    "EventBus",
    "Handler",
    "LanguageChanged",
    "RecentFilesChanged",
    "StatusMessage",
    "ThemeApplied",
]
