from __future__ import annotations

"""
Push-Based Provider Streams.

Providers publish through two stream types:

- SnapshotSubject: keeps the latest value and replays it to new listeners,
  each emission replacing the previous snapshot.
- EventSignal: fire-only notification without payload or replay.

Deliveries are posted to a Dispatcher, the single logical event loop of the
shell. The default ImmediateDispatcher runs callbacks synchronously in FIFO
order; a callback posted while another is running is queued behind it, so a
handler always runs to completion before the next emission is handled.
"""

import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, List, Optional, Protocol, TypeVar

from navshell.core.reactive.subscriptions import Subscription

logger = logging.getLogger(__name__)

T = TypeVar("T")

_MISSING: Any = object()

# -----------------------------------------------------------------------------
# DISPATCHERS
# -----------------------------------------------------------------------------

class Dispatcher(Protocol):
    """Event loop abstraction used to deliver provider emissions."""

    def post(self, callback: Callable[[], None]) -> None:
        ...


class ImmediateDispatcher:
    """
    Run posted callbacks on the calling thread, one at a time.

    Exceptions raised by a callback are logged and do not prevent the
    remaining queued callbacks from running.
    """

    def __init__(self) -> None:
        self._queue: Deque[Callable[[], None]] = deque()
        self._draining = False

    @property
    def pending(self) -> int:
        return len(self._queue)

    def post(self, callback: Callable[[], None]) -> None:
        self._queue.append(callback)
        if self._draining:
            return

        self._draining = True
        try:
            while self._queue:
                task = self._queue.popleft()
                try:
                    task()
                except Exception as e:
                    logger.error(f"Dispatcher: Handler failed: {e}", exc_info=True)
        finally:
            self._draining = False


_default_dispatcher = ImmediateDispatcher()


def get_default_dispatcher() -> Dispatcher:
    """Return the process-wide dispatcher used when none is injected."""
    return _default_dispatcher

# -----------------------------------------------------------------------------
# STREAMS
# -----------------------------------------------------------------------------

class SnapshotSubject(Generic[T]):
    """
    Stream holding the latest snapshot of a value.

    Args:
        initial: Optional first snapshot. Without it, new listeners receive
            nothing until the first ``emit``.
        dispatcher: Event loop used for deliveries.
    """

    def __init__(self, initial: Any = _MISSING, dispatcher: Optional[Dispatcher] = None):
        self._value = initial
        self._dispatcher = dispatcher or get_default_dispatcher()
        self._subscribers: List[Subscription] = []

    @property
    def has_value(self) -> bool:
        return self._value is not _MISSING

    @property
    def value(self) -> Optional[T]:
        """Latest snapshot, or None before the first emission."""
        return None if self._value is _MISSING else self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """
        Attach a listener and replay the current snapshot to it.

        Args:
            callback: Invoked with each snapshot.

        Returns:
            Subscription: Handle detaching the listener.
        """
        sub = Subscription(callback, teardown=self._prune)
        self._subscribers.append(sub)

        if self.has_value:
            value = self._value
            self._dispatcher.post(lambda: sub.deliver(value))
        return sub

    def emit(self, value: T) -> None:
        """Replace the snapshot and notify every listener."""
        self._value = value
        for sub in list(self._subscribers):
            self._dispatcher.post(lambda s=sub: s.deliver(value))

    def _prune(self) -> None:
        self._subscribers = [s for s in self._subscribers if not s.closed]


class EventSignal:
    """Payload-free notification stream (e.g. navigation completed)."""

    def __init__(self, dispatcher: Optional[Dispatcher] = None):
        self._dispatcher = dispatcher or get_default_dispatcher()
        self._subscribers: List[Subscription] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def connect(self, callback: Callable[[], None]) -> Subscription:
        """Attach a listener. No replay: only future fires are delivered."""
        sub = Subscription(callback, teardown=self._prune)
        self._subscribers.append(sub)
        return sub

    def fire(self) -> None:
        for sub in list(self._subscribers):
            self._dispatcher.post(sub.deliver)

    def _prune(self) -> None:
        self._subscribers = [s for s in self._subscribers if not s.closed]
