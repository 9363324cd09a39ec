"""Ring buffer storage for trace events.

Provides bounded in-memory storage that evicts the oldest event when a new
one arrives at capacity. Appends may come from any number of threads; a
single consumer at a time gets scoped access to the live sequence.
"""

import threading
from collections import deque
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TypeVar

from tracetail.core.config import DEFAULT_CAPACITY, BufferConfig
from tracetail.core.errors import PoisonedBufferError
from tracetail.core.models import Event

R = TypeVar("R")


class EventBuffer:
    """Ring buffer implementation of EventBufferPort.

    Stores events in arrival order. When the buffer holds ``capacity``
    events, appending evicts exactly one event from the head first.

    If an exception escapes a critical section (an append, or the callable
    given to ``with_snapshot``) the buffer is poisoned: every later
    operation raises PoisonedBufferError instead of running on state that
    may be half-updated.

    Args:
        capacity: Maximum number of events to store.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise ValueError(f"capacity must be an integer, got {capacity!r}")
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._events: deque[Event] = deque()
        self._lock = threading.Lock()
        self._failure: BaseException | None = None

    @classmethod
    def from_config(cls, config: BufferConfig) -> "EventBuffer":
        """Create a buffer sized by ``config``."""
        return cls(capacity=config.capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_poisoned(self) -> bool:
        return self._failure is not None

    @contextmanager
    def _critical(self) -> Iterator[deque[Event]]:
        """Hold the lock, failing fast on a poisoned buffer."""
        with self._lock:
            if self._failure is not None:
                raise PoisonedBufferError(
                    "event buffer is poisoned by an earlier failure"
                ) from self._failure
            try:
                yield self._events
            except BaseException as exc:
                self._failure = exc
                raise

    def append(self, event: Event) -> None:
        """Append an event at the tail, evicting the head at capacity."""
        with self._critical() as events:
            if len(events) >= self._capacity:
                events.popleft()
            events.append(event)

    @contextmanager
    def snapshot(self) -> Iterator[deque[Event]]:
        """Context manager granting exclusive access to the live events.

        Producers block for as long as the block runs, so keep it to a
        single pass. The head may be evicted; nothing else should change.
        """
        with self._critical() as events:
            yield events

    def with_snapshot(self, fn: Callable[[deque[Event]], R]) -> R:
        """Run ``fn`` with exclusive access to the live events.

        Args:
            fn: Callable receiving the events, oldest first.

        Returns:
            Whatever ``fn`` returns.
        """
        with self.snapshot() as events:
            return fn(events)

    def events(self) -> list[Event]:
        """Return a copy of the retained events, oldest first."""
        with self._critical() as events:
            return list(events)

    def clear(self) -> None:
        """Drop every retained event."""
        with self._critical() as events:
            events.clear()

    def __len__(self) -> int:
        with self._critical() as events:
            return len(events)
