"""Port interfaces for event buffers.

Producers and consumers depend only on this protocol, not on a concrete
buffer implementation.
"""

from collections import deque
from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

from tracetail.core.models import Event

R = TypeVar("R")


@runtime_checkable
class EventBufferPort(Protocol):
    """Port for bounded event buffers.

    Adapters implementing this protocol accept events from many producer
    threads and grant one consumer at a time scoped access to the retained
    events. Example: EventBuffer.
    """

    @property
    def capacity(self) -> int:
        """Maximum number of retained events."""
        ...

    def append(self, event: Event) -> None:
        """Append an event, evicting the oldest one if the buffer is full."""
        ...

    def with_snapshot(self, fn: Callable[[deque[Event]], R]) -> R:
        """Run ``fn`` with exclusive access to the retained events.

        Args:
            fn: Callable receiving the live sequence, oldest first.

        Returns:
            Whatever ``fn`` returns.
        """
        ...
