"""Consumer-side view over an event buffer.

A view holds the current filter text and, on each pass, returns the events
that pass it, newest first. Rendering is left to the caller; the helpers in
``tracetail.core.encoding.text`` produce plain-text lines.
"""

import logging
from collections import deque
from dataclasses import dataclass, field

from tracetail.core.config import BufferConfig
from tracetail.core.encoding.text import format_event_details, format_event_line
from tracetail.core.errors import FilterParseError
from tracetail.core.filter import FilterExpression, excludes, parse_filter
from tracetail.core.models import Event
from tracetail.core.ports import EventBufferPort

logger = logging.getLogger(__name__)

EMPTY_BUFFER_HINT = (
    "tracetail is running but sees no recorded events. "
    "Is a TracetailHandler or other producer attached to this buffer?"
)


@dataclass(frozen=True)
class FilterState:
    """Result of parsing user-edited filter text.

    Invalid text falls back to the match-all expression; ``error`` keeps
    the parse failure so the caller can flag the text as invalid.

    Attributes:
        text: The text as typed.
        expression: Parsed expression, or match-all if the text is invalid.
        error: The parse failure, or None when the text is valid.
    """

    text: str = ""
    expression: FilterExpression = field(default_factory=FilterExpression)
    error: FilterParseError | None = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @classmethod
    def from_text(cls, text: str) -> "FilterState":
        try:
            return cls(text=text, expression=parse_filter(text))
        except FilterParseError as exc:
            logger.debug("Invalid filter %r: %s", text, exc.reason)
            return cls(text=text, expression=FilterExpression.match_all(), error=exc)


def evict_overflow(events: deque[Event], capacity: int) -> bool:
    """Drop the single oldest event if ``events`` is over ``capacity``.

    Returns:
        True if an event was evicted.
    """
    if len(events) > capacity:
        events.popleft()
        return True
    return False


class EventLogView:
    """Filtered, newest-first view of an event buffer.

    Args:
        buffer: Event buffer to read.
        filter_text: Initial filter text.
        config: Optional settings; ``filter_enabled=False`` ignores filters.
    """

    def __init__(
        self,
        buffer: EventBufferPort,
        filter_text: str = "",
        *,
        config: BufferConfig | None = None,
    ) -> None:
        self._buffer = buffer
        self._filter_enabled = config.filter_enabled if config is not None else True
        self._state = FilterState.from_text(filter_text)
        self._empty_hint_issued = False

    @property
    def filter_state(self) -> FilterState:
        return self._state

    @property
    def active_filter(self) -> FilterExpression:
        """The expression applied on each pass."""
        if not self._filter_enabled:
            return FilterExpression.match_all()
        return self._state.expression

    def set_filter(self, text: str) -> FilterState:
        """Replace the filter with freshly parsed ``text``."""
        self._state = FilterState.from_text(text)
        return self._state

    def visible_events(self) -> list[Event]:
        """Collect the events passing the filter, newest first.

        Runs one pass under the buffer's snapshot, then trims the buffer
        back to capacity if it has somehow grown past it.
        """
        expression = self.active_filter
        capacity = self._buffer.capacity

        def collect(events: deque[Event]) -> tuple[list[Event], bool]:
            visible = [
                event for event in reversed(events) if not excludes(expression, event)
            ]
            was_empty = not events
            evict_overflow(events, capacity)
            return visible, was_empty

        visible, was_empty = self._buffer.with_snapshot(collect)
        if was_empty and not self._empty_hint_issued:
            # logged outside the snapshot: a handler may feed this same buffer
            self._empty_hint_issued = True
            logger.warning(EMPTY_BUFFER_HINT)
        return visible

    def render(self) -> list[str]:
        """Header lines for the visible events, newest first."""
        return [format_event_line(event) for event in self.visible_events()]

    def render_details(self, event: Event) -> list[str]:
        return format_event_details(event)
