"""Event helper functions for creating Event objects."""

import time

from tracetail.core.models import Event, Level, make_fields
from tracetail.core.spans import current_span


def event(
    level: Level | str,
    target: str,
    /,
    message: str | None = None,
    *,
    event_name: str = "event",
    **fields: object,
) -> Event:
    """Create an event with automatic timestamp and the active span.

    Args:
        level: Event level, as a Level or a level name (e.g. "warn")
        target: Subsystem or module emitting the event
        message: Optional human message, stored as the "message" field
        event_name: Event name (default "event")
        **fields: Additional structured fields. Any name except message and
            event_name is allowed, including "name", "level" and "target"

    Returns:
        Event with current timestamp, referencing the current span
    """
    if isinstance(level, str):
        level = Level.parse(level)
    values: dict[str, object] = {}
    if message is not None:
        values["message"] = message
    values.update(fields)
    return Event(
        timestamp=time.time(),
        level=level,
        target=target,
        name=event_name,
        fields=make_fields(values),
        span=current_span(),
    )


def error(target: str, /, message: str | None = None, **fields: object) -> Event:
    """Create an ERROR event with automatic timestamp.

    Args:
        target: Subsystem or module emitting the event
        message: Optional human message
        **fields: Additional structured fields. Any name except message and
            event_name is allowed, including "name", "level" and "target"

    Returns:
        Event with ERROR level
    """
    return event(Level.ERROR, target, message, **fields)


def warn(target: str, /, message: str | None = None, **fields: object) -> Event:
    """Create a WARN event with automatic timestamp."""
    return event(Level.WARN, target, message, **fields)


def info(target: str, /, message: str | None = None, **fields: object) -> Event:
    """Create an INFO event with automatic timestamp."""
    return event(Level.INFO, target, message, **fields)


def debug(target: str, /, message: str | None = None, **fields: object) -> Event:
    """Create a DEBUG event with automatic timestamp."""
    return event(Level.DEBUG, target, message, **fields)


def trace(target: str, /, message: str | None = None, **fields: object) -> Event:
    """Create a TRACE event with automatic timestamp."""
    return event(Level.TRACE, target, message, **fields)
