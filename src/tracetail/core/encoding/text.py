"""Plain-text rendering of events for log views."""

from collections.abc import Iterable, Mapping
from datetime import datetime

from tracetail.core.models import Event, FieldValue


def format_timestamp(timestamp: float) -> str:
    """Render a Unix timestamp as local ``HH:MM:SS.mmm``."""
    moment = datetime.fromtimestamp(timestamp)
    return moment.strftime("%H:%M:%S.") + f"{moment.microsecond // 1000:03d}"


def format_event_line(event: Event) -> str:
    """Render the one-line header for an event.

    Args:
        event: The event to render.

    Returns:
        ``[HH:MM:SS.mmm] [LEVEL] message``, or without the message part
        when the event has no "message" field.
    """
    header = f"[{format_timestamp(event.timestamp)}] [{event.level}]"
    message = event.message
    if message is None:
        return header
    return f"{header} {message}"


def format_fields(fields: Mapping[str, FieldValue], indent: str = "  ") -> list[str]:
    """Render ``name: value`` lines using each field's debug formatting."""
    return [f"{indent}{name}: {value.format()}" for name, value in fields.items()]


def format_event_details(event: Event) -> list[str]:
    """Render an event's fields and its span chain, innermost span first.

    Args:
        event: The event to render.

    Returns:
        Lines of text: the event's target and name with its fields, then
        ``target::name`` and fields for every enclosing span.
    """
    lines = [f"{event.target} {event.name}"]
    lines.extend(format_fields(event.fields))
    for span in event.span_chain():
        lines.append(f"{span.target}::{span.name}")
        lines.extend(format_fields(span.fields))
    return lines


def encode_events(events: Iterable[Event]) -> str:
    """Encode events as newline-terminated header lines.

    Returns:
        One line per event. Empty string if no events.
    """
    lines = [format_event_line(event) for event in events]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
