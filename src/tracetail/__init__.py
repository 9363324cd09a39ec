"""tracetail: bounded in-process trace event buffer with a filter language."""

from tracetail.adapters.logging import TracetailHandler
from tracetail.adapters.storage import EventBuffer
from tracetail.adapters.view import EventLogView, FilterState
from tracetail.core.config import DEFAULT_CAPACITY, BufferConfig
from tracetail.core.errors import FilterParseError, PoisonedBufferError, TracetailError
from tracetail.core.events import debug, error, event, info, trace, warn
from tracetail.core.filter import (
    FilterClause,
    FilterExpression,
    SpanSelector,
    excludes,
    includes,
    parse_filter,
)
from tracetail.core.models import Event, FieldValue, Level, Span
from tracetail.core.ports import EventBufferPort
from tracetail.core.spans import ancestors, current_span, span

__all__ = [
    "DEFAULT_CAPACITY",
    "BufferConfig",
    "Event",
    "EventBuffer",
    "EventBufferPort",
    "EventLogView",
    "FieldValue",
    "FilterClause",
    "FilterExpression",
    "FilterParseError",
    "FilterState",
    "Level",
    "PoisonedBufferError",
    "Span",
    "SpanSelector",
    "TracetailError",
    "TracetailHandler",
    "ancestors",
    "current_span",
    "debug",
    "error",
    "event",
    "excludes",
    "includes",
    "info",
    "parse_filter",
    "span",
    "trace",
    "warn",
]
