"""Python logging handler adapter for tracetail.

This adapter bridges Python's standard library logging module to an
EventBufferPort, so ordinary ``logger.info(...)`` calls become trace events
tied to the active span.
"""

import logging
import traceback

from tracetail.core.models import Event, Level, make_fields
from tracetail.core.ports import EventBufferPort
from tracetail.core.spans import current_span

# Attributes every LogRecord carries; anything else came in through extra=
_RESERVED_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {
    "asctime",
    "message",
}

_DEFAULT_INCLUDE_ATTRS = ("module", "funcName", "lineno", "pathname")

_SCALARS = (str, int, float, bool)


def _source_attrs(record: logging.LogRecord) -> dict[str, object]:
    return {
        "module": record.module,
        "funcName": record.funcName or "",
        "lineno": record.lineno,
        "pathname": record.pathname,
    }


def _exception_fields(record: logging.LogRecord) -> dict[str, object]:
    if not record.exc_info:
        return {}
    exc_type, exc_value, exc_tb = record.exc_info
    fields: dict[str, object] = {}
    if exc_type is not None:
        fields["exc_type"] = exc_type.__name__
    if exc_value is not None:
        fields["exc_message"] = str(exc_value)
    if exc_tb is not None:
        fields["exc_traceback"] = "".join(
            traceback.format_exception(exc_type, exc_value, exc_tb)
        )
    return fields


class TracetailHandler(logging.Handler):
    """Logging handler that appends log records to an event buffer.

    The record's logger name becomes the event target, so filter clauses
    like ``myapp.db=warn`` select by logger hierarchy.

    Example:
        ```python
        from tracetail import EventBuffer, TracetailHandler

        buffer = EventBuffer()
        logging.getLogger().addHandler(TracetailHandler(buffer))
        ```
    """

    def __init__(
        self,
        buffer: EventBufferPort,
        include_attrs: list[str] | None = None,
        level: int = logging.NOTSET,
    ) -> None:
        """Initialize the handler with the buffer it feeds.

        Args:
            buffer: Event buffer implementing EventBufferPort.
            include_attrs: Source location attributes copied into each
                event. Defaults to module, funcName, lineno and pathname.
            level: Minimum logging level handled.
        """
        super().__init__(level=level)
        self._buffer = buffer
        self._include_attrs = tuple(
            _DEFAULT_INCLUDE_ATTRS if include_attrs is None else include_attrs
        )

    def to_event(self, record: logging.LogRecord) -> Event:
        """Convert a log record into an event under the active span.

        Fields are ordered: message, source attributes, scalar extras,
        then exception details.
        """
        values: dict[str, object] = {"message": record.getMessage()}

        source = _source_attrs(record)
        for key in self._include_attrs:
            if key in source:
                values[key] = source[key]

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and isinstance(value, _SCALARS):
                values[key] = value

        values.update(_exception_fields(record))

        return Event(
            timestamp=record.created,
            level=Level.from_logging(record.levelno),
            target=record.name,
            name=f"event {record.filename}:{record.lineno}",
            fields=make_fields(values),
            span=current_span(),
        )

    def emit(self, record: logging.LogRecord) -> None:
        """Append the record to the buffer.

        Buffer failures are not routed to ``handleError``; a poisoned
        buffer raises to the logging call site.
        """
        self._buffer.append(self.to_event(record))
