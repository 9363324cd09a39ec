"""Core domain models for recorded trace data."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType


class Level(IntEnum):
    """Ordered event severity.

    Values follow the standard library ``logging`` scale, so a larger value
    is more severe: ``ERROR > WARN > INFO > DEBUG > TRACE``.
    """

    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, text: str) -> Level:
        """Parse a case-insensitive level name.

        Args:
            text: Level name such as "warn", "WARNING" or "Info".

        Returns:
            The matching Level.

        Raises:
            ValueError: If the name is not a known level.
        """
        try:
            return _LEVEL_NAMES[text.strip().lower()]
        except KeyError:
            raise ValueError(f"unknown level {text!r}") from None

    @classmethod
    def from_logging(cls, levelno: int) -> Level:
        """Map a standard library logging level number to a Level."""
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        return cls.TRACE


_LEVEL_NAMES = {
    "trace": Level.TRACE,
    "debug": Level.DEBUG,
    "info": Level.INFO,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "error": Level.ERROR,
}


def _display(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class FieldValue:
    """All values recorded under one field name, in recording order.

    Values are kept as given and only rendered when asked for, so recording
    stays cheap on the producer side. A frozen field value refuses further
    recordings; events hold only frozen values.
    """

    __slots__ = ("_values", "_frozen")

    def __init__(self, *values: object) -> None:
        self._values: list[object] = list(values)
        self._frozen = False

    def record(self, value: object) -> None:
        """Append another recording of this field.

        Raises:
            TypeError: If the field value is frozen.
        """
        if self._frozen:
            raise TypeError("field value is frozen")
        self._values.append(value)

    def freeze(self) -> FieldValue:
        """Return a read-only copy holding the same recordings."""
        frozen = FieldValue(*self._values)
        frozen._frozen = True
        return frozen

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    @property
    def values(self) -> tuple[object, ...]:
        return tuple(self._values)

    def format(self) -> str:
        """Debug rendering of every recording, joined with ", "."""
        return ", ".join(repr(value) for value in self.values)

    def display(self) -> str:
        """Human rendering of every recording, joined with ", "."""
        return ", ".join(_display(value) for value in self.values)

    def matches(self, text: str) -> bool:
        """Return True if any recording displays exactly as ``text``."""
        return any(_display(value) == text for value in self.values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldValue):
            return NotImplemented
        return self.values == other.values

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"FieldValue({', '.join(repr(value) for value in self.values)})"


def make_fields(
    values: Mapping[str, object] | Iterable[tuple[str, object]],
) -> dict[str, FieldValue]:
    """Build an ordered field set from names and values.

    A name given more than once becomes a single multi-valued field. A
    FieldValue passed as a value is copied rather than shared.

    Args:
        values: Mapping or iterable of (name, value) pairs.

    Returns:
        Dictionary of field name to FieldValue, in first-seen order.
    """
    items = values.items() if isinstance(values, Mapping) else values
    fields: dict[str, FieldValue] = {}
    for name, value in items:
        recorded = value.values if isinstance(value, FieldValue) else (value,)
        if name in fields:
            for item in recorded:
                fields[name].record(item)
        else:
            fields[name] = FieldValue(*recorded)
    return fields


@dataclass(frozen=True, eq=False)
class Span:
    """A named execution context, linked to the span that was active around it.

    Spans compare by identity. Parents are shared: a span stays alive for as
    long as any child span or event refers to it.

    Attributes:
        target: Subsystem or module the span belongs to.
        name: Span name.
        fields: Ordered field set declared when the span was created.
        parent: The enclosing span, or None for a root span.
    """

    target: str
    name: str
    fields: Mapping[str, FieldValue] = field(default_factory=dict)
    parent: Span | None = None

    def ancestors(self) -> Iterator[Span]:
        """Yield this span, then each parent up to the root."""
        span: Span | None = self
        while span is not None:
            yield span
            span = span.parent

    def record(self, name: str, value: object) -> None:
        """Record another value for a field declared on this span.

        Raises:
            KeyError: If the span was created without that field.
        """
        try:
            self.fields[name].record(value)
        except KeyError:
            raise KeyError(
                f"field {name!r} was not declared on span {self.name!r}"
            ) from None


@dataclass(frozen=True, eq=False)
class Event:
    """A single recorded occurrence.

    Attributes:
        timestamp: Unix timestamp in seconds.
        level: Event severity.
        target: Subsystem or module that emitted the event.
        name: Event name.
        fields: Ordered field set; the human message lives under "message".
        span: The span that was active when the event was emitted.
    """

    timestamp: float
    level: Level
    target: str
    name: str
    fields: Mapping[str, FieldValue] = field(default_factory=dict)
    span: Span | None = None

    def __post_init__(self) -> None:
        # field values are read-only for the lifetime of the event
        sealed = {name: value.freeze() for name, value in self.fields.items()}
        object.__setattr__(self, "fields", MappingProxyType(sealed))

    @property
    def message(self) -> str | None:
        value = self.fields.get("message")
        return value.display() if value is not None else None

    def get_field(self, name: str) -> FieldValue | None:
        return self.fields.get(name)

    def span_chain(self) -> Iterator[Span]:
        """Yield the event's span and its ancestors, innermost first."""
        if self.span is not None:
            yield from self.span.ancestors()
