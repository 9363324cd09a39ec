"""Parsed filter expressions."""

from dataclasses import dataclass

from tracetail.core.models import Level

_LEVEL_WORDS = {"trace", "debug", "info", "warn", "warning", "error"}


@dataclass(frozen=True)
class SpanSelector:
    """Selects a span by name and field values.

    Attributes:
        name: Required span name, or None to accept any name.
        fields: (field name, expected value) pairs that must all hold on the
            span's own fields.
    """

    name: str | None = None
    fields: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        text = self.name or ""
        if self.fields:
            predicates = ",".join(
                f"{name}={_quote(value)}" for name, value in self.fields
            )
            text += "{" + predicates + "}"
        return text


@dataclass(frozen=True)
class FilterClause:
    """One comma-separated part of a filter.

    Attributes:
        target: Prefix the event target must start with ("" matches all).
        span: Span selector that some span in the event's chain must satisfy.
        min_level: Least severe level that passes, or None for all levels.
    """

    target: str = ""
    span: SpanSelector | None = None
    min_level: Level | None = None

    def __str__(self) -> str:
        text = self.target
        if self.span is not None:
            text += f"[{self.span}]"
        level = self.min_level
        if level is None and text.lower() in _LEVEL_WORDS:
            # a bare level word would read back as a level-only clause
            level = Level.TRACE
        if level is not None:
            text = f"{text}={level.name.lower()}" if text else level.name.lower()
        return text


@dataclass(frozen=True)
class FilterExpression:
    """An immutable set of clauses; an event passes if any clause matches.

    The empty expression matches every event.
    """

    clauses: tuple[FilterClause, ...] = ()

    @classmethod
    def match_all(cls) -> "FilterExpression":
        return cls()

    @property
    def is_match_all(self) -> bool:
        return not self.clauses

    def __str__(self) -> str:
        return ",".join(str(clause) for clause in self.clauses)


def _quote(value: str) -> str:
    if value and not any(char in value for char in ' ,={}[]"\\'):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
