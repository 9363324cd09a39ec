"""Evaluation of filter expressions against events."""

from collections.abc import Iterable, Iterator

from tracetail.core.filter.models import FilterClause, FilterExpression, SpanSelector
from tracetail.core.models import Event, Span


def span_matches(selector: SpanSelector, span: Span) -> bool:
    """Return True if the span's name and its own fields satisfy ``selector``."""
    if selector.name is not None and span.name != selector.name:
        return False
    for name, expected in selector.fields:
        value = span.fields.get(name)
        if value is None or not value.matches(expected):
            return False
    return True


def clause_matches(clause: FilterClause, event: Event) -> bool:
    """Return True if every part present in ``clause`` holds for ``event``."""
    if not event.target.startswith(clause.target):
        return False
    if clause.min_level is not None and event.level < clause.min_level:
        return False
    if clause.span is not None:
        selector = clause.span
        return any(span_matches(selector, span) for span in event.span_chain())
    return True


def includes(expression: FilterExpression, event: Event) -> bool:
    """Return True if the event should be shown.

    An event is shown when any clause matches it. The empty expression
    shows everything.
    """
    if not expression.clauses:
        return True
    return any(clause_matches(clause, event) for clause in expression.clauses)


def excludes(expression: FilterExpression, event: Event) -> bool:
    """Return True if the event should be hidden."""
    return not includes(expression, event)


def filter_events(
    expression: FilterExpression, events: Iterable[Event]
) -> Iterator[Event]:
    """Lazily yield the events that ``expression`` includes."""
    return (event for event in events if includes(expression, event))
