"""Active span tracking and span chain traversal.

The active span is stored in a ContextVar, so every thread and asyncio task
sees its own nesting. Entering a span makes it a child of whatever span is
active at that point.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

from tracetail.core.models import FieldValue, Span, make_fields

_current_span: ContextVar[Span | None] = ContextVar(
    "tracetail_current_span", default=None
)


def current_span() -> Span | None:
    """Return the span active in the current context, if any."""
    return _current_span.get()


@contextmanager
def span(target: str, name: str, **fields: object) -> Iterator[Span]:
    """Context manager that enters a new span for the duration of the block.

    Args:
        target: Subsystem or module the span belongs to.
        name: Span name.
        **fields: Fields declared on the span.

    Yields:
        The new span, already active.
    """
    entered = Span(
        target=target,
        name=name,
        fields=make_fields(fields),
        parent=_current_span.get(),
    )
    token = _current_span.set(entered)
    try:
        yield entered
    finally:
        _current_span.reset(token)


def ancestors(start: Span | None) -> Iterator[Span]:
    """Yield ``start`` and each of its parents, innermost first.

    Each call walks the chain afresh. ``ancestors(None)`` yields nothing.
    """
    if start is not None:
        yield from start.ancestors()


def fields(target_span: Span) -> list[tuple[str, FieldValue]]:
    """Return the span's own fields in declaration order."""
    return list(target_span.fields.items())
