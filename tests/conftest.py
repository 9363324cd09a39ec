"""Shared test fixtures for all test modules."""

from collections.abc import Callable

import pytest

from tracetail.adapters.storage.ring_buffer import EventBuffer
from tracetail.core.models import Event, Level, Span, make_fields

EventFactory = Callable[..., Event]


@pytest.fixture
def small_buffer() -> EventBuffer:
    """Provide an empty buffer holding at most three events."""
    return EventBuffer(capacity=3)


@pytest.fixture
def make_event() -> EventFactory:
    """Factory fixture for creating events with sensible defaults.

    Usage:
        def test_something(make_event):
            event = make_event(target="db.pool", level=Level.WARN, id=7)
    """
    counter = iter(range(1_000_000))

    def _event(
        target: str = "app",
        level: Level = Level.INFO,
        message: str | None = None,
        span: Span | None = None,
        name: str = "event",
        **fields: object,
    ) -> Event:
        values: dict[str, object] = {}
        if message is not None:
            values["message"] = message
        values.update(fields)
        return Event(
            timestamp=1_700_000_000.0 + next(counter),
            level=level,
            target=target,
            name=name,
            fields=make_fields(values),
            span=span,
        )

    return _event


@pytest.fixture
def request_spans() -> tuple[Span, Span, Span]:
    """A three-level span chain: server -> request{method=GET} -> query{table=users}.

    Returns the spans root first.
    """
    server = Span(target="http", name="server", fields=make_fields({"port": 8080}))
    request = Span(
        target="http",
        name="request",
        fields=make_fields({"method": "GET", "path": "/users"}),
        parent=server,
    )
    query = Span(
        target="db.pool",
        name="query",
        fields=make_fields({"table": "users"}),
        parent=request,
    )
    return server, request, query
