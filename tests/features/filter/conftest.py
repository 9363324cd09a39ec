"""BDD step definitions for filter matching features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from tracetail.adapters.storage.ring_buffer import EventBuffer
from tracetail.adapters.view import EventLogView
from tracetail.core.models import Event, Level, Span, make_fields


@dataclass
class FilterScenarioContext:
    """State shared between the steps of one scenario."""

    buffer: EventBuffer = field(default_factory=lambda: EventBuffer(capacity=10))
    spans: dict[str, Span] = field(default_factory=dict)
    event: Event | None = None
    view: EventLogView | None = None


@pytest.fixture
def ctx() -> FilterScenarioContext:
    """Fresh scenario context for each test."""
    return FilterScenarioContext()


def _add_event(
    ctx: FilterScenarioContext, target: str, level: str, span: Span | None
) -> None:
    ctx.event = Event(
        timestamp=1_700_000_000.0,
        level=Level.parse(level),
        target=target,
        name="event",
        fields=make_fields({"message": "scenario event"}),
        span=span,
    )
    ctx.buffer.append(ctx.event)


# === Given Steps ===
@given("the span chain server{port=8080} > request{method=GET} > query{table=users}")
def step_span_chain(ctx: FilterScenarioContext) -> None:
    server = Span("http", "server", make_fields({"port": 8080}))
    request = Span("http", "request", make_fields({"method": "GET"}), server)
    query = Span("db.pool", "query", make_fields({"table": "users"}), request)
    ctx.spans = {"server": server, "request": request, "query": query}


@given(
    parsers.re(
        r'an event with target "(?P<target>[^"]*)" at level (?P<level>\w+)'
        r" inside the (?P<span_name>\w+) span$"
    )
)
def step_event_in_span(
    ctx: FilterScenarioContext, target: str, level: str, span_name: str
) -> None:
    _add_event(ctx, target, level, ctx.spans[span_name])


@given(parsers.re(r'an event with target "(?P<target>[^"]*)" at level (?P<level>\w+)$'))
def step_event(ctx: FilterScenarioContext, target: str, level: str) -> None:
    _add_event(ctx, target, level, None)


# === When Steps ===
@when(parsers.re(r'the filter text is "(?P<text>[^"]*)"$'))
def step_filter_text(ctx: FilterScenarioContext, text: str) -> None:
    ctx.view = EventLogView(ctx.buffer, text)


# === Then Steps ===
@then("the event is shown")
def step_event_shown(ctx: FilterScenarioContext) -> None:
    assert ctx.view is not None
    assert ctx.view.visible_events() == [ctx.event]


@then("the event is hidden")
def step_event_hidden(ctx: FilterScenarioContext) -> None:
    assert ctx.view is not None
    assert ctx.view.visible_events() == []


@then("the filter is valid")
def step_filter_valid(ctx: FilterScenarioContext) -> None:
    assert ctx.view is not None
    assert ctx.view.filter_state.is_valid


@then(parsers.parse("the filter is invalid at position {position:d}"))
def step_filter_invalid(ctx: FilterScenarioContext, position: int) -> None:
    assert ctx.view is not None
    state = ctx.view.filter_state
    assert not state.is_valid
    assert state.error is not None
    assert state.error.position == position
