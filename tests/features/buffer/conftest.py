"""BDD step definitions for event buffer features."""

from collections import deque
from dataclasses import dataclass

import pytest
from pytest_bdd import given, parsers, then, when

from tracetail.adapters.storage.ring_buffer import EventBuffer
from tracetail.adapters.view import EventLogView
from tracetail.core.errors import PoisonedBufferError
from tracetail.core.models import Event, Level, make_fields


@dataclass
class BufferScenarioContext:
    buffer: EventBuffer | None = None
    error: Exception | None = None


@pytest.fixture
def ctx() -> BufferScenarioContext:
    """Fresh scenario context for each test."""
    return BufferScenarioContext()


def _names(text: str) -> list[str]:
    return [name.strip() for name in text.split(",")]


def _event(name: str) -> Event:
    return Event(
        timestamp=1_700_000_000.0,
        level=Level.INFO,
        target="app",
        name=name,
        fields=make_fields({"message": name}),
    )


def _append(ctx: BufferScenarioContext, names: str) -> None:
    assert ctx.buffer is not None
    for name in _names(names):
        ctx.buffer.append(_event(name))


@given(parsers.parse("an event buffer with capacity {capacity:d}"))
def step_buffer(ctx: BufferScenarioContext, capacity: int) -> None:
    ctx.buffer = EventBuffer(capacity=capacity)


@given(parsers.parse("events {names} are appended"))
def step_given_events(ctx: BufferScenarioContext, names: str) -> None:
    _append(ctx, names)


@when(parsers.parse("events {names} are appended"))
def step_when_events(ctx: BufferScenarioContext, names: str) -> None:
    _append(ctx, names)


@when("a snapshot callback raises an error")
def step_failing_snapshot(ctx: BufferScenarioContext) -> None:
    assert ctx.buffer is not None

    def fail(events: deque[Event]) -> None:
        raise RuntimeError("consumer failed mid-pass")

    with pytest.raises(RuntimeError) as exc_info:
        ctx.buffer.with_snapshot(fail)
    ctx.error = exc_info.value


@then(parsers.parse("the buffer holds {names}"))
def step_buffer_holds(ctx: BufferScenarioContext, names: str) -> None:
    assert ctx.buffer is not None
    assert [e.name for e in ctx.buffer.events()] == _names(names)
    assert len(ctx.buffer) == ctx.buffer.capacity


@then(parsers.parse("a view shows {names}"))
def step_view_shows(ctx: BufferScenarioContext, names: str) -> None:
    assert ctx.buffer is not None
    visible = EventLogView(ctx.buffer).visible_events()
    assert [e.name for e in visible] == _names(names)


@then("appending another event fails with a poisoned buffer error")
def step_append_poisoned(ctx: BufferScenarioContext) -> None:
    assert ctx.buffer is not None
    with pytest.raises(PoisonedBufferError) as exc_info:
        ctx.buffer.append(_event("E"))
    assert exc_info.value.__cause__ is ctx.error


@then("taking a snapshot fails with a poisoned buffer error")
def step_snapshot_poisoned(ctx: BufferScenarioContext) -> None:
    assert ctx.buffer is not None
    with pytest.raises(PoisonedBufferError):
        with ctx.buffer.snapshot():
            pass
    with pytest.raises(PoisonedBufferError):
        ctx.buffer.with_snapshot(len)
    assert ctx.buffer.is_poisoned
