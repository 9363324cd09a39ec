"""Tests for the plain-text event encoder."""

from datetime import datetime

import pytest

from tracetail.core.encoding.text import (
    encode_events,
    format_event_details,
    format_event_line,
    format_timestamp,
)
from tracetail.core.models import Event, Level, Span, make_fields


def _timestamp(hour: int, minute: int, second: int, micro: int) -> float:
    return datetime(2024, 1, 2, hour, minute, second, micro).timestamp()


class TestFormatTimestamp:
    """Tests for format_timestamp()."""

    @pytest.mark.encoding
    def test_renders_milliseconds(self) -> None:
        assert format_timestamp(_timestamp(9, 5, 7, 123_456)) == "09:05:07.123"

    @pytest.mark.encoding
    def test_pads_milliseconds(self) -> None:
        assert format_timestamp(_timestamp(23, 59, 59, 4_000)) == "23:59:59.004"


class TestFormatEventLine:
    """Tests for format_event_line()."""

    @pytest.mark.encoding
    def test_line_with_message(self) -> None:
        event = Event(
            timestamp=_timestamp(12, 0, 0, 0),
            level=Level.WARN,
            target="db",
            name="event",
            fields=make_fields({"message": "slow query", "ms": 950}),
        )

        assert format_event_line(event) == "[12:00:00.000] [WARN] slow query"

    @pytest.mark.encoding
    def test_line_without_message(self) -> None:
        event = Event(
            timestamp=_timestamp(12, 0, 0, 0), level=Level.INFO, target="db", name="event"
        )

        assert format_event_line(event) == "[12:00:00.000] [INFO]"

    @pytest.mark.encoding
    def test_multi_valued_message_joined(self) -> None:
        event = Event(
            timestamp=_timestamp(12, 0, 0, 0),
            level=Level.INFO,
            target="db",
            name="event",
            fields=make_fields([("message", "a"), ("message", "b")]),
        )

        assert format_event_line(event).endswith("] a, b")


class TestFormatEventDetails:
    """Tests for format_event_details()."""

    @pytest.mark.encoding
    def test_details_list_fields_then_spans(self) -> None:
        root = Span(target="http", name="server", fields=make_fields({"port": 80}))
        child = Span(
            target="http", name="request", fields=make_fields({"method": "GET"}), parent=root
        )
        event = Event(
            timestamp=0.0,
            level=Level.INFO,
            target="db.pool",
            name="event app.py:10",
            fields=make_fields([("rows", 1), ("rows", 2)]),
            span=child,
        )

        assert format_event_details(event) == [
            "db.pool event app.py:10",
            "  rows: 1, 2",
            "http::request",
            "  method: 'GET'",
            "http::server",
            "  port: 80",
        ]


class TestEncodeEvents:
    """Tests for encode_events()."""

    @pytest.mark.encoding
    def test_empty_input_gives_empty_string(self) -> None:
        assert encode_events([]) == ""

    @pytest.mark.encoding
    def test_one_line_per_event(self) -> None:
        events = [
            Event(timestamp=0.0, level=Level.INFO, target="a", name="event"),
            Event(timestamp=0.0, level=Level.ERROR, target="b", name="event"),
        ]

        result = encode_events(events)

        assert result.count("\n") == 2
        assert result.endswith("\n")
        assert "[ERROR]" in result.splitlines()[1]
