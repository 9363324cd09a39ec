"""Filter language for selecting trace events."""

from tracetail.core.filter.engine import (
    clause_matches,
    excludes,
    filter_events,
    includes,
    span_matches,
)
from tracetail.core.filter.models import FilterClause, FilterExpression, SpanSelector
from tracetail.core.filter.parser import parse_filter

__all__ = [
    "FilterClause",
    "FilterExpression",
    "SpanSelector",
    "clause_matches",
    "excludes",
    "filter_events",
    "includes",
    "parse_filter",
    "span_matches",
]
