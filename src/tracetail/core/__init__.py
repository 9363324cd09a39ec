"""Core domain: events, spans, filters and ports."""
