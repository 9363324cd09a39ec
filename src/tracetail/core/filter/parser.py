"""Parser for filter text of the form ``target[span{field=value}]=level``.

A filter is a comma-separated list of clauses. Commas inside ``[...]`` or
inside double quotes belong to the clause. Empty clauses are ignored, so
blank text parses to the match-all filter.
"""

import re
from collections.abc import Iterator

from tracetail.core.errors import FilterParseError
from tracetail.core.filter.models import FilterClause, FilterExpression, SpanSelector
from tracetail.core.models import Level

_INVALID_NAME_CHAR = re.compile(r'[\[\]{}=,"\s]')

_LEVEL_SUFFIX = re.compile(r"=\s*(?P<level>\S*)")

_PREDICATE = re.compile(
    r'(?P<name>[^=\s"]+)\s*=\s*(?P<value>"(?:[^"\\]|\\.)*"|[^"=]*)'
)

_ESCAPE = re.compile(r"\\(.)")


def parse_filter(text: str) -> FilterExpression:
    """Parse filter text into a FilterExpression.

    Args:
        text: Filter text, e.g. ``db=warn,http[request{method=GET}]``.

    Returns:
        The parsed expression. Blank text gives the match-all expression.

    Raises:
        FilterParseError: If the text is malformed.
    """
    clauses = []
    for offset, raw in _split_clauses(text):
        if raw.strip():
            clauses.append(_parse_clause(raw, offset, text))
    return FilterExpression(clauses=tuple(clauses))


def _split_clauses(text: str) -> list[tuple[int, str]]:
    """Split at top-level commas, checking brackets, braces and quotes."""
    segments: list[tuple[int, str]] = []
    start = 0
    open_stack: list[tuple[str, int]] = []
    quote_at = -1
    escaped = False
    for pos, char in enumerate(text):
        if quote_at >= 0:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                quote_at = -1
            continue
        if char == '"':
            if not open_stack or open_stack[-1][0] != "{":
                raise FilterParseError("quote outside a field list", text, pos)
            quote_at = pos
        elif char == "[":
            if open_stack:
                raise FilterParseError("nested '['", text, pos)
            open_stack.append((char, pos))
        elif char == "{":
            if not open_stack or open_stack[-1][0] != "[":
                raise FilterParseError("'{' outside a span selector", text, pos)
            open_stack.append((char, pos))
        elif char in "]}":
            opener = "[" if char == "]" else "{"
            if not open_stack or open_stack[-1][0] != opener:
                raise FilterParseError(f"unexpected {char!r}", text, pos)
            open_stack.pop()
        elif char == "," and not open_stack:
            segments.append((start, text[start:pos]))
            start = pos + 1
    if quote_at >= 0:
        raise FilterParseError("unterminated quote", text, quote_at)
    if open_stack:
        opener, pos = open_stack[-1]
        raise FilterParseError(f"unclosed {opener!r}", text, pos)
    segments.append((start, text[start:]))
    return segments


def _unquoted(source: str) -> Iterator[tuple[int, str]]:
    """Yield (index, char) for characters outside double-quoted strings."""
    in_quote = False
    escaped = False
    for index, char in enumerate(source):
        if in_quote:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_quote = False
            continue
        if char == '"':
            in_quote = True
        yield index, char


def _find_unquoted(source: str, wanted: str) -> int:
    for index, char in _unquoted(source):
        if char == wanted:
            return index
    return -1


def _check_name(name: str, kind: str, text: str, position: int) -> None:
    bad = _INVALID_NAME_CHAR.search(name)
    if bad is not None:
        raise FilterParseError(
            f"invalid character {bad.group()!r} in {kind}", text, position + bad.start()
        )


def _parse_clause(raw: str, offset: int, text: str) -> FilterClause:
    base = offset + len(raw) - len(raw.lstrip())
    clause = raw.strip()

    selector = None
    open_at = clause.find("[")
    if open_at >= 0:
        close_at = open_at + 1 + _find_unquoted(clause[open_at + 1 :], "]")
        target = clause[:open_at].strip()
        selector = _parse_selector(
            clause[open_at + 1 : close_at], text, base + open_at + 1
        )
        rest_at = close_at + 1
    else:
        equals_at = clause.find("=")
        rest_at = equals_at if equals_at >= 0 else len(clause)
        target = clause[:rest_at].strip()
    _check_name(target, "target", text, base)

    min_level = None
    rest = clause[rest_at:].strip()
    if rest:
        suffix = _LEVEL_SUFFIX.fullmatch(rest)
        if suffix is None:
            raise FilterParseError("unexpected text after clause", text, base + rest_at)
        if not suffix.group("level"):
            raise FilterParseError("missing level after '='", text, base + rest_at)
        try:
            min_level = Level.parse(suffix.group("level"))
        except ValueError:
            raise FilterParseError(
                f"unknown level {suffix.group('level')!r}", text, base + rest_at + 1
            ) from None
    elif selector is None:
        try:
            # a lone level name applies to every target
            return FilterClause(min_level=Level.parse(target))
        except ValueError:
            pass

    return FilterClause(target=target, span=selector, min_level=min_level)


def _parse_selector(body: str, text: str, base: int) -> SpanSelector:
    fields: tuple[tuple[str, str], ...] = ()
    brace_at = body.find("{")
    if brace_at >= 0:
        close_at = brace_at + 1 + _find_unquoted(body[brace_at + 1 :], "}")
        if body[close_at + 1 :].strip():
            raise FilterParseError("unexpected text after '}'", text, base + close_at + 1)
        fields = _parse_predicates(
            body[brace_at + 1 : close_at], text, base + brace_at + 1
        )
        name = body[:brace_at].strip()
    else:
        name = body.strip()
    if not name and not fields:
        raise FilterParseError("empty span selector", text, base)
    _check_name(name, "span name", text, base)
    return SpanSelector(name=name or None, fields=fields)


def _parse_predicates(body: str, text: str, base: int) -> tuple[tuple[str, str], ...]:
    if not body.strip():
        raise FilterParseError("empty field list", text, base)

    parts: list[tuple[int, str]] = []
    start = 0
    for index, char in _unquoted(body):
        if char == ",":
            parts.append((start, body[start:index]))
            start = index + 1
    parts.append((start, body[start:]))

    predicates = []
    for offset, part in parts:
        position = base + offset
        match = _PREDICATE.fullmatch(part.strip())
        if match is None:
            reason = "empty field predicate" if not part.strip() else "expected field=value"
            raise FilterParseError(reason, text, position)
        value = match.group("value")
        if value.startswith('"'):
            value = _ESCAPE.sub(r"\1", value[1:-1])
        else:
            value = value.strip()
            if not value:
                raise FilterParseError("missing field value", text, position)
        predicates.append((match.group("name"), value))
    return tuple(predicates)
