"""
Character-level scanning helpers.

The parser never tokenizes. It walks the raw expression string directly and
narrows half-open (start, end) spans over that one backing string as it
recurses, so these helpers come in two flavours: span functions used by the
parser, and string conveniences built on top of them.
"""

import re

Span = tuple[int, int]

# Numeric literal, matched against a whole (trimmed) span
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_]+")


def trim_span(text: str, start: int = 0, end: int | None = None) -> Span:
    """Shrink a span past leading and trailing whitespace."""
    if end is None:
        end = len(text)
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    return start, end


def trim_whitespace(text: str) -> str:
    start, end = trim_span(text)
    return text[start:end]


def starts_with(haystack: str, needle: str, start: int = 0, end: int | None = None) -> bool:
    """Prefix test of needle against haystack[start:end]."""
    if end is None:
        end = len(haystack)
    return haystack.startswith(needle, start, end)


def valid_parens(text: str, start: int = 0, end: int | None = None) -> bool:
    """
    Check parenthesis balance over a span.

    The running depth may never go negative and must finish at zero.

    Examples:
        valid_parens("(1 + 2)")  → True
        valid_parens("()(")      → False
        valid_parens(")(")       → False
    """
    if end is None:
        end = len(text)
    depth = 0
    for pos in range(start, end):
        char = text[pos]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def simplify_span(text: str, start: int = 0, end: int | None = None) -> Span:
    """
    Strip whitespace and redundant enclosing parentheses until nothing changes.

    A pair is only removed when its interior is balanced on its own, so
    "((1+2))" becomes "1+2" while "(1)+(2)" is left alone.
    """
    start, end = trim_span(text, start, end)
    while end - start >= 2 and text[start] == "(" and text[end - 1] == ")":
        inner_start, inner_end = trim_span(text, start + 1, end - 1)
        if not valid_parens(text, inner_start, inner_end):
            break
        start, end = inner_start, inner_end
    return start, end


def simplify_parens(text: str) -> str:
    start, end = simplify_span(text)
    return text[start:end]


def is_identifier(text: str, start: int = 0, end: int | None = None) -> bool:
    """True when the span is a non-empty run of letters and underscores."""
    if end is None:
        end = len(text)
    return IDENTIFIER_PATTERN.fullmatch(text, start, end) is not None


def parse_number(text: str, start: int = 0, end: int | None = None) -> float | None:
    """Read the whole span as a floating-point literal, or return None."""
    if end is None:
        end = len(text)
    if NUMBER_PATTERN.fullmatch(text, start, end) is None:
        return None
    return float(text[start:end])
