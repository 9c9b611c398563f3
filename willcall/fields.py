"""Raw-line field helpers shared by the vendor classifiers and extractors."""

from __future__ import annotations

import re
from typing import List, Optional

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_QUOTED_SPAN_RE = re.compile(r'"[^"]*"')


def split_fields(line: str) -> List[str]:
    return line.split(",")


def field_at(fields: List[str], index: int) -> str:
    """Return fields[index], or "" when the row is too short."""
    if index < len(fields):
        return fields[index]
    return ""


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """
    Parse the integer at the start of value.

    Leading whitespace and a sign are allowed and trailing characters are
    ignored, so "101abc" -> 101 while "abc" and "" -> None.
    """
    if value is None:
        return None
    m = _LEADING_INT_RE.match(value)
    if m is None:
        return None
    return int(m.group(1))


def strip_quoted_commas(line: str) -> str:
    """Drop the commas inside the first double-quoted span of the line."""
    return _QUOTED_SPAN_RE.sub(lambda m: m.group(0).replace(",", ""), line, count=1)
