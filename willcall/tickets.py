"""Compact display of a record's ticket numbers."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .fields import parse_leading_int
from .rules import TICKET_RANGE_SEPARATOR, TICKET_TRUNCATED_SUFFIX


def _numeric_range(ticket_ids: Sequence[str]) -> Optional[str]:
    numbers: List[int] = []
    for ticket in ticket_ids:
        parsed = parse_leading_int(ticket)
        if parsed is None:
            return None
        numbers.append(parsed)

    numbers.sort()
    if len(numbers) == 1:
        return str(numbers[0])

    for prev, cur in zip(numbers, numbers[1:]):
        if cur != prev + 1:
            return None

    first = str(numbers[0])
    last = str(numbers[-1])

    diverge = 0
    while diverge < min(len(first), len(last)) and first[diverge] == last[diverge]:
        diverge += 1

    # keep one shared digit so "1001..1007" reads "1001..07"
    return first + TICKET_RANGE_SEPARATOR + last[max(diverge - 1, 0):]


def render_ticket_range(ticket_ids: Sequence[str]) -> str:
    """
    Render ticket ids as the shortest readable form.

    Consecutive numbers collapse to a prefix range ("1001..03"); anything
    else shows the first id followed by ",...". Human-readable only, the
    full set cannot be recovered from the output.
    """
    if not ticket_ids:
        return ""

    rendered = _numeric_range(ticket_ids)
    if rendered is not None:
        return rendered

    if len(ticket_ids) > 1:
        return ticket_ids[0] + TICKET_TRUNCATED_SUFFIX
    return ticket_ids[0]
