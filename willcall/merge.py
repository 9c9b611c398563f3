"""
Collapse duplicate attendees into one row each.

Records are sorted on last name only and then merged with their immediate
neighbour. Two rows for the same person only merge when nothing with the
same last name but a different first name sorts between them; this mirrors
how the lists have always been produced and is covered by a test.
"""

from __future__ import annotations

import unicodedata
from typing import Iterable, List, Optional

from .models import AttendeeRecord


def last_name_sort_key(last_name: str) -> str:
    """Case- and accent-insensitive key, "Émile" and "emile" compare equal."""
    decomposed = unicodedata.normalize("NFKD", last_name or "")
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


def merge_records(current: AttendeeRecord, other: AttendeeRecord) -> Optional[AttendeeRecord]:
    """
    Return a new record combining current and other, or None if they are
    different people. Neither input is modified.
    """
    if current.identity != other.identity:
        return None
    return current.model_copy(
        update={
            "quantity": current.quantity + other.quantity,
            "ticket_ids": current.ticket_ids + other.ticket_ids,
        }
    )


def merge_all(records: Iterable[AttendeeRecord]) -> List[AttendeeRecord]:
    ordered = sorted(records, key=lambda r: last_name_sort_key(r.last_name))

    merged: List[AttendeeRecord] = []
    current: Optional[AttendeeRecord] = None
    for record in ordered:
        if current is None:
            current = record
            continue
        combined = merge_records(current, record)
        if combined is None:
            merged.append(current)
            current = record
        else:
            current = combined

    if current is not None:
        merged.append(current)
    return merged
