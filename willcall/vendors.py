"""
Per-vendor row classification and extraction.

Each box office exports its own CSV dialect with no reliable header marker,
so data rows are picked out heuristically, one raw line at a time. A vendor
is a (classify, extract) pair registered under a tag in VENDORS; adding a
vendor means adding a pair, the merge and serialize steps never change.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import structlog

from .fields import field_at, parse_leading_int, split_fields, strip_quoted_commas
from .models import AttendeeRecord
from .names import to_proper_name_case
from .rules import (
    BPT_SOURCE,
    GOLDSTAR_SOURCE,
    GROUPON_PURCHASED_MARKER,
    GROUPON_ROW_PREFIX,
    GROUPON_SOURCE,
    RESERVED_SOURCE,
)

logger = structlog.get_logger()


class UnknownVendorError(KeyError):
    """Raised when a vendor tag has no registered format."""


@dataclass(frozen=True)
class VendorFormat:
    tag: str
    classify: Callable[[str], bool]
    extract: Callable[[str, str], AttendeeRecord]
    source: str
    # columns a well-formed data row carries; shorter rows still extract, with gaps
    min_fields: int = 0
    # explains why a near-miss line was rejected; None means "not worth reporting"
    reject_reason: Optional[Callable[[str], Optional[str]]] = None


# --- Classifiers ---

def is_bpt_row(line: str) -> bool:
    # first field is the ticket serial number
    return parse_leading_int(field_at(split_fields(line), 0)) is not None


def is_goldstar_row(line: str) -> bool:
    # fourth field is the quantity column; a row for zero tickets seats nobody
    qty = parse_leading_int(field_at(split_fields(line), 3))
    return qty is not None and qty >= 1


def goldstar_reject_reason(line: str) -> Optional[str]:
    qty = parse_leading_int(field_at(split_fields(line), 3))
    if qty is not None and qty < 1:
        return "non_positive_quantity"
    return None


def is_groupon_row(line: str) -> bool:
    return line.startswith(GROUPON_ROW_PREFIX)


def is_purchased_groupon_row(line: str) -> bool:
    """Stricter Groupon test: an LG row whose voucher status says Purchased."""
    if not is_groupon_row(line):
        return False
    return GROUPON_PURCHASED_MARKER in strip_quoted_commas(line)


def groupon_reject_reason(line: str) -> Optional[str]:
    if is_groupon_row(line) and not is_purchased_groupon_row(line):
        return "not_purchased"
    return None


def is_extra_row(line: str) -> bool:
    return "," in line


# --- Extractors ---

def extract_bpt_row(line: str, source: str = BPT_SOURCE) -> AttendeeRecord:
    fields = split_fields(line)
    return AttendeeRecord(
        last_name=to_proper_name_case(field_at(fields, 1)),
        first_name=to_proper_name_case(field_at(fields, 2)),
        quantity=1,
        source=source,
        ticket_ids=[field_at(fields, 0)],
    )


def extract_goldstar_row(line: str, source: str = GOLDSTAR_SOURCE) -> AttendeeRecord:
    fields = split_fields(line)
    return AttendeeRecord(
        last_name=to_proper_name_case(field_at(fields, 1)),
        first_name=to_proper_name_case(field_at(fields, 2)),
        quantity=parse_leading_int(field_at(fields, 3)),
        source=source,
        ticket_ids=[field_at(fields, 7)],
    )


def extract_groupon_row(line: str, source: str = GROUPON_SOURCE) -> AttendeeRecord:
    """
    Groupon puts the whole customer name in one column.

    The last whitespace-delimited token is taken as the last name and the
    rest, joined by single spaces, as the first name.
    """
    fields = split_fields(strip_quoted_commas(line))
    # the name column may arrive quoted ("doe, jane"); the quotes are not part of the name
    name = to_proper_name_case(field_at(fields, 1).strip().strip('"').strip())
    parts = name.split() or [""]
    return AttendeeRecord(
        last_name=parts[-1],
        first_name=" ".join(parts[:-1]),
        quantity=1,
        source=source,
        ticket_ids=[field_at(fields, 0)],
    )


def extract_extra_row(line: str, source: str = RESERVED_SOURCE) -> AttendeeRecord:
    """Manual entries: last,first,qty,source,ticket. The source column is ignored."""
    fields = split_fields(line)
    raw_qty = field_at(fields, 2)
    qty = parse_leading_int(raw_qty)
    if qty is None or qty < 1:
        logger.warning("extra_row_bad_quantity", value=raw_qty, action="defaulted_to_1")
        qty = 1
    return AttendeeRecord(
        last_name=field_at(fields, 0),
        first_name=field_at(fields, 1),
        quantity=qty,
        source=RESERVED_SOURCE,
        ticket_ids=[field_at(fields, 4)],
    )


VENDORS: Dict[str, VendorFormat] = {
    "bpt": VendorFormat("bpt", is_bpt_row, extract_bpt_row, BPT_SOURCE, min_fields=3),
    "goldstar": VendorFormat(
        "goldstar",
        is_goldstar_row,
        extract_goldstar_row,
        GOLDSTAR_SOURCE,
        min_fields=8,
        reject_reason=goldstar_reject_reason,
    ),
    "groupon": VendorFormat(
        "groupon",
        is_purchased_groupon_row,
        extract_groupon_row,
        GROUPON_SOURCE,
        min_fields=2,
        reject_reason=groupon_reject_reason,
    ),
    "extra": VendorFormat("extra", is_extra_row, extract_extra_row, RESERVED_SOURCE, min_fields=5),
}


def get_vendor(tag: str, groupon_require_purchased: bool = True) -> VendorFormat:
    """
    Look up a vendor format and apply strategy flags.

    groupon_require_purchased=False falls back to the plain "starts with LG"
    test, accepting vouchers that were not yet purchased.
    """
    try:
        vendor = VENDORS[tag]
    except KeyError:
        raise UnknownVendorError(tag) from None

    if tag == "groupon" and not groupon_require_purchased:
        vendor = dataclasses.replace(vendor, classify=is_groupon_row, reject_reason=None)
    return vendor
