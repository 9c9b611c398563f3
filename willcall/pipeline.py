"""
Will-call list assembly.

Responsibilities:
- export decoding (encoding detection, BOM handling)
- per-source row classification + extraction
- merging duplicate attendees
- CSV serialization
- warning collection for the report
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

import structlog
from charset_normalizer import from_bytes

from .fields import split_fields
from .merge import merge_all
from .models import (
    AttendeeRecord,
    ReportItem,
    ReportSummary,
    SourceReport,
    WillCallCsv,
    WillCallReport,
)
from .rules import (
    BPT_SEASON_SOURCE,
    BPT_SOURCE,
    GOLDSTAR_SOURCE,
    GROUPON_SEASON_SOURCE,
    GROUPON_SOURCE,
    LINE_TERMINATOR,
    OUTPUT_HEADER,
    RESERVED_SOURCE,
)
from .tickets import render_ticket_range
from .vendors import VendorFormat, get_vendor

logger = structlog.get_logger()

_LINE_SPLIT_RE = re.compile(r"\r?\n")


class MissingExportError(ValueError):
    """A required vendor export was not supplied."""


@dataclass(frozen=True)
class SourceSpec:
    key: str
    vendor: str
    source: str
    required: bool


# Records are concatenated in this order before merging.
SOURCES: Tuple[SourceSpec, ...] = (
    SourceSpec("bpt", "bpt", BPT_SOURCE, True),
    SourceSpec("gs", "goldstar", GOLDSTAR_SOURCE, True),
    SourceSpec("groupon", "groupon", GROUPON_SOURCE, True),
    SourceSpec("bpt_season", "bpt", BPT_SEASON_SOURCE, False),
    SourceSpec("groupon_season", "groupon", GROUPON_SEASON_SOURCE, False),
    SourceSpec("extra", "extra", RESERVED_SOURCE, False),
)


@dataclass
class Export:
    """One vendor file, already decoded to text."""

    text: str
    filename: Optional[str] = None
    encoding: Optional[str] = None

    @classmethod
    def from_bytes(cls, raw: bytes, filename: Optional[str] = None) -> "Export":
        text, encoding = decode_export(raw)
        return cls(text=text, filename=filename, encoding=encoding)


def decode_export(raw: bytes) -> Tuple[str, str]:
    """
    Decode a vendor export to text.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed rather than left on the first field.
    - If decode fails, fall back to UTF-8, then UTF-8 with replacement characters.

    Returns (text, encoding actually used).
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(b"\xef\xbb\xbf") and (decode_used.lower().replace("-", "_") in ("utf_8", "utf8")):
        decode_used = "utf-8-sig"

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            logger.warning("export_decode_fallback", encoding=decode_used)
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    return text, decode_used


def split_lines(text: str) -> List[str]:
    return _LINE_SPLIT_RE.split(text)


def read_records(
    text: str,
    vendor: VendorFormat,
    source: Optional[str] = None,
    warnings: Optional[List[ReportItem]] = None,
) -> List[AttendeeRecord]:
    """
    Classify every line of text and extract the vendor's data rows.

    Rows that fail classification are skipped; near misses the vendor can
    explain, and short rows that extract with gaps, are logged and appended
    to warnings when a list is given.
    """
    source = source or vendor.source
    records: List[AttendeeRecord] = []

    for i, line in enumerate(split_lines(text)):
        if not vendor.classify(line):
            reason = vendor.reject_reason(line) if vendor.reject_reason else None
            if reason is not None:
                logger.warning("row_rejected", source=source, row=i + 1, reason=reason)
                if warnings is not None:
                    warnings.append(ReportItem(
                        source=source,
                        row=i + 1,
                        issue=reason,
                        value=line,
                        action="skipped",
                    ))
            continue

        width = len(split_fields(line))
        if width < vendor.min_fields:
            logger.warning("row_missing_fields", source=source, row=i + 1, fields=width)
            if warnings is not None:
                warnings.append(ReportItem(
                    source=source,
                    row=i + 1,
                    issue="row_too_short",
                    value=str(width),
                    action="missing_fields_left_empty",
                ))

        records.append(vendor.extract(line, source))

    return records


def build_will_call(
    exports: Mapping[str, Optional[Export]],
    groupon_require_purchased: bool = True,
) -> Tuple[List[AttendeeRecord], WillCallReport]:
    """
    Read every configured source in order, merge, and report.

    exports maps a source key (see SOURCES) to its Export, or None when the
    optional file was not supplied. A missing required export raises
    MissingExportError.
    """
    rows: List[AttendeeRecord] = []
    sources: List[SourceReport] = []
    warnings: List[ReportItem] = []

    for spec in SOURCES:
        export = exports.get(spec.key)
        if export is None:
            if spec.required:
                raise MissingExportError(f"Missing required export: {spec.key}")
            logger.info("source_skipped", key=spec.key, source=spec.source)
            continue

        vendor = get_vendor(spec.vendor, groupon_require_purchased=groupon_require_purchased)
        records = read_records(export.text, vendor, spec.source, warnings)
        logger.info("source_read", key=spec.key, source=spec.source, rows=len(records))

        sources.append(SourceReport(
            key=spec.key,
            source=spec.source,
            filename=export.filename,
            encoding=export.encoding,
            lines=len(split_lines(export.text)),
            rows=len(records),
        ))
        rows.extend(records)

    merged = merge_all(rows)
    logger.info("will_call_built", input_rows=len(rows), merged_rows=len(merged))

    report = WillCallReport(
        summary=ReportSummary(
            input_rows=len(rows),
            merged_rows=len(merged),
            total_quantity=sum(r.quantity for r in merged),
            warnings=len(warnings),
        ),
        sources=sources,
        warnings=warnings,
    )
    return merged, report


def format_record(record: AttendeeRecord) -> str:
    return (
        f'"{record.last_name}","{record.first_name}",{record.quantity},'
        f'"{record.source}","{render_ticket_range(record.ticket_ids)}"'
    )


def render_will_call_csv(records: List[AttendeeRecord]) -> str:
    out = OUTPUT_HEADER + LINE_TERMINATOR
    for record in records:
        out += format_record(record) + LINE_TERMINATOR
    return out


def will_call_csv(records: List[AttendeeRecord], encoding: str = "utf-8") -> WillCallCsv:
    content = render_will_call_csv(records)
    return WillCallCsv(
        sha256=hashlib.sha256(content.encode(encoding)).hexdigest(),
        encoding=encoding,
        content=content,
    )
