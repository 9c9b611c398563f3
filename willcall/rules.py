"""
Deterministic will-call formatting rules.

This file exists to make the output contract explicit and enforceable.
"""

OUTPUT_HEADER = "Last,First,Qty,Source,Tickets"
LINE_TERMINATOR = "\n"

RESERVED_SOURCE = "(Reserved)"  # extra rows always carry this label
TICKET_RANGE_SEPARATOR = ".."
TICKET_TRUNCATED_SUFFIX = ",..."

BPT_SOURCE = "BPT"
BPT_SEASON_SOURCE = "BPT Season"
GOLDSTAR_SOURCE = "GoldStar"
GROUPON_SOURCE = "Groupon"
GROUPON_SEASON_SOURCE = "Groupon Season"

GROUPON_ROW_PREFIX = "LG"
GROUPON_PURCHASED_MARKER = "Purchased"
