from __future__ import annotations

from typing import List, Optional, Tuple
from pydantic import BaseModel, Field


class AttendeeRecord(BaseModel):
    last_name: str = ""
    first_name: str = ""
    quantity: int = Field(default=1, ge=1)
    source: str = ""
    ticket_ids: List[str] = Field(default_factory=list)

    @property
    def identity(self) -> Tuple[str, str]:
        return (self.last_name, self.first_name)


class WillCallCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content: str


class SourceReport(BaseModel):
    key: str
    source: str
    filename: Optional[str] = None
    encoding: Optional[str] = None
    lines: int = 0
    rows: int = 0


class ReportSummary(BaseModel):
    input_rows: int = 0
    merged_rows: int = 0
    total_quantity: int = 0
    warnings: int = 0


class ReportItem(BaseModel):
    source: Optional[str] = None
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class WillCallReport(BaseModel):
    summary: ReportSummary
    sources: List[SourceReport] = Field(default_factory=list)
    warnings: List[ReportItem] = Field(default_factory=list)


class WillCallResponse(BaseModel):
    will_call_csv: WillCallCsv
    report: WillCallReport

class HealthResponse(BaseModel):
    ok: bool = True
