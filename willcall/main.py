from typing import Dict, Optional

from fastapi import FastAPI, UploadFile, File, HTTPException
from .config import GROUPON_REQUIRE_PURCHASED, LOG_LEVEL, OUTPUT_ENCODING
from .logging_config import configure
from .models import WillCallResponse, HealthResponse
from .pipeline import Export, build_will_call, will_call_csv

configure(LOG_LEVEL)

app = FastAPI(
    title="willcall",
    description="Consolidated will-call lists from box-office ticket exports",
    version="0.1.0",
)


async def _read_export(upload: Optional[UploadFile]) -> Optional[Export]:
    if upload is None:
        return None
    if not upload.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail=f"Only CSV files are supported: {upload.filename}")

    raw = await upload.read()
    return Export.from_bytes(raw, filename=upload.filename)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/will-call", response_model=WillCallResponse)
async def will_call(
    bpt: UploadFile = File(...),
    gs: UploadFile = File(...),
    groupon: UploadFile = File(...),
    bpt_season: Optional[UploadFile] = File(None),
    groupon_season: Optional[UploadFile] = File(None),
    extra: Optional[UploadFile] = File(None),
    groupon_require_purchased: bool = GROUPON_REQUIRE_PURCHASED,
):
    uploads = {
        "bpt": bpt,
        "gs": gs,
        "groupon": groupon,
        "bpt_season": bpt_season,
        "groupon_season": groupon_season,
        "extra": extra,
    }
    exports: Dict[str, Optional[Export]] = {}
    for key, upload in uploads.items():
        exports[key] = await _read_export(upload)

    records, report = build_will_call(exports, groupon_require_purchased=groupon_require_purchased)
    return WillCallResponse(
        will_call_csv=will_call_csv(records, encoding=OUTPUT_ENCODING),
        report=report,
    )
