from datetime import date
from typing import Optional

from fastapi import Depends, FastAPI, File, HTTPException, Query, UploadFile

from .aggregate import aggregate_totals, daily_breakdown, gender_totals, rank_by_origin, rank_by_state
from .config import Settings, configure_logging, get_settings
from .entries import VisitorEntry, build_sheet_payload
from .filters import apply_filters, resolve_target_date
from .headers import HeaderResolver
from .models import (
    Breakdowns,
    DashboardResponse,
    EntryPayload,
    FilterCriteria,
    HealthResponse,
    RecordsResponse,
)
from .normalize import RowSourceError, load_rows, normalize_rows
from .occupancy import compute_occupancy

configure_logging(get_settings().log_level)

app = FastAPI(
    title="visitorlog",
    description="Normalization, totals and room occupancy for visitor-log sheets",
    version="0.1.0",
)


async def _read_rows(file: UploadFile):
    filename = (file.filename or "").lower()
    if not filename.endswith((".csv", ".json")):
        raise HTTPException(status_code=422, detail="Only CSV and JSON files are supported")

    raw = await file.read()
    try:
        return load_rows(raw, filename)
    except RowSourceError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/records", response_model=RecordsResponse)
async def records(file: UploadFile = File(...)):
    rows = await _read_rows(file)
    resolver = HeaderResolver()
    normalized = normalize_rows(rows, resolver)
    return RecordsResponse(count=len(normalized), columns=resolver.columns or [], records=normalized)


@app.post("/dashboard", response_model=DashboardResponse)
async def dashboard(
    file: UploadFile = File(...),
    day: Optional[date] = Query(default=None, alias="date"),
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    search: str = "",
    settings: Settings = Depends(get_settings),
):
    rows = await _read_rows(file)
    all_records = normalize_rows(rows)
    criteria = FilterCriteria(day=day, date_from=date_from, date_to=date_to, search=search)
    filtered = apply_filters(all_records, criteria)

    breakdowns = Breakdowns(
        gender=gender_totals(filtered),
        daily=daily_breakdown(filtered),
        states=rank_by_state(filtered, settings.ranking_limit, settings.unknown_label),
        origins=rank_by_origin(filtered, settings.ranking_limit, settings.unknown_label),
    )
    occupancy = compute_occupancy(
        all_records, resolve_target_date(criteria), stay_days=settings.default_stay_days
    )
    return DashboardResponse(
        criteria=criteria,
        records=filtered,
        totals=aggregate_totals(filtered),
        breakdowns=breakdowns,
        occupancy=occupancy,
    )


@app.post("/entries", response_model=EntryPayload)
def entries(entry: VisitorEntry):
    return build_sheet_payload(entry)
