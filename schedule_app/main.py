from __future__ import annotations

from datetime import datetime, timezone
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from schedule_app.ingestion.aggregate import fetch_unified_schedule
from schedule_app.ingestion.nll_client import TokenCache
from schedule_app.schemas import HealthOut, ScheduleErrorResponse, ScheduleResponse
from schedule_app.settings import get_settings

app = FastAPI(title="Unified Schedule API")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
logger = logging.getLogger(__name__)
_token_cache = TokenCache()


@app.on_event("startup")
async def log_startup() -> None:
    settings = get_settings()
    logger.info(
        "Schedule API starting: NHL=%s WHL=%s AHL=%s NLL season=%s",
        settings.nhl_schedule_url,
        settings.whl_schedule_url,
        settings.ahl_schedule_url,
        settings.nll_season_id,
    )


@app.get("/health", response_model=HealthOut)
def health() -> HealthOut:
    return HealthOut(status="ok", timestamp=datetime.now(timezone.utc))


@app.get(
    "/api/schedule",
    response_model=ScheduleResponse,
    responses={500: {"model": ScheduleErrorResponse}},
)
async def api_schedule():
    try:
        schedule = await fetch_unified_schedule(get_settings(), _token_cache)
    except Exception as exc:
        logger.exception("Error fetching unified schedule")
        error = ScheduleErrorResponse(error="Failed to fetch schedule data", message=str(exc))
        return JSONResponse(status_code=500, content=error.model_dump())

    return ScheduleResponse(success=True, count=len(schedule), data=schedule)
