from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)
_SETTINGS: ScheduleSettings | None = None

DEFAULT_NHL_SCHEDULE_URL = "https://api-web.nhle.com/v1/club-schedule-season/CGY/20252026"
DEFAULT_WHL_SCHEDULE_URL = (
    "https://lscluster.hockeytech.com/feed/?feed=modulekit&view=schedule"
    "&client_code=whl&key=41b145a848f4bd67&fmt=json&season_id=289&team_id=202"
)
DEFAULT_AHL_SCHEDULE_URL = (
    "https://lscluster.hockeytech.com/feed/?feed=modulekit&view=schedule"
    "&client_code=ahl&key=ccb91f29d6744675&fmt=json&season_id=90&team_id=444"
)


@dataclass(frozen=True)
class ScheduleSettings:
    s3_bucket_name: str
    s3_key: str
    aws_region: str
    nll_client_id: str
    nll_client_secret: str
    nll_season_id: int
    nhl_schedule_url: str
    whl_schedule_url: str
    ahl_schedule_url: str
    http_timeout_seconds: float


def _env(name: str, default: str) -> str:
    value = (os.getenv(name) or "").strip()
    return value or default


def _env_number(name: str, default: float, cast=float):
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def load_settings() -> ScheduleSettings:
    return ScheduleSettings(
        s3_bucket_name=_env("S3_BUCKET_NAME", "csec-schedule-api"),
        s3_key=_env("S3_KEY", "schedule.json"),
        aws_region=_env("AWS_REGION", "ca-central-1"),
        nll_client_id=_env("NLL_CLIENT_ID", ""),
        nll_client_secret=_env("NLL_CLIENT_SECRET", ""),
        nll_season_id=_env_number("NLL_SEASON_ID", 225, int),
        nhl_schedule_url=_env("NHL_SCHEDULE_URL", DEFAULT_NHL_SCHEDULE_URL),
        whl_schedule_url=_env("WHL_SCHEDULE_URL", DEFAULT_WHL_SCHEDULE_URL),
        ahl_schedule_url=_env("AHL_SCHEDULE_URL", DEFAULT_AHL_SCHEDULE_URL),
        http_timeout_seconds=_env_number("HTTP_TIMEOUT_SECONDS", 12.0),
    )


def get_settings() -> ScheduleSettings:
    global _SETTINGS
    if _SETTINGS is not None:
        return _SETTINGS
    _SETTINGS = load_settings()
    if not _SETTINGS.nll_client_id or not _SETTINGS.nll_client_secret:
        logger.warning(
            "NLL_CLIENT_ID/NLL_CLIENT_SECRET missing. NLL games will be skipped "
            "until credentials are configured."
        )
    return _SETTINGS
