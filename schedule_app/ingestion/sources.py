"""One fetcher per provider. Fetchers never raise: a failing source yields no games."""

from __future__ import annotations

import logging

from schedule_app.ingestion.hockeytech_parser import parse_hockeytech_schedule
from schedule_app.ingestion.http_client import get_json
from schedule_app.ingestion.nhl_parser import parse_nhl_schedule
from schedule_app.ingestion.nll_client import NLLClient, TokenCache
from schedule_app.ingestion.nll_parser import parse_nll_schedule
from schedule_app.ingestion.schema import UnifiedGameRecord
from schedule_app.settings import ScheduleSettings

logger = logging.getLogger(__name__)


def fetch_nhl_games(settings: ScheduleSettings) -> list[UnifiedGameRecord]:
    try:
        payload = get_json(settings.nhl_schedule_url, timeout=settings.http_timeout_seconds)
        return parse_nhl_schedule(payload, "NHL")
    except Exception:
        logger.exception("Error fetching NHL schedule")
        return []


def _fetch_hockeytech_games(url: str, league: str, timeout: float) -> list[UnifiedGameRecord]:
    try:
        payload = get_json(url, timeout=timeout)
        return parse_hockeytech_schedule(payload, league)
    except Exception:
        logger.exception("Error fetching %s schedule", league)
        return []


def fetch_whl_games(settings: ScheduleSettings) -> list[UnifiedGameRecord]:
    return _fetch_hockeytech_games(settings.whl_schedule_url, "WHL", settings.http_timeout_seconds)


def fetch_ahl_games(settings: ScheduleSettings) -> list[UnifiedGameRecord]:
    return _fetch_hockeytech_games(settings.ahl_schedule_url, "AHL", settings.http_timeout_seconds)


def fetch_nll_games(
    settings: ScheduleSettings, token_cache: TokenCache
) -> list[UnifiedGameRecord]:
    try:
        payload = NLLClient(settings, token_cache).fetch_schedule()
        return parse_nll_schedule(payload, "NLL")
    except Exception:
        logger.exception("Error fetching NLL schedule")
        return []


def fetch_league_games(
    league: str, settings: ScheduleSettings, token_cache: TokenCache
) -> list[UnifiedGameRecord]:
    """Dispatch to the fetcher for ``league`` (NHL, WHL, AHL or NLL)."""

    league_key = league.strip().upper()
    if league_key == "NHL":
        return fetch_nhl_games(settings)
    if league_key == "WHL":
        return fetch_whl_games(settings)
    if league_key == "AHL":
        return fetch_ahl_games(settings)
    if league_key == "NLL":
        return fetch_nll_games(settings, token_cache)
    raise ValueError(f"Unsupported league key: {league}")
