"""Fan out to every provider, merge the results and sort them by kickoff."""

from __future__ import annotations

import asyncio
import logging
from datetime import tzinfo
from typing import Iterable

from schedule_app.ingestion.local_time import TARGET_TZ, local_to_instant
from schedule_app.ingestion.nll_client import TokenCache
from schedule_app.ingestion.schema import UnifiedGameRecord
from schedule_app.ingestion.sources import (
    fetch_ahl_games,
    fetch_nhl_games,
    fetch_nll_games,
    fetch_whl_games,
)
from schedule_app.settings import ScheduleSettings

logger = logging.getLogger(__name__)


def sort_games(
    games: Iterable[UnifiedGameRecord], tz: tzinfo = TARGET_TZ
) -> list[UnifiedGameRecord]:
    """Stable ascending sort on the instant rebuilt from each record's date/time."""
    return sorted(games, key=lambda game: local_to_instant(game.date, game.time, tz))


async def fetch_unified_schedule(
    settings: ScheduleSettings, token_cache: TokenCache
) -> list[UnifiedGameRecord]:
    nhl_games, whl_games, ahl_games, nll_games = await asyncio.gather(
        asyncio.to_thread(fetch_nhl_games, settings),
        asyncio.to_thread(fetch_whl_games, settings),
        asyncio.to_thread(fetch_ahl_games, settings),
        asyncio.to_thread(fetch_nll_games, settings, token_cache),
    )
    logger.info(
        "Fetched games: NHL=%s WHL=%s AHL=%s NLL=%s",
        len(nhl_games),
        len(whl_games),
        len(ahl_games),
        len(nll_games),
    )
    return sort_games([*nhl_games, *whl_games, *ahl_games, *nll_games])


def build_unified_schedule(
    settings: ScheduleSettings, token_cache: TokenCache
) -> list[UnifiedGameRecord]:
    """Blocking wrapper for callers without a running event loop."""
    return asyncio.run(fetch_unified_schedule(settings, token_cache))
