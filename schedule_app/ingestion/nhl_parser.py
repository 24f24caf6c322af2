"""Parser for NHL web API club schedule payloads."""

from __future__ import annotations

import logging
from datetime import tzinfo
from typing import Any

from schedule_app.ingestion.fields import dig, first_match, parse_loose_int, present, source_id
from schedule_app.ingestion.leagues import NHL_TRACKED_TEAM, summary_link
from schedule_app.ingestion.local_time import (
    TARGET_TZ,
    InvalidInputError,
    parse_instant,
    to_local_time,
)
from schedule_app.ingestion.schema import UnifiedGameRecord

logger = logging.getLogger(__name__)

COMPLETED_STATES = {"OFF", "FINAL", "OFFICIAL"}

_KICKOFF_FIELDS = ("startTimeUTC", "gameDate", "startTime")
_STATE_RULES = (present("gameState"), present("gameScheduleState"))


def _localized(value: Any) -> str | None:
    # NHL names come as {"default": "Flames", "fr": ...} or as plain strings.
    if isinstance(value, dict):
        value = value.get("default")
    if value in (None, ""):
        return None
    return str(value)


def _extract_games(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []

    games = payload.get("games")
    if isinstance(games, list):
        return games

    weeks = dig(payload, "games", "gameWeek")
    if not isinstance(weeks, list):
        weeks = payload.get("gameWeek")
    if not isinstance(weeks, list):
        return []

    flattened: list[Any] = []
    for week in weeks:
        week_games = week.get("games") if isinstance(week, dict) else None
        if isinstance(week_games, list):
            flattened.extend(week_games)
    return flattened


def _is_tracked(team: dict[str, Any], tracked_team: str) -> bool:
    return tracked_team in (team.get("abbrev"), team.get("triCode"))


def _team_name(team: dict[str, Any]) -> str:
    return _localized(team.get("name")) or _localized(team.get("placeName")) or "TBD"


def _team_tricode(team: dict[str, Any]) -> str | None:
    return _localized(team.get("abbrev")) or _localized(team.get("triCode"))


def _parse_game(
    game: Any, league: str, tracked_team: str, naive_tz: tzinfo
) -> UnifiedGameRecord | None:
    if not isinstance(game, dict):
        return None

    home_team = game.get("homeTeam")
    away_team = game.get("awayTeam")
    if not isinstance(home_team, dict) or not isinstance(away_team, dict):
        return None

    # Orientation stays as reported by the source; the tracked side is only logged.
    if not (_is_tracked(home_team, tracked_team) or _is_tracked(away_team, tracked_team)):
        logger.debug("NHL game id=%s does not involve %s", game.get("id"), tracked_team)

    kickoff = None
    for key in _KICKOFF_FIELDS:
        if game.get(key):
            kickoff = parse_instant(game[key], naive_tz)
            if kickoff is not None:
                break
    if kickoff is None:
        return None
    try:
        local = to_local_time(kickoff)
    except InvalidInputError:
        return None

    state = first_match(_STATE_RULES, game, default="PREVIEW")

    home_score = None
    away_score = None
    overtime = False
    shootout = False
    if isinstance(state, str) and state in COMPLETED_STATES:
        home_score = parse_loose_int(home_team.get("score"))
        away_score = parse_loose_int(away_team.get("score"))

        period = game.get("periodDescriptor")
        if isinstance(period, dict):
            period_type = period.get("periodType")
            period_number = parse_loose_int(period.get("periodNumber"))
            shootout = period_type == "SHOOTOUT"
            overtime = period_type == "OVERTIME" or (
                period_number is not None and period_number > 3 and not shootout
            )

    game_id = source_id(game.get("id"))

    return UnifiedGameRecord(
        game_id=game_id,
        date=local.date,
        time=local.time,
        location=_localized(game.get("venue")) or _localized(game.get("venueName")) or "TBD",
        home_team=_team_name(home_team),
        away_team=_team_name(away_team),
        home_team_id=source_id(home_team.get("id")),
        away_team_id=source_id(away_team.get("id")),
        home_tricode=_team_tricode(home_team),
        away_tricode=_team_tricode(away_team),
        home_logo=_localized(home_team.get("logo")),
        away_logo=_localized(away_team.get("logo")),
        league=league,
        ticket_link=_localized(game.get("ticketsLink")),
        home_score=home_score,
        away_score=away_score,
        link_to_summary=summary_link(league, game_id),
        overtime=overtime,
        shootout=shootout,
    )


def parse_nhl_schedule(
    payload: Any,
    league: str = "NHL",
    tracked_team: str = NHL_TRACKED_TEAM,
    naive_tz: tzinfo = TARGET_TZ,
) -> list[UnifiedGameRecord]:
    """Parse an NHL schedule payload (flat ``games`` or week-grouped) into unified records."""

    parsed_games: list[UnifiedGameRecord] = []
    for game in _extract_games(payload):
        record = _parse_game(game, league, tracked_team, naive_tz)
        if record is not None:
            parsed_games.append(record)
    return parsed_games
