"""Parser for Champion Data NLL season schedule payloads."""

from __future__ import annotations

from datetime import tzinfo
from typing import Any, Iterable

from schedule_app.ingestion.fields import dig, parse_loose_int, source_id
from schedule_app.ingestion.leagues import (
    NLL_TRACKED_TEAM_CODE,
    NLL_TRACKED_TEAM_ID,
    summary_link,
)
from schedule_app.ingestion.local_time import (
    TARGET_TZ,
    InvalidInputError,
    parse_instant,
    to_local_time,
)
from schedule_app.ingestion.schema import UnifiedGameRecord
from schedule_app.team_logos import nll_logo_url

COMPLETED_STATUS_CODES = ("COMP",)
COMPLETED_STATUS_NAMES = ("Complete", "Final")


def _iter_matches(payload: Any) -> Iterable[Any]:
    phases = payload.get("phases") if isinstance(payload, dict) else None
    if not isinstance(phases, list):
        return
    for phase in phases:
        weeks = phase.get("weeks") if isinstance(phase, dict) else None
        if not isinstance(weeks, list):
            continue
        for week in weeks:
            matches = week.get("matches") if isinstance(week, dict) else None
            if isinstance(matches, list):
                yield from matches


def _is_tracked_squad(squad: Any, team_id, team_code: str) -> bool:
    if not isinstance(squad, dict):
        return False
    squad_id = squad.get("id")
    if squad_id is not None and str(squad_id) == str(team_id):
        return True
    return squad.get("code") == team_code


def _involves_team(match: Any, team_id, team_code: str) -> bool:
    return any(
        _is_tracked_squad(dig(match, "squads", side), team_id, team_code)
        for side in ("home", "away")
    )


def _squad_name(squad: dict[str, Any]) -> str:
    if squad.get("displayName"):
        return str(squad["displayName"])
    parts = [str(squad[key]) for key in ("name", "nickname") if squad.get(key)]
    return " ".join(parts) or "TBD"


def _squad_score(squad: dict[str, Any]) -> int | None:
    for key in ("goals", "score"):
        value = parse_loose_int(dig(squad, "score", key))
        if value is not None:
            return value
    return None


def _parse_match(match: Any, league: str, naive_tz: tzinfo) -> UnifiedGameRecord | None:
    home = dig(match, "squads", "home")
    away = dig(match, "squads", "away")
    if not isinstance(home, dict) or not isinstance(away, dict):
        return None

    kickoff = None
    if dig(match, "date", "utcMatchStart"):
        kickoff = parse_instant(match["date"]["utcMatchStart"], naive_tz)
    if kickoff is None:
        start_date = dig(match, "date", "startDate")
        start_time = dig(match, "date", "startTime")
        if start_date and start_time:
            kickoff = parse_instant(f"{start_date}T{start_time}", naive_tz)
    if kickoff is None:
        return None
    try:
        local = to_local_time(kickoff)
    except InvalidInputError:
        return None

    is_completed = (
        dig(match, "status", "code") in COMPLETED_STATUS_CODES
        or dig(match, "status", "name") in COMPLETED_STATUS_NAMES
    )

    home_score = None
    away_score = None
    overtime = False
    if is_completed:
        home_score = _squad_score(home)
        away_score = _squad_score(away)
        period = parse_loose_int(dig(match, "status", "period"))
        overtime = period is not None and period > 4

    game_id = source_id(match.get("id"))
    home_tricode = str(home["code"]) if home.get("code") else None
    away_tricode = str(away["code"]) if away.get("code") else None

    return UnifiedGameRecord(
        game_id=game_id,
        date=local.date,
        time=local.time,
        location=str(dig(match, "venue", "name") or "TBD"),
        home_team=_squad_name(home),
        away_team=_squad_name(away),
        home_team_id=source_id(home.get("id")),
        away_team_id=source_id(away.get("id")),
        home_tricode=home_tricode,
        away_tricode=away_tricode,
        home_logo=nll_logo_url(home_tricode),
        away_logo=nll_logo_url(away_tricode),
        league=league,
        home_score=home_score,
        away_score=away_score,
        link_to_summary=summary_link(league, game_id),
        overtime=overtime,
    )


def parse_nll_schedule(
    payload: Any,
    league: str = "NLL",
    team_id=NLL_TRACKED_TEAM_ID,
    team_code: str = NLL_TRACKED_TEAM_CODE,
    naive_tz: tzinfo = TARGET_TZ,
) -> list[UnifiedGameRecord]:
    """Parse an NLL phases/weeks/matches payload, keeping only the tracked team's matches.

    A startDate/startTime pair has no offset and is read in ``naive_tz``.
    """

    parsed_games: list[UnifiedGameRecord] = []
    for match in _iter_matches(payload):
        if not _involves_team(match, team_id, team_code):
            continue
        record = _parse_match(match, league, naive_tz)
        if record is not None:
            parsed_games.append(record)
    return parsed_games
