"""Parser for HockeyTech (LeagueStat) modulekit schedule payloads, used by WHL and AHL."""

from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Any

from schedule_app.ingestion.fields import (
    FieldRule,
    dig,
    first_match,
    is_numeric_like,
    parse_flag,
    parse_loose_int,
    present,
    source_id,
)
from schedule_app.ingestion.leagues import summary_link
from schedule_app.ingestion.local_time import (
    TARGET_TZ,
    InvalidInputError,
    overlay_time_of_day,
    parse_instant,
    to_local_time,
)
from schedule_app.ingestion.schema import UnifiedGameRecord
from schedule_app.team_logos import hockeytech_logo_url

COMPLETED_STATUSES = {"Final", "Final/OT", "Final/SO", "Completed", "F"}

# Fields holding a full timestamp; a separate time-of-day never overrides these.
_FULL_TIMESTAMP_FIELDS = ("GameDateISO8601", "date_time_played")
_DATE_FIELDS = ("date_played", "game_date", "date", "start_time", "datetime")
_TIME_OF_DAY_FIELDS = ("game_time", "time", "start_time_local")

_HOME_SCORE_FIELDS = ("home_goal_count", "home_team_score", "home_score", "homeScore")
_AWAY_SCORE_FIELDS = (
    "visiting_goal_count",
    "visiting_team_score",
    "visiting_score",
    "away_score",
    "awayScore",
)

_VENUE_RULES = tuple(
    present(key)
    for key in ("venue_name", "venueName", "venue", "arena", "arena_name", "arenaName")
)
_TICKET_RULES = tuple(
    present(key) for key in ("tickets_url", "ticket_link", "tickets", "ticket_url")
)
_GAME_ID_RULES = (present("game_id"), present("id"))
_STATUS_RULES = (present("game_status"), present("status"), present("state"))

# Only these feeds have HockeyTech game-summary pages.
SUMMARY_LEAGUES = ("WHL", "AHL")


def _nested(key: str, *subkeys: str) -> tuple[FieldRule, ...]:
    """Rules reading ``game[key][subkey]`` when ``game[key]`` is an object."""
    return tuple(present(key, subkey) for subkey in subkeys)


def _numeric_team_field(key: str) -> FieldRule:
    return FieldRule(
        predicate=lambda game: is_numeric_like(game.get(key)),
        extract=lambda game: parse_loose_int(game.get(key)),
    )


def _team_id_rules(nested_keys: tuple[str, ...], flat_keys: tuple[str, ...]) -> tuple[FieldRule, ...]:
    rules: list[FieldRule] = []
    for key in nested_keys:
        rules.extend(_nested(key, "id"))
    rules.extend(present(key) for key in flat_keys)
    rules.append(_numeric_team_field(nested_keys[0]))
    return tuple(rules)


_HOME_TEAM_ID_RULES = _team_id_rules(("home_team", "homeTeam"), ("home_team_id", "homeTeamId"))
_AWAY_TEAM_ID_RULES = _team_id_rules(
    ("visiting_team", "visitingTeam"), ("visiting_team_id", "visitingTeamId")
)

_HOME_NAME_RULES = (
    present("home_team_name"),
    *_nested("home_team", "name", "nickname", "full_name"),
    present("homeTeamName"),
)
_AWAY_NAME_RULES = (
    present("visiting_team_name"),
    *_nested("visiting_team", "name", "nickname", "full_name"),
    present("visitingTeamName"),
    present("away_team_name"),
    present("awayTeamName"),
)
_HOME_TRICODE_RULES = (
    present("home_team_code"),
    *_nested("home_team", "code", "abbrev", "abbreviation"),
)
_AWAY_TRICODE_RULES = (
    present("visiting_team_code"),
    *_nested("visiting_team", "code", "abbrev", "abbreviation"),
)


def _text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _extract_games(payload: Any) -> list[Any]:
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []

    schedule = dig(payload, "SiteKit", "Schedule")
    if schedule is None:
        schedule = payload.get("Schedule")
    if schedule is None:
        return []
    return schedule if isinstance(schedule, list) else [schedule]


def _parse_kickoff(game: dict[str, Any], naive_tz: tzinfo) -> datetime | None:
    for key in _FULL_TIMESTAMP_FIELDS:
        if game.get(key):
            instant = parse_instant(game[key], naive_tz)
            if instant is not None:
                return instant

    for key in _DATE_FIELDS:
        if not game.get(key):
            continue
        instant = parse_instant(game[key], naive_tz)
        if instant is None:
            continue
        time_keys = _TIME_OF_DAY_FIELDS
        if key == "date_played":
            time_keys = time_keys + ("schedule_time",)
        for time_key in time_keys:
            if game.get(time_key):
                return overlay_time_of_day(instant, game[time_key], naive_tz)
        return instant
    return None


def _first_int(game: dict[str, Any], keys: tuple[str, ...]) -> int | None:
    for key in keys:
        value = parse_loose_int(game.get(key))
        if value is not None:
            return value
    return None


def _resolve_venue(game: dict[str, Any], payload: Any) -> str:
    location = first_match(_VENUE_RULES, game, default="TBD")

    # A bare number here is a venue id, not a name.
    if is_numeric_like(location):
        nested_name = dig(game, "venue_info", "name")
        if nested_name:
            location = nested_name
        else:
            venues = dig(payload, "SiteKit", "Venue")
            if isinstance(venues, dict):
                venues = [venues]
            for venue in venues or []:
                if not isinstance(venue, dict):
                    continue
                if str(location) in (str(venue.get("id")), str(venue.get("venue_id"))):
                    location = venue.get("name") or venue.get("venue_name") or location
                    break

    location = str(location)
    if " - " in location:
        location = location.split(" - ")[0]
    return location


def _parse_game(
    game: Any, payload: Any, league: str, naive_tz: tzinfo
) -> UnifiedGameRecord | None:
    if not isinstance(game, dict):
        return None

    kickoff = _parse_kickoff(game, naive_tz)
    if kickoff is None:
        return None
    try:
        local = to_local_time(kickoff)
    except InvalidInputError:
        return None

    home_team_id = source_id(first_match(_HOME_TEAM_ID_RULES, game))
    away_team_id = source_id(first_match(_AWAY_TEAM_ID_RULES, game))

    status = str(first_match(_STATUS_RULES, game, default="Scheduled"))
    is_completed = status in COMPLETED_STATUSES or parse_flag(game.get("final"))

    home_score = None
    away_score = None
    overtime = False
    shootout = False
    if is_completed:
        home_score = _first_int(game, _HOME_SCORE_FIELDS)
        away_score = _first_int(game, _AWAY_SCORE_FIELDS)
        period = parse_loose_int(game.get("period"))
        overtime = (
            status in {"Final/OT", "Final/SO"}
            or (period is not None and period > 3)
            or parse_flag(game.get("overtime"))
        )
        shootout = status == "Final/SO" or parse_flag(game.get("shootout"))

    game_id = source_id(first_match(_GAME_ID_RULES, game))

    return UnifiedGameRecord(
        game_id=game_id,
        date=local.date,
        time=local.time,
        location=_resolve_venue(game, payload),
        home_team=str(first_match(_HOME_NAME_RULES, game, default="TBD")),
        away_team=str(first_match(_AWAY_NAME_RULES, game, default="TBD")),
        home_team_id=home_team_id,
        away_team_id=away_team_id,
        home_tricode=_text(first_match(_HOME_TRICODE_RULES, game)),
        away_tricode=_text(first_match(_AWAY_TRICODE_RULES, game)),
        home_logo=hockeytech_logo_url(home_team_id, league),
        away_logo=hockeytech_logo_url(away_team_id, league),
        league=league,
        ticket_link=_text(first_match(_TICKET_RULES, game)),
        home_score=home_score,
        away_score=away_score,
        link_to_summary=summary_link(league, game_id) if league in SUMMARY_LEAGUES else None,
        overtime=overtime,
        shootout=shootout,
    )


def parse_hockeytech_schedule(
    payload: Any, league: str, naive_tz: tzinfo = TARGET_TZ
) -> list[UnifiedGameRecord]:
    """Parse a WHL/AHL schedule payload into unified records.

    Entries that are not objects or have no usable date are skipped.
    Dates and times without a UTC offset are read as wall-clock time in
    ``naive_tz`` (Mountain Time by default), not UTC.
    """

    parsed_games: list[UnifiedGameRecord] = []
    for game in _extract_games(payload):
        record = _parse_game(game, payload, league, naive_tz)
        if record is not None:
            parsed_games.append(record)
    return parsed_games
