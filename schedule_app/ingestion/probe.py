"""Quick probe for a single schedule provider."""

from __future__ import annotations

import argparse
import logging

from schedule_app.ingestion.leagues import LEAGUES
from schedule_app.ingestion.nll_client import TokenCache
from schedule_app.ingestion.sources import fetch_league_games
from schedule_app.settings import get_settings


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fetch one provider's schedule and print the normalized game count.",
    )
    parser.add_argument(
        "--league",
        type=str,
        default="NHL",
        help="League key (NHL, WHL, AHL, NLL).",
    )
    return parser.parse_args()


def _normalize_league(raw: str) -> str:
    value = raw.strip().upper()
    if value not in LEAGUES:
        supported = ", ".join(LEAGUES)
        raise SystemExit(
            f"Unsupported league: {value}. Supported leagues: {supported}"
        )
    return value


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    args = _parse_args()
    league = _normalize_league(args.league)

    games = fetch_league_games(league, get_settings(), TokenCache())
    if not games:
        logging.error("No games parsed for league=%s (see errors above)", league)
        raise SystemExit(1)

    logging.info("Parsed %s games for league=%s", len(games), league)
    first = games[0]
    logging.info("First game: %s %s %s @ %s", first.date, first.time, first.away_team, first.home_team)


if __name__ == "__main__":
    main()
