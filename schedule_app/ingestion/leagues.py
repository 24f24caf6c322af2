"""Supported leagues, tracked teams and per-league link templates."""

from typing import Literal

League = Literal["NHL", "WHL", "AHL", "NLL"]

LEAGUES: tuple[str, ...] = ("NHL", "WHL", "AHL", "NLL")

# Calgary Flames / Calgary Roughnecks
NHL_TRACKED_TEAM = "CGY"
NLL_TRACKED_TEAM_ID = 524
NLL_TRACKED_TEAM_CODE = "CGY"

SUMMARY_LINK_TEMPLATES: dict[str, str] = {
    "NHL": "https://nhl.com/gamecenter/{game_id}",
    "WHL": "https://chl.ca/whl/gamecentre/{game_id}/",
    "AHL": "https://theahl.com/stats/game-center/{game_id}",
    "NLL": "https://nll.com/game/{game_id}",
}


def summary_link(league: str, game_id) -> str | None:
    """Return the game-centre URL for a game, or None when it cannot be built."""

    template = SUMMARY_LINK_TEMPLATES.get(league.upper())
    if template is None or game_id in (None, ""):
        return None
    return template.format(game_id=game_id)
