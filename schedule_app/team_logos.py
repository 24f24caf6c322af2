"""Team logo URL builders for the HockeyTech and NLL feeds."""

# LeagueStat CDN, keyed by league and numeric team id
_LEAGUESTAT_LOGO_BASE = "https://assets.leaguestat.com"

# Champion Data CDN used by nll.com, keyed by tricode
_NLL_LOGO_BASE = "https://d9xhqsanh0o19.cloudfront.net/logos"


def hockeytech_logo_url(team_id, league: str) -> str | None:
    """Return the LeagueStat logo for a WHL/AHL team id.

    Returns None when the team id is unresolved.
    """
    if team_id in (None, ""):
        return None
    return f"{_LEAGUESTAT_LOGO_BASE}/{league.lower()}/logos/{team_id}.png"


def nll_logo_url(tricode: str | None) -> str | None:
    if not tricode:
        return None
    return f"{_NLL_LOGO_BASE}/{tricode}.png"
