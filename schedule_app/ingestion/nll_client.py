"""Champion Data NLL API client with machine-to-machine OAuth."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from schedule_app.ingestion.http_client import SourceFetchError, get_json, post_json
from schedule_app.settings import ScheduleSettings

logger = logging.getLogger(__name__)

AUTH_TOKEN_URL = "https://championdata.au.auth0.com/oauth/token"
API_AUDIENCE = "https://api.nll.championdata.io/"
NLL_API_BASE_URL = "https://api.nll.championdata.io"
LEAGUE_ID = 1
LEVEL_ID = 1

# Cached tokens closer than this to expiry are refreshed.
TOKEN_REFRESH_MARGIN = timedelta(minutes=5)


class NLLAuthError(RuntimeError):
    pass


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TokenCache:
    """Process-lifetime holder for the NLL bearer token.

    Create one per process and hand it to every NLL fetch; it is not tied to a request.
    """

    value: str | None = None
    expires_at: datetime | None = None

    def get(self, now: datetime | None = None) -> str | None:
        if self.value is None or self.expires_at is None:
            return None
        now = now or _utcnow()
        if self.expires_at > now + TOKEN_REFRESH_MARGIN:
            return self.value
        return None

    def store(self, value: str, expires_in: float, now: datetime | None = None) -> None:
        now = now or _utcnow()
        self.value = value
        self.expires_at = now + timedelta(seconds=expires_in)


class NLLClient:
    def __init__(self, settings: ScheduleSettings, token_cache: TokenCache) -> None:
        self.settings = settings
        self.token_cache = token_cache

    def get_access_token(self) -> str:
        cached = self.token_cache.get()
        if cached:
            return cached

        if not self.settings.nll_client_id or not self.settings.nll_client_secret:
            raise NLLAuthError("NLL client credentials are not configured")

        body = {
            "client_id": self.settings.nll_client_id,
            "client_secret": self.settings.nll_client_secret,
            "audience": API_AUDIENCE,
            "grant_type": "client_credentials",
        }
        try:
            payload = post_json(AUTH_TOKEN_URL, body, timeout=self.settings.http_timeout_seconds)
        except SourceFetchError as exc:
            logger.error("Failed to get NLL access token: %s", exc)
            raise NLLAuthError(f"NLL token exchange failed: {exc}") from exc

        access_token = payload.get("access_token") if isinstance(payload, dict) else None
        expires_in = payload.get("expires_in") if isinstance(payload, dict) else None
        if not access_token or not isinstance(expires_in, (int, float)):
            raise NLLAuthError("NLL token response missing access_token/expires_in")

        self.token_cache.store(access_token, expires_in)
        logger.info("Obtained NLL access token valid for %ss", expires_in)
        return access_token

    def schedule_url(self) -> str:
        return (
            f"{NLL_API_BASE_URL}/v1/leagues/{LEAGUE_ID}/levels/{LEVEL_ID}"
            f"/seasons/{self.settings.nll_season_id}/schedule"
        )

    def fetch_schedule(self) -> Any:
        """Return the raw season schedule. Auth and HTTP errors propagate."""

        access_token = self.get_access_token()
        return get_json(
            self.schedule_url(),
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=self.settings.http_timeout_seconds,
        )
