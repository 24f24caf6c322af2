"""Thin JSON-over-HTTP helpers for the schedule providers."""

from __future__ import annotations

import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)
DEFAULT_TIMEOUT_SECONDS = 12
DEFAULT_USER_AGENT = "unified-schedule/1.0"
MAX_ERROR_SNIPPET = 300


class SourceFetchError(RuntimeError):
    pass


def _decode(response: requests.Response, url: str) -> Any:
    if response.status_code >= 400:
        body_snippet = response.text[:MAX_ERROR_SNIPPET]
        logger.error("Non-2xx status=%s url=%s body=%s", response.status_code, url, body_snippet)
        raise SourceFetchError(f"{url} returned HTTP {response.status_code}")
    try:
        return response.json()
    except ValueError as exc:
        raise SourceFetchError(f"{url} returned a non-JSON body") from exc


def get_json(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Raises SourceFetchError on transport failures, non-2xx responses and non-JSON bodies.
    """

    request_headers = {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json"}
    request_headers.update(headers or {})
    try:
        response = requests.get(url, headers=request_headers, timeout=timeout)
    except requests.RequestException as exc:
        raise SourceFetchError(f"GET {url} failed: {exc}") from exc
    return _decode(response, url)


def post_json(
    url: str,
    body: dict[str, Any],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    try:
        response = requests.post(
            url,
            json=body,
            headers={"User-Agent": DEFAULT_USER_AGENT, "Content-Type": "application/json"},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        raise SourceFetchError(f"POST {url} failed: {exc}") from exc
    return _decode(response, url)
