"""Client for the upstream ephemeris API (FreeAstrologyAPI).

The API key lives on the server only; browsers reach the provider through
the proxy routes or the chart endpoints, never directly.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, List

import requests

from ..i18n.resolve import clamp_lang

logger = logging.getLogger(__name__)

DEFAULT_BASE = "https://json.freeastrologyapi.com"
PROXY_PATHS = {"planets": "/western/planets", "houses": "/western/houses", "aspects": "/western/aspects"}


class EphemerisUnavailableError(RuntimeError):
    """Raised when no upstream API key is configured."""


class EphemerisUpstreamError(RuntimeError):
    """Raised when the upstream call fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def _api_key() -> str:
    return os.getenv("FREE_ASTROLOGY_API_KEY", "")


def _base_url() -> str:
    return (os.getenv("FREE_ASTROLOGY_BASE") or DEFAULT_BASE).rstrip("/")


def _timeout() -> float:
    return float(os.getenv("FREE_ASTROLOGY_TIMEOUT", "25"))


def is_configured() -> bool:
    return bool(_api_key())


def post_raw(path: str, payload: Dict[str, Any]) -> requests.Response:
    """POST ``payload`` to ``path`` upstream and return the response untouched."""

    key = _api_key()
    if not key:
        raise EphemerisUnavailableError("FREE_ASTROLOGY_API_KEY missing (Lite mode only)")
    url = f"{_base_url()}{path}"
    try:
        return requests.post(
            url,
            json=payload or {},
            headers={"Content-Type": "application/json", "x-api-key": key},
            timeout=_timeout(),
        )
    except requests.RequestException as exc:
        logger.exception("Astro proxy error for %s", path)
        raise EphemerisUpstreamError(f"Astrology proxy error: {exc}") from exc


def fetch_planets(payload: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Fetch placement records for the birth parameters in ``payload``."""

    r = post_raw(PROXY_PATHS["planets"], payload)
    if not r.ok:
        logger.warning("Upstream /western/planets returned %s: %s", r.status_code, r.text[:200])
        raise EphemerisUpstreamError(
            f"Upstream returned {r.status_code}", status_code=r.status_code
        )
    try:
        data = r.json()
    except ValueError as exc:
        raise EphemerisUpstreamError("Upstream returned invalid JSON") from exc
    output = data.get("output") if isinstance(data, dict) else None
    return output if isinstance(output, list) else []


def payload_for_moment(
    moment: datetime,
    latitude: float = 0.0,
    longitude: float = 0.0,
    language: str = "en",
) -> Dict[str, Any]:
    """Birth-style payload for an arbitrary UTC moment (used for transits)."""

    moment = moment.astimezone(timezone.utc)
    return {
        "year": moment.year,
        "month": moment.month,
        "date": moment.day,
        "hours": moment.hour,
        "minutes": moment.minute,
        "seconds": moment.second,
        "latitude": latitude,
        "longitude": longitude,
        "timezone": 0.0,
        "config": {
            "observation_point": "topocentric",
            "ayanamsha": "tropical",
            "language": clamp_lang(language),
        },
    }
