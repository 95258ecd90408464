"""Normalise upstream placement records into immutable values.

The ephemeris provider returns one record per body::

    {"planet": {"en": "Sun"}, "fullDegree": 145.2, "isRetro": "false",
     "zodiac_sign": {"number": 5, "name": {"en": "Leo"}}}

Numeric fields are not trusted. A longitude that cannot be read as a finite
number becomes ``0.0`` (0° Aries) instead of being rejected, which keeps the
chart output identical to what the browser client has always drawn.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from ..i18n.resolve import FALLBACK_LANG, pick_label
from .constants import sign_index_from_lon


@dataclass(frozen=True)
class CelestialPlacement:
    name: str
    canonical_name: str
    longitude: float
    is_retrograde: bool
    sign_index: Optional[int]


def coerce_degree(value: Any) -> tuple[float, bool]:
    """Return ``(degree, ok)``; ``ok`` is False when the value was unusable."""

    if isinstance(value, bool) or value is None:
        return 0.0, False
    try:
        deg = float(value)
    except (TypeError, ValueError):
        return 0.0, False
    if not math.isfinite(deg):
        return 0.0, False
    return deg, True


def normalize_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _sign_number(zodiac_sign: Any) -> Optional[int]:
    if not isinstance(zodiac_sign, Mapping):
        return None
    number = zodiac_sign.get("number")
    if isinstance(number, bool):
        return None
    try:
        number = int(number)
    except (TypeError, ValueError):
        return None
    return number if 1 <= number <= 12 else None


def parse_placement(record: Mapping[str, Any], language: str = FALLBACK_LANG) -> CelestialPlacement:
    labels = record.get("planet")
    name = pick_label(labels, language)
    canonical = pick_label(labels, FALLBACK_LANG) or name

    raw_deg, numeric = coerce_degree(record.get("fullDegree"))
    longitude = raw_deg % 360.0

    number = _sign_number(record.get("zodiac_sign"))
    if number is not None:
        sign_index: Optional[int] = number - 1
    elif numeric:
        sign_index = sign_index_from_lon(longitude)
    else:
        sign_index = None

    return CelestialPlacement(
        name=name,
        canonical_name=canonical,
        longitude=longitude,
        is_retrograde=normalize_bool(record.get("isRetro")),
        sign_index=sign_index,
    )


def parse_placements(records: Iterable[Any], language: str = FALLBACK_LANG) -> list[CelestialPlacement]:
    """Parse every mapping in ``records``.

    Already-parsed placements pass through unchanged; anything else is
    skipped.
    """

    out = []
    for r in records or []:
        if isinstance(r, CelestialPlacement):
            out.append(r)
        elif isinstance(r, Mapping):
            out.append(parse_placement(r, language))
    return out


def find_placement(
    placements: Iterable[CelestialPlacement], name: str
) -> Optional[CelestialPlacement]:
    """First placement whose localized or canonical name equals ``name``."""

    for p in placements:
        if p.name == name or p.canonical_name == name:
            return p
    return None
