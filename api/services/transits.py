"""Transit-to-natal aspects.

Transiting bodies are limited to the ten core planets; the natal side keeps
every body so a transit can land on a natal angle or point. Only the major
aspects are considered, with tighter orbs than a natal chart uses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from .aspects import ASPECT_CATALOG, _angle_diff, match_aspect
from .constants import CORE_PLANETS, MAJOR_ASPECTS
from .placements import parse_placements

TRANSIT_CATALOG = tuple(a for a in ASPECT_CATALOG if a.name in MAJOR_ASPECTS)

TRANSIT_ORBS = {
    "Conjunction": 2.0,
    "Opposition": 2.0,
    "Square": 2.5,
    "Trine": 2.5,
    "Sextile": 2.0,
}


@dataclass(frozen=True)
class TransitAspect:
    transit_body: str
    natal_body: str
    aspect_name: str
    separation_error: float
    # English names, for lookups that must not depend on the display language.
    transit_key: str = ""
    natal_key: str = ""

    @property
    def natal_canonical(self) -> str:
        return self.natal_key or self.natal_body


def detect_transit_aspects(
    transiting: Iterable[Any],
    natal: Iterable[Any],
    orbs: Optional[Mapping[str, float]] = None,
    language: str = "en",
) -> list[TransitAspect]:
    merged = {**TRANSIT_ORBS, **(orbs or {})}

    t_entries = [
        (p.name, p.canonical_name, p.longitude)
        for p in parse_placements(transiting, language)
        if p.name and p.canonical_name in CORE_PLANETS
    ]
    n_entries = [(p.name, p.canonical_name, p.longitude) for p in parse_placements(natal, language) if p.name]

    out = []
    for t_name, t_key, t_lon in t_entries:
        for n_name, n_key, n_lon in n_entries:
            hit = match_aspect(_angle_diff(t_lon, n_lon), TRANSIT_CATALOG, merged)
            if hit is None:
                continue
            name, error = hit
            out.append(TransitAspect(
                transit_body=t_name,
                natal_body=n_name,
                aspect_name=name,
                separation_error=error,
                transit_key=t_key,
                natal_key=n_key,
            ))
    return out


def top_transits(hits: Iterable[TransitAspect], limit: int = 3) -> list[TransitAspect]:
    """Tightest transits landing on a natal core planet."""

    picked = [h for h in hits if h.natal_canonical in CORE_PLANETS]
    return sorted(picked, key=lambda h: h.separation_error)[:limit]
