from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Collection, Iterable, Mapping, Optional

from .placements import parse_placements


@dataclass(frozen=True)
class AspectDef:
    name: str
    angle: float
    orb: float


# Declaration order is the tie-break: the first aspect within orb wins.
ASPECT_CATALOG: tuple[AspectDef, ...] = (
    AspectDef("Conjunction", 0.0, 3.0),
    AspectDef("Opposition", 180.0, 5.0),
    AspectDef("Square", 90.0, 5.0),
    AspectDef("Trine", 120.0, 5.0),
    AspectDef("Sextile", 60.0, 5.0),
    AspectDef("Quincunx", 150.0, 5.0),
    AspectDef("Semi-Sextile", 30.0, 5.0),
    AspectDef("Quintile", 72.0, 5.0),
    AspectDef("Octile", 45.0, 5.0),
    AspectDef("Sesquiquadrate", 135.0, 5.0),
    AspectDef("Septile", 51.4286, 3.0),
    AspectDef("Novile", 40.0, 3.0),
)

ASPECT_DEGREES = {a.name: a.angle for a in ASPECT_CATALOG}
DEFAULT_ORBS = {a.name: a.orb for a in ASPECT_CATALOG}


@dataclass(frozen=True)
class AspectMatch:
    body_a: str
    body_b: str
    aspect_name: str
    separation_error: float


@dataclass
class AspectConfig:
    language: str = "en"
    allowed_aspects: Optional[Collection[str]] = None
    excluded_bodies: Collection[str] = ()
    orb_overrides: Mapping[str, float] = field(default_factory=dict)


def aspect_angle(name: str) -> float | None:
    return ASPECT_DEGREES.get(name)


def _angle_diff(a: float, b: float) -> float:
    """Return the minimal angular distance between two longitudes."""

    diff = abs(a - b)
    return min(diff, 360.0 - diff)


def match_aspect(
    separation: float,
    catalog: Iterable[AspectDef],
    orbs: Mapping[str, float],
    allowed: Optional[Collection[str]] = None,
) -> tuple[str, float] | None:
    """First catalog aspect whose exact angle is within orb of ``separation``."""

    for asp in catalog:
        if allowed is not None and asp.name not in allowed:
            continue
        orb = orbs.get(asp.name)
        if orb is None:
            orb = asp.orb
        error = abs(separation - asp.angle)
        if error <= orb:
            return asp.name, error
    return None


def detect_aspects(placements: Iterable[Any], config: AspectConfig | None = None) -> list[AspectMatch]:
    """Pairwise aspects between bodies, at most one per unordered pair.

    Output follows pair order (i < j over the filtered list); callers wanting
    the tightest aspects first use :func:`sort_by_tightness`.
    """

    config = config or AspectConfig()
    excluded = set(config.excluded_bodies or ())
    allowed = set(config.allowed_aspects) if config.allowed_aspects is not None else None
    orbs = dict(config.orb_overrides or {})

    entries = [
        (p.name, p.longitude)
        for p in parse_placements(placements, config.language)
        if p.name and p.name not in excluded
    ]

    res = []
    for i in range(len(entries)):
        for j in range(i + 1, len(entries)):
            (n1, lon1), (n2, lon2) = entries[i], entries[j]
            hit = match_aspect(_angle_diff(lon1, lon2), ASPECT_CATALOG, orbs, allowed)
            if hit is None:
                continue
            name, error = hit
            res.append(AspectMatch(body_a=n1, body_b=n2, aspect_name=name, separation_error=error))
    return res


def sort_by_tightness(matches: Iterable[Any]) -> list:
    return sorted(matches, key=lambda m: m.separation_error)
