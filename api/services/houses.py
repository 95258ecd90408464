from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from .constants import SIGN_NAMES, sign_index_from_lon
from .placements import CelestialPlacement, find_placement, parse_placements


@dataclass(frozen=True)
class HouseCusp:
    house_number: int
    start_longitude: float
    sign_index: int
    norm_degree: float = 0.0

    @property
    def sign_name(self) -> str:
        return SIGN_NAMES[self.sign_index]


def whole_sign_houses(start_sign: int) -> list[HouseCusp]:
    """Twelve cusps, one per sign, starting at ``start_sign`` (0-based)."""

    out = []
    for i in range(12):
        cusp = ((start_sign + i) * 30) % 360
        out.append(HouseCusp(
            house_number=i + 1,
            start_longitude=float(cusp),
            sign_index=sign_index_from_lon(cusp),
        ))
    return out


def derive_houses(placements: Iterable[Any], language: str = "en") -> list[HouseCusp]:
    """Whole-sign houses from the Ascendant's sign.

    Returns an empty list when the chart has no Ascendant or its sign cannot
    be determined.
    """

    parsed = parse_placements(placements, language)
    asc: Optional[CelestialPlacement] = find_placement(parsed, "Ascendant")
    if asc is None or asc.sign_index is None:
        return []
    return whole_sign_houses(asc.sign_index)


def house_of(lon: float, houses: list[HouseCusp]) -> int | None:
    # Whole-sign: the house is the one holding the longitude's sign.
    if not houses:
        return None
    sidx = sign_index_from_lon(lon % 360.0)
    dist = (sidx - houses[0].sign_index) % 12
    return dist + 1
