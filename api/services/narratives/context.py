"""Explicit chart state handed to narrative builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..aspects import AspectConfig, AspectMatch, detect_aspects
from ..houses import HouseCusp, derive_houses
from ..placements import CelestialPlacement, parse_placements


@dataclass
class ChartContext:
    placements: List[CelestialPlacement]
    houses: List[HouseCusp] = field(default_factory=list)
    aspects: List[AspectMatch] = field(default_factory=list)
    birth: Dict[str, Any] = field(default_factory=dict)
    transiting: List[CelestialPlacement] = field(default_factory=list)
    language: str = "en"

    def find(self, canonical_name: str) -> Optional[CelestialPlacement]:
        for p in self.placements:
            if p.canonical_name == canonical_name:
                return p
        return None


def build_context(
    records: Iterable[Any],
    config: AspectConfig | None = None,
    birth: Optional[Dict[str, Any]] = None,
    transiting: Optional[Iterable[Any]] = None,
) -> ChartContext:
    config = config or AspectConfig()
    placements = parse_placements(records, config.language)
    return ChartContext(
        placements=placements,
        houses=derive_houses(placements, config.language),
        aspects=detect_aspects(placements, config),
        birth=dict(birth or {}),
        transiting=parse_placements(transiting or [], config.language),
        language=config.language,
    )
