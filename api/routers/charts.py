import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from ..schemas import (
    AspectOptions,
    AspectOut,
    ChartResponse,
    ComputeRequest,
    DeriveRequest,
    HouseOut,
    MetaOut,
    PlacementIn,
    PlacementOut,
)
from ..services import ephemeris_client
from ..services.aspects import AspectConfig, detect_aspects
from ..services.constants import ENGINE_VERSION, SIGN_NAMES
from ..services.houses import derive_houses, house_of
from ..services.placements import parse_placements

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/charts", tags=["charts"])


def placement_records(items: List[PlacementIn]) -> List[Dict[str, Any]]:
    return [p.model_dump(exclude_none=True) for p in items]


def aspect_config(options: AspectOptions, language: str) -> AspectConfig:
    return AspectConfig(
        language=language,
        allowed_aspects=options.allowed_aspects,
        excluded_bodies=options.excluded_bodies,
        orb_overrides=options.orb_overrides,
    )


def build_chart(records: List[Dict[str, Any]], options: AspectOptions, language: str, zodiac: str = "tropical") -> ChartResponse:
    placements = parse_placements(records, language)
    houses = derive_houses(placements, language)
    aspects = detect_aspects(placements, aspect_config(options, language))

    warnings = []
    if not houses:
        warnings.append("No Ascendant with a usable sign; houses omitted.")

    bodies = [
        PlacementOut(
            name=p.name,
            canonical_name=p.canonical_name,
            lon=round(p.longitude, 4),
            sign_index=p.sign_index,
            sign=SIGN_NAMES[p.sign_index] if p.sign_index is not None else None,
            house=house_of(p.longitude, houses),
            retro=p.is_retrograde,
        )
        for p in placements
        if p.name
    ]
    return ChartResponse(
        meta=MetaOut(
            engine_version=ENGINE_VERSION,
            zodiac=zodiac,
            language=language,
            warnings=(warnings or None),
        ),
        placements=bodies,
        houses=[
            HouseOut(
                num=h.house_number,
                cusp_lon=h.start_longitude,
                norm_degree=h.norm_degree,
                sign_index=h.sign_index,
                sign=h.sign_name,
            )
            for h in houses
        ],
        aspects=[
            AspectOut(
                body_a=a.body_a,
                body_b=a.body_b,
                aspect=a.aspect_name,
                separation_error=round(a.separation_error, 4),
            )
            for a in aspects
        ],
    )


@router.post("/compute", response_model=ChartResponse)
def compute_chart(req: ComputeRequest):
    try:
        records = ephemeris_client.fetch_planets(req.birth.model_dump())
    except ephemeris_client.EphemerisUnavailableError as exc:
        raise HTTPException(status_code=501, detail=str(exc))
    except ephemeris_client.EphemerisUpstreamError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    cfg = req.birth.config
    logger.info("Fetched %d placements for chart", len(records))
    return build_chart(records, req.options, cfg.language, zodiac=cfg.ayanamsha)


@router.post("/derive", response_model=ChartResponse)
def derive_chart(req: DeriveRequest):
    return build_chart(placement_records(req.placements), req.options, req.language)
