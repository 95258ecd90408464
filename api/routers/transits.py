from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from ..schemas import TransitAspectOut, TransitNatalRequest, TransitNatalResponse
from ..services import ephemeris_client
from ..services.transits import detect_transit_aspects, top_transits
from .charts import placement_records

router = APIRouter(prefix="/v1/transits", tags=["transits"])


def _out(t) -> TransitAspectOut:
    return TransitAspectOut(
        transit_body=t.transit_body,
        natal_body=t.natal_body,
        aspect=t.aspect_name,
        separation_error=round(t.separation_error, 4),
    )


@router.post("/natal", response_model=TransitNatalResponse)
def transits_to_natal(req: TransitNatalRequest):
    natal = placement_records(req.natal)
    meta = {"language": req.language}

    if req.transiting is not None:
        transiting = placement_records(req.transiting)
        meta["moment"] = None
    else:
        now = datetime.now(timezone.utc)
        payload = ephemeris_client.payload_for_moment(
            now, req.location.latitude, req.location.longitude, req.language
        )
        try:
            transiting = ephemeris_client.fetch_planets(payload)
        except ephemeris_client.EphemerisUnavailableError as exc:
            raise HTTPException(status_code=501, detail=str(exc))
        except ephemeris_client.EphemerisUpstreamError as exc:
            raise HTTPException(status_code=502, detail=str(exc))
        meta["moment"] = now.isoformat()

    hits = detect_transit_aspects(transiting, natal, orbs=req.orbs, language=req.language)
    top = top_transits(hits)
    return TransitNatalResponse(
        meta=meta,
        aspects=[_out(t) for t in hits],
        top=[_out(t) for t in top],
    )
