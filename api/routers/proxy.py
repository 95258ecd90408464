from typing import Any, Dict, Literal

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse, Response

from ..services import ephemeris_client

router = APIRouter(prefix="/api/western", tags=["proxy"])


@router.post("/{endpoint}")
def proxy_western(
    endpoint: Literal["planets", "houses", "aspects"],
    payload: Dict[str, Any] = Body(default={}),
):
    """Forward the body upstream with the server's API key; pass the reply through."""

    try:
        r = ephemeris_client.post_raw(ephemeris_client.PROXY_PATHS[endpoint], payload)
    except ephemeris_client.EphemerisUnavailableError as exc:
        return JSONResponse({"ok": False, "error": str(exc)}, status_code=501)
    except ephemeris_client.EphemerisUpstreamError:
        return JSONResponse({"ok": False, "error": "Astrology proxy error"}, status_code=500)
    return Response(content=r.content, status_code=r.status_code, media_type="application/json")
