import logging

from fastapi import APIRouter, HTTPException

from ..schemas import InsightsRequest, InsightsResponse
from ..services import llm_client
from ..services.narratives.assembler import build_ai_prompt, build_insights_text
from ..services.narratives.context import ChartContext, build_context
from .charts import aspect_config, placement_records

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/insights", tags=["insights"])


def _context(req: InsightsRequest) -> ChartContext:
    return build_context(
        placement_records(req.placements),
        aspect_config(req.options, req.language),
        birth=req.birth.model_dump() if req.birth else None,
        transiting=placement_records(req.transiting or []),
    )


@router.post("", response_model=InsightsResponse)
async def insights(req: InsightsRequest):
    ctx = _context(req)
    if req.use_ai:
        try:
            content = await llm_client.generate_insights_text(build_ai_prompt(ctx))
        except llm_client.LLMUnavailableError as exc:
            logger.warning("AI insights unavailable, using local text: %s", exc)
            return InsightsResponse(
                source="local",
                content=build_insights_text(ctx),
                warnings=[str(exc)],
            )
        if content:
            return InsightsResponse(source="ai", content=content)
        logger.warning("AI insights returned no content, using local text")
        return InsightsResponse(
            source="local",
            content=build_insights_text(ctx),
            warnings=["AI returned no content"],
        )
    return InsightsResponse(source="local", content=build_insights_text(ctx))


@router.post("/ai", response_model=InsightsResponse)
async def insights_ai(req: InsightsRequest):
    if not llm_client.is_configured():
        raise HTTPException(status_code=501, detail="GROQ_API_KEY missing (AI disabled)")
    ctx = _context(req)
    try:
        content = await llm_client.generate_insights_text(build_ai_prompt(ctx))
    except llm_client.LLMUnavailableError as exc:
        raise HTTPException(status_code=502, detail=str(exc))
    return InsightsResponse(source="ai", content=content)
