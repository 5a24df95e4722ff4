"""
FastAPI routes for watch-pattern analysis.

Endpoints:
- POST /analysis/watch-patterns: Suggested mood/history weights and genre mix
"""

import logging

from fastapi import APIRouter, status

from firesync.agents.recommendation.errors import RecommendationError
from firesync.routes.errors import to_http_exception
from firesync.schemas.analysis import WatchPatternAnalysis, WatchPatternAnalysisInput
from firesync.services.recommendation_service import analyze_watch_patterns

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/analysis",
    tags=["analysis"]
)


@router.post(
    "/watch-patterns",
    response_model=WatchPatternAnalysis,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Analyze watch patterns",
    description="""
    Analyzes viewing history, current mood and time of day and suggests how
    strongly mood and history should weigh on future recommendations, plus a
    genre mix.

    **Errors:**
    - 422: Invalid mood or time of day
    - 502: The model omitted a mandatory field or returned malformed output
    - 503: Recommendation provider not configured
    """
)
async def watch_patterns_endpoint(
    request: WatchPatternAnalysisInput,
) -> WatchPatternAnalysis:
    logger.info(
        f"POST /analysis/watch-patterns called, mood={request.current_mood}, "
        f"time={request.current_time}"
    )

    try:
        return await analyze_watch_patterns(request)
    except RecommendationError as e:
        raise to_http_exception(e, "analyze watch patterns") from e
