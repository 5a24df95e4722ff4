"""
FastAPI routes for recommendation endpoints.

All endpoints are single Gemini calls with structured JSON output. An empty
recommendations list is a normal 200 result.

Endpoints:
- POST /recommendations/personalized: Mood/time/history based picks
- POST /recommendations/search: Free-text search personalized by context
- POST /recommendations/surprise: Discovery outside the usual patterns
- POST /recommendations/group: Compromise picks from two profile summaries
- POST /recommendations/group/profiles: Compromise picks from two structured profiles
"""

import logging

from fastapi import APIRouter, status

from firesync.agents.recommendation.errors import RecommendationError
from firesync.routes.errors import to_http_exception
from firesync.schemas.recommendations import (
    GroupCompromiseRecommendationInput,
    GroupProfilesRequest,
    PersonalizedRecommendationInput,
    RecommendationListResponse,
    SurpriseRecommendationInput,
    TextQueryRecommendationInput,
)
from firesync.services.recommendation_service import (
    generate_content_recommendations,
    generate_group_compromise_recommendations,
    generate_group_recommendations_for_profiles,
    generate_surprise_recommendations,
    generate_text_query_recommendations,
)
from firesync.utils.logging import preview

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/personalized",
    response_model=RecommendationListResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Personalized recommendations",
    description="""
    Recommends movies and/or TV series from the user's current mood, time of
    day, viewing history and preferred content type.

    **Errors:**
    - 422: Invalid enumerated value or missing field
    - 502: The model returned nothing or malformed output
    - 503: Recommendation provider not configured
    """
)
async def personalized_recommendations_endpoint(
    request: PersonalizedRecommendationInput,
) -> RecommendationListResponse:
    logger.info(
        f"POST /recommendations/personalized called, mood={request.mood}, "
        f"content_type={request.content_type}"
    )

    try:
        items = await generate_content_recommendations(request)
    except RecommendationError as e:
        raise to_http_exception(e, "fetch content recommendations") from e

    logger.info(f"Returning {len(items)} personalized recommendations")
    return RecommendationListResponse(recommendations=items)


@router.post(
    "/search",
    response_model=RecommendationListResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Search recommendations by free text",
    description="""
    Fulfills a free-text query ("a movie about a friendly robot") first, then
    uses mood, time of day, history, content type and language to choose among
    the matches. Asks the model for exactly 6 items.
    """
)
async def search_recommendations_endpoint(
    request: TextQueryRecommendationInput,
) -> RecommendationListResponse:
    logger.info(
        f"POST /recommendations/search called, query='{preview(request.user_query)}', "
        f"content_type={request.content_type}"
    )

    try:
        items = await generate_text_query_recommendations(request)
    except RecommendationError as e:
        raise to_http_exception(e, "fetch search recommendations") from e

    logger.info(f"Returning {len(items)} search recommendations")
    return RecommendationListResponse(recommendations=items)


@router.post(
    "/surprise",
    response_model=RecommendationListResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Surprise me",
    description="""
    Hidden gems and titles from genres the user rarely watches. Each reason
    explains how the pick differs from the user's history.
    """
)
async def surprise_recommendations_endpoint(
    request: SurpriseRecommendationInput,
) -> RecommendationListResponse:
    logger.info(f"POST /recommendations/surprise called, content_type={request.content_type}")

    try:
        items = await generate_surprise_recommendations(request)
    except RecommendationError as e:
        raise to_http_exception(e, "fetch surprise recommendations") from e

    logger.info(f"Returning {len(items)} surprise recommendations")
    return RecommendationListResponse(recommendations=items)


@router.post(
    "/group",
    response_model=RecommendationListResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Group compromise from profile summaries",
    description="""
    3-4 picks two people can enjoy together. Reasons refer to the users by the
    names found in their profile summaries.
    """
)
async def group_recommendations_endpoint(
    request: GroupCompromiseRecommendationInput,
) -> RecommendationListResponse:
    logger.info(
        f"POST /recommendations/group called, target_content_type={request.target_content_type}"
    )

    try:
        items = await generate_group_compromise_recommendations(request)
    except RecommendationError as e:
        raise to_http_exception(e, "fetch group recommendations") from e

    logger.info(f"Returning {len(items)} group recommendations")
    return RecommendationListResponse(recommendations=items)


@router.post(
    "/group/profiles",
    response_model=RecommendationListResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Group compromise from structured profiles",
    description="""
    Same as /recommendations/group, but builds both profile summaries from
    structured profiles (name, mood, time of day, history, content type,
    language). When targetContentType is omitted the shared preference is
    used, or BOTH when the users disagree.
    """
)
async def group_profiles_recommendations_endpoint(
    request: GroupProfilesRequest,
) -> RecommendationListResponse:
    logger.info("POST /recommendations/group/profiles called")

    try:
        items = await generate_group_recommendations_for_profiles(request)
    except RecommendationError as e:
        raise to_http_exception(e, "fetch group recommendations") from e

    logger.info(f"Returning {len(items)} group recommendations")
    return RecommendationListResponse(recommendations=items)
