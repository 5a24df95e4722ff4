"""
Recommendation Service - Gemini Structured Generation

Caller-facing entry points for the five recommendation modes. Each function
delegates to the mode's orchestrator in firesync/agents/recommendation/.

Architecture:
- Pattern: Single-shot structured generation (one Gemini call per request)
- Model: Gemini 2.5 Flash (GEMINI_MODEL)
- API: Google Gen AI Python SDK (google-genai), async
- Output: JSON constrained by response_schema, validated with Pydantic

Error contract (see firesync/agents/recommendation/errors.py):
- ValidationError before any model call
- ProviderError / OutputSchemaViolation from the model call
- EmptyOutputError / MandatoryFieldMissingError from mode fallbacks

An empty list from the text-query, surprise or group modes means "no
results", not failure.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from firesync.agents.recommendation import (
    InvocationClient,
    RecommendationMode,
    get_orchestrator,
)
from firesync.schemas.analysis import WatchPatternAnalysis, WatchPatternAnalysisInput
from firesync.schemas.recommendations import (
    GroupCompromiseRecommendationInput,
    GroupProfilesRequest,
    PersonalizedRecommendationInput,
    RecommendationItem,
    SurpriseRecommendationInput,
    TextQueryRecommendationInput,
    UserProfile,
)
from firesync.utils.history import build_profile_summary
from firesync.utils.logging import preview

logger = logging.getLogger(__name__)


async def generate_content_recommendations(
    request: Union[PersonalizedRecommendationInput, Mapping[str, Any]],
    client: Optional[InvocationClient] = None,
) -> List[RecommendationItem]:
    """
    Personalized recommendations from mood, time of day, history and content type.

    Raises:
        EmptyOutputError: the model returned nothing
    """
    logger.info("generate_content_recommendations called")
    return await get_orchestrator(RecommendationMode.PERSONALIZED).run(request, client=client)


async def generate_text_query_recommendations(
    request: Union[TextQueryRecommendationInput, Mapping[str, Any]],
    client: Optional[InvocationClient] = None,
) -> List[RecommendationItem]:
    """Recommendations for a free-text search, personalized by the user's context."""
    if isinstance(request, TextQueryRecommendationInput):
        logger.info(f"generate_text_query_recommendations called, query='{preview(request.user_query)}'")
    else:
        logger.info("generate_text_query_recommendations called")
    return await get_orchestrator(RecommendationMode.TEXT_QUERY).run(request, client=client)


async def generate_surprise_recommendations(
    request: Union[SurpriseRecommendationInput, Mapping[str, Any]],
    client: Optional[InvocationClient] = None,
) -> List[RecommendationItem]:
    """Discovery picks that deliberately diverge from the user's history."""
    logger.info("generate_surprise_recommendations called")
    return await get_orchestrator(RecommendationMode.SURPRISE).run(request, client=client)


async def generate_group_compromise_recommendations(
    request: Union[GroupCompromiseRecommendationInput, Mapping[str, Any]],
    client: Optional[InvocationClient] = None,
) -> List[RecommendationItem]:
    """Compromise picks for two users described by profile summaries."""
    logger.info("generate_group_compromise_recommendations called")
    return await get_orchestrator(RecommendationMode.GROUP_COMPROMISE).run(request, client=client)


def resolve_group_content_type(user1: UserProfile, user2: UserProfile) -> str:
    """Shared content-type preference of two profiles, or BOTH when they differ."""
    if user1.content_type == user2.content_type:
        return user1.content_type
    return "BOTH"


def build_group_compromise_input(request: GroupProfilesRequest) -> GroupCompromiseRecommendationInput:
    """Turn two structured profiles into the group-compromise mode input."""
    target_content_type = request.target_content_type or resolve_group_content_type(
        request.user1, request.user2
    )
    return GroupCompromiseRecommendationInput(
        user1_profile_summary=build_profile_summary(request.user1),
        user2_profile_summary=build_profile_summary(request.user2),
        current_time_of_day=request.current_time_of_day,
        target_content_type=target_content_type,
    )


async def generate_group_recommendations_for_profiles(
    request: GroupProfilesRequest,
    client: Optional[InvocationClient] = None,
) -> List[RecommendationItem]:
    """Group-compromise recommendations built from two structured user profiles."""
    logger.info(
        f"generate_group_recommendations_for_profiles called for "
        f"'{request.user1.name}' and '{request.user2.name}'"
    )
    group_input = build_group_compromise_input(request)
    return await generate_group_compromise_recommendations(group_input, client=client)


async def analyze_watch_patterns(
    request: Union[WatchPatternAnalysisInput, Mapping[str, Any]],
    client: Optional[InvocationClient] = None,
) -> WatchPatternAnalysis:
    """
    Suggest mood/history weights and a genre mix for future recommendations.

    Raises:
        MandatoryFieldMissingError: the model omitted a mandatory field
    """
    logger.info("analyze_watch_patterns called")
    analysis = await get_orchestrator(RecommendationMode.WATCH_PATTERN_ANALYSIS).run(
        request, client=client
    )
    logger.info(
        f"Watch pattern analysis: moodWeight={analysis.mood_weight} "
        f"historyWeight={analysis.history_weight} genres={len(analysis.content_mix)}"
    )
    return analysis
