"""
Recommendation System - Single-Shot Structured Generation

Five modes share one orchestrator (validate -> render -> invoke -> fallback):
- personalized: mood, time of day, history and content type
- text_query: free-text search personalized by context
- surprise: discovery outside the user's usual patterns
- group_compromise: picks two different people can enjoy together
- watch_pattern_analysis: weighting advice for future recommendations

The service layer is in:
- firesync/services/recommendation_service.py
"""

from firesync.agents.recommendation.client import (
    GeminiInvocationClient,
    InvocationClient,
    get_invocation_client,
)
from firesync.agents.recommendation.errors import (
    EmptyOutputError,
    MandatoryFieldMissingError,
    OutputSchemaViolation,
    ProviderError,
    RecommendationError,
    ValidationError,
)
from firesync.agents.recommendation.orchestrator import (
    ModeOrchestrator,
    get_orchestrator,
    run_mode,
)
from firesync.agents.recommendation.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    render_prompt,
)
from firesync.agents.recommendation.schemas import (
    RecommendationMode,
    get_mode_schema,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "EmptyOutputError",
    "GeminiInvocationClient",
    "InvocationClient",
    "MandatoryFieldMissingError",
    "ModeOrchestrator",
    "OutputSchemaViolation",
    "ProviderError",
    "RecommendationError",
    "RecommendationMode",
    "ValidationError",
    "get_invocation_client",
    "get_mode_schema",
    "get_orchestrator",
    "render_prompt",
    "run_mode",
]
