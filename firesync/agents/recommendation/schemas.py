"""
Recommendation Schema Registry

One input schema and one output schema per recommendation mode, built once at
import time and never mutated.

Each output schema carries:
- a Pydantic TypeAdapter used to validate the model's JSON payload
- an OpenAPI-style dict handed to Gemini as response_schema, so generation is
  guided towards the same shape the adapter enforces
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from firesync.agents.recommendation.errors import ValidationError
from firesync.schemas.analysis import WatchPatternAnalysis, WatchPatternAnalysisInput
from firesync.schemas.recommendations import (
    GroupCompromiseRecommendationInput,
    PersonalizedRecommendationInput,
    RecommendationItem,
    SurpriseRecommendationInput,
    TextQueryRecommendationInput,
)
from firesync.utils.constants import (
    GROUP_MAX_ITEMS,
    SURPRISE_ITEM_COUNT,
    TEXT_QUERY_ITEM_COUNT,
)


class RecommendationMode(str, Enum):
    """The five independent recommendation/analysis flows."""

    PERSONALIZED = "personalized"
    TEXT_QUERY = "text_query"
    SURPRISE = "surprise"
    GROUP_COMPROMISE = "group_compromise"
    WATCH_PATTERN_ANALYSIS = "watch_pattern_analysis"


@dataclass(frozen=True)
class OutputSchema:
    """Declared output shape of a mode."""

    name: str
    adapter: TypeAdapter
    response_schema: Dict[str, Any]
    # Wire names of the top-level fields that must be present (object outputs only)
    mandatory_fields: Tuple[str, ...] = ()
    # Upper bound on list outputs; None means no bound
    max_items: Optional[int] = None


@dataclass(frozen=True)
class ModeSchema:
    """Input and output schema pair for one mode."""

    mode: RecommendationMode
    input_model: Type[BaseModel]
    output: OutputSchema


# =============================================================================
# PROVIDER RESPONSE SCHEMAS
# =============================================================================

_PLATFORM_DESCRIPTION = (
    "The name of the OTT platform where this content is available "
    "(e.g., Netflix, Hulu, Amazon Prime Video)."
)


def _recommendation_list_schema(reason_description: str) -> Dict[str, Any]:
    """Build the response schema for a list of recommendation items."""
    return {
        "type": "ARRAY",
        "items": {
            "type": "OBJECT",
            "properties": {
                "title": {
                    "type": "STRING",
                    "description": "The title of the movie or TV series.",
                },
                "description": {
                    "type": "STRING",
                    "description": "A brief description of the movie or TV series.",
                },
                "reason": {
                    "type": "STRING",
                    "description": reason_description,
                },
                "platform": {
                    "type": "STRING",
                    "description": _PLATFORM_DESCRIPTION,
                },
            },
            "required": ["title", "description", "reason", "platform"],
        },
    }


PERSONALIZED_RESPONSE_SCHEMA = _recommendation_list_schema(
    "The reason for recommending this item based on the user's mood, time of day, "
    "viewing history (including mood at watch) and content type preference."
)

TEXT_QUERY_RESPONSE_SCHEMA = _recommendation_list_schema(
    "Why this item matches the user's search query AND how their mood, time of day "
    "and viewing history influenced the choice."
)

SURPRISE_RESPONSE_SCHEMA = _recommendation_list_schema(
    "Why this is a good surprise or hidden gem that differs from the user's usual "
    "viewing patterns, contrasting it with their history."
)

GROUP_COMPROMISE_RESPONSE_SCHEMA = _recommendation_list_schema(
    "Why this item is a good compromise for the group. Use the names provided in the "
    "profile summaries when referring to users."
)

WATCH_PATTERN_ANALYSIS_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "explanation": {
            "type": "STRING",
            "description": "An explanation of the analysis and suggestions. Mandatory.",
        },
        "moodWeight": {
            "type": "NUMBER",
            "minimum": 0,
            "maximum": 100,
            "description": "Suggested influence of mood, a NUMBER between 0 and 100. Use 50 when unsure.",
        },
        "historyWeight": {
            "type": "NUMBER",
            "minimum": 0,
            "maximum": 100,
            "description": "Suggested influence of viewing history, a NUMBER between 0 and 100. Use 50 when unsure.",
        },
        "contentMix": {
            "type": "ARRAY",
            "description": "Suggested genre mix, proportions ideally summing to 1. Empty array when not applicable.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "genre": {"type": "STRING"},
                    "proportion": {"type": "NUMBER", "minimum": 0, "maximum": 1},
                },
                "required": ["genre", "proportion"],
            },
        },
    },
    "required": ["explanation", "moodWeight", "historyWeight", "contentMix"],
}

ANALYSIS_MANDATORY_FIELDS = ("explanation", "moodWeight", "historyWeight", "contentMix")


# =============================================================================
# REGISTRY
# =============================================================================

_recommendation_list_adapter = TypeAdapter(List[RecommendationItem])

MODE_SCHEMAS: Mapping[RecommendationMode, ModeSchema] = {
    RecommendationMode.PERSONALIZED: ModeSchema(
        mode=RecommendationMode.PERSONALIZED,
        input_model=PersonalizedRecommendationInput,
        output=OutputSchema(
            name="RecommendationItemList",
            adapter=_recommendation_list_adapter,
            response_schema=PERSONALIZED_RESPONSE_SCHEMA,
        ),
    ),
    RecommendationMode.TEXT_QUERY: ModeSchema(
        mode=RecommendationMode.TEXT_QUERY,
        input_model=TextQueryRecommendationInput,
        output=OutputSchema(
            name="RecommendationItemList",
            adapter=_recommendation_list_adapter,
            response_schema=TEXT_QUERY_RESPONSE_SCHEMA,
            max_items=TEXT_QUERY_ITEM_COUNT,
        ),
    ),
    RecommendationMode.SURPRISE: ModeSchema(
        mode=RecommendationMode.SURPRISE,
        input_model=SurpriseRecommendationInput,
        output=OutputSchema(
            name="RecommendationItemList",
            adapter=_recommendation_list_adapter,
            response_schema=SURPRISE_RESPONSE_SCHEMA,
            max_items=SURPRISE_ITEM_COUNT,
        ),
    ),
    RecommendationMode.GROUP_COMPROMISE: ModeSchema(
        mode=RecommendationMode.GROUP_COMPROMISE,
        input_model=GroupCompromiseRecommendationInput,
        output=OutputSchema(
            name="RecommendationItemList",
            adapter=_recommendation_list_adapter,
            response_schema=GROUP_COMPROMISE_RESPONSE_SCHEMA,
            max_items=GROUP_MAX_ITEMS,
        ),
    ),
    RecommendationMode.WATCH_PATTERN_ANALYSIS: ModeSchema(
        mode=RecommendationMode.WATCH_PATTERN_ANALYSIS,
        input_model=WatchPatternAnalysisInput,
        output=OutputSchema(
            name="WatchPatternAnalysis",
            adapter=TypeAdapter(WatchPatternAnalysis),
            response_schema=WATCH_PATTERN_ANALYSIS_RESPONSE_SCHEMA,
            mandatory_fields=ANALYSIS_MANDATORY_FIELDS,
        ),
    ),
}


def get_mode_schema(mode: RecommendationMode) -> ModeSchema:
    """Return the registered schema pair for a mode."""
    return MODE_SCHEMAS[RecommendationMode(mode)]


def format_error_location(loc: Tuple[Union[int, str], ...]) -> str:
    """Render a Pydantic error location as a dotted field path."""
    return ".".join(str(part) for part in loc) or "<root>"


def validate_mode_input(
    mode: RecommendationMode,
    payload: Union[BaseModel, Mapping[str, Any]],
) -> BaseModel:
    """
    Validate a caller payload against the mode's input schema.

    Accepts an instance of the mode's input model (re-validated, since models
    can be built with model_construct) or a mapping using wire or Python field
    names.

    Raises:
        ValidationError: naming the first offending field path.
    """
    input_model = get_mode_schema(mode).input_model

    if isinstance(payload, BaseModel):
        payload = payload.model_dump(by_alias=True)

    try:
        return input_model.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        raise ValidationError(format_error_location(first["loc"]), first["msg"]) from e
