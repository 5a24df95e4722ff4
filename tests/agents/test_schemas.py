"""
Tests for the recommendation schema registry and input/output models.

Covers:
- Closed value sets reject unknown values (never coerced)
- Numeric bounds on ratings, weights and proportions
- Viewing history accepted as text or as a list of entries
- validate_mode_input naming the offending field path
"""

from typing import get_args

import pytest
from pydantic import ValidationError as PydanticValidationError

from firesync.agents.recommendation.errors import ValidationError
from firesync.agents.recommendation.schemas import (
    ANALYSIS_MANDATORY_FIELDS,
    MODE_SCHEMAS,
    RecommendationMode,
    format_error_location,
    get_mode_schema,
    validate_mode_input,
)
from firesync.schemas.analysis import WatchPatternAnalysis, WatchPatternAnalysisInput
from firesync.schemas.recommendations import (
    ContentType,
    Language,
    Mood,
    RecommendationItem,
    TextQueryRecommendationInput,
    TimeOfDay,
    ViewingHistoryEntry,
)
from firesync.utils.constants import CONTENT_TYPES, LANGUAGES, MOODS, TIMES_OF_DAY


# =============================================================================
# REGISTRY
# =============================================================================

class TestRegistry:
    """Every mode has a schema pair."""

    def test_all_modes_registered(self):
        assert set(MODE_SCHEMAS) == set(RecommendationMode)

    def test_get_mode_schema_accepts_string_value(self):
        schema = get_mode_schema("text_query")
        assert schema.mode is RecommendationMode.TEXT_QUERY
        assert schema.input_model is TextQueryRecommendationInput

    def test_item_caps(self):
        assert get_mode_schema(RecommendationMode.TEXT_QUERY).output.max_items == 6
        assert get_mode_schema(RecommendationMode.SURPRISE).output.max_items == 6
        assert get_mode_schema(RecommendationMode.GROUP_COMPROMISE).output.max_items == 4
        assert get_mode_schema(RecommendationMode.PERSONALIZED).output.max_items is None

    def test_analysis_mandatory_fields(self):
        output = get_mode_schema(RecommendationMode.WATCH_PATTERN_ANALYSIS).output
        assert output.mandatory_fields == ANALYSIS_MANDATORY_FIELDS
        assert output.response_schema["required"] == list(ANALYSIS_MANDATORY_FIELDS)

    def test_recommendation_response_schema_requires_all_item_fields(self):
        for mode in (
            RecommendationMode.PERSONALIZED,
            RecommendationMode.TEXT_QUERY,
            RecommendationMode.SURPRISE,
            RecommendationMode.GROUP_COMPROMISE,
        ):
            item_schema = get_mode_schema(mode).output.response_schema["items"]
            assert item_schema["required"] == ["title", "description", "reason", "platform"]

    def test_constants_mirror_literal_types(self):
        assert get_args(Mood) == MOODS
        assert get_args(TimeOfDay) == TIMES_OF_DAY
        assert get_args(ContentType) == CONTENT_TYPES
        assert get_args(Language) == LANGUAGES


# =============================================================================
# INPUT VALIDATION
# =============================================================================

class TestValidateModeInput:
    """validate_mode_input converts Pydantic errors into ValidationError."""

    def test_accepts_wire_names(self):
        request = validate_mode_input(
            RecommendationMode.PERSONALIZED,
            {"mood": "Happy", "timeOfDay": "Evening", "viewingHistory": "none", "contentType": "MOVIES"},
        )
        assert request.time_of_day == "Evening"
        assert request.content_type == "MOVIES"

    def test_accepts_python_names(self):
        request = validate_mode_input(
            RecommendationMode.SURPRISE,
            {"viewing_history": "none", "content_type": "BOTH"},
        )
        assert request.content_type == "BOTH"

    def test_unknown_mood_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mode_input(
                RecommendationMode.PERSONALIZED,
                {"mood": "Hungry", "timeOfDay": "Evening", "viewingHistory": "", "contentType": "MOVIES"},
            )
        assert exc_info.value.field == "mood"

    def test_unknown_content_type_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mode_input(
                RecommendationMode.SURPRISE,
                {"viewingHistory": "", "contentType": "PODCASTS"},
            )
        assert exc_info.value.field == "contentType"

    def test_missing_time_of_day_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mode_input(
                RecommendationMode.PERSONALIZED,
                {"mood": "Happy", "viewingHistory": "", "contentType": "MOVIES"},
            )
        assert exc_info.value.field == "timeOfDay"

    def test_blank_query_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mode_input(
                RecommendationMode.TEXT_QUERY,
                {
                    "userQuery": "   ",
                    "mood": "Happy",
                    "timeOfDay": "Evening",
                    "viewingHistory": "",
                    "contentType": "MOVIES",
                },
            )
        assert exc_info.value.field == "userQuery"

    def test_language_defaults_to_any(self):
        request = validate_mode_input(
            RecommendationMode.TEXT_QUERY,
            {
                "userQuery": "robots",
                "mood": "Happy",
                "timeOfDay": "Evening",
                "viewingHistory": "",
                "contentType": "MOVIES",
            },
        )
        assert request.language == "Any"

    def test_blank_group_summary_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mode_input(
                RecommendationMode.GROUP_COMPROMISE,
                {
                    "user1ProfileSummary": "Name: Admin.",
                    "user2ProfileSummary": "",
                    "currentTimeOfDay": "Evening",
                    "targetContentType": "MOVIES",
                },
            )
        assert exc_info.value.field == "user2ProfileSummary"

    def test_history_entry_rating_out_of_range_names_path(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_mode_input(
                RecommendationMode.SURPRISE,
                {
                    "viewingHistory": [{"title": "Inception", "rating": 6, "completed": True}],
                    "contentType": "BOTH",
                },
            )
        assert exc_info.value.field.startswith("viewingHistory")

    def test_model_instance_is_revalidated(self):
        request = TextQueryRecommendationInput.model_construct(
            user_query="robots",
            mood="Hungry",
            time_of_day="Evening",
            viewing_history="",
            content_type="MOVIES",
            language="Any",
        )
        with pytest.raises(ValidationError):
            validate_mode_input(RecommendationMode.TEXT_QUERY, request)

    def test_error_message_names_field(self):
        error = ValidationError("mood", "Input should be 'Happy'")
        assert "mood" in str(error)


class TestViewingHistoryInput:
    """Viewing history may be text or a list of entries."""

    def test_list_summarized_for_recommendation_modes(self, viewing_history):
        request = validate_mode_input(
            RecommendationMode.SURPRISE,
            {"viewingHistory": viewing_history, "contentType": "BOTH"},
        )
        assert request.viewing_history.startswith("User has watched: Inception")
        assert "mood when watched: Excited" in request.viewing_history

    def test_empty_list_summarized(self):
        request = validate_mode_input(
            RecommendationMode.SURPRISE,
            {"viewingHistory": [], "contentType": "BOTH"},
        )
        assert request.viewing_history == "User has no viewing history yet."

    def test_list_serialized_as_json_for_analysis(self, viewing_history):
        request = WatchPatternAnalysisInput.model_validate({
            "viewingHistory": viewing_history,
            "currentMood": "Happy",
            "currentTime": "Evening",
        })
        assert '"moodAtWatch": "Excited"' in request.viewing_history
        assert request.viewing_history.startswith("[")

    def test_entry_is_frozen(self):
        entry = ViewingHistoryEntry(title="Inception", rating=5, completed=True)
        with pytest.raises(PydanticValidationError):
            entry.rating = 1

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_bounds(self, rating):
        with pytest.raises(PydanticValidationError):
            ViewingHistoryEntry(title="Inception", rating=rating, completed=True)


# =============================================================================
# OUTPUT MODELS
# =============================================================================

class TestOutputModels:
    """Output models enforce non-blank fields and numeric bounds."""

    def test_item_rejects_blank_reason(self):
        with pytest.raises(PydanticValidationError):
            RecommendationItem(title="WALL-E", description="Robot", reason="  ", platform="Disney+")

    def test_analysis_accepts_bounds(self):
        analysis = WatchPatternAnalysis.model_validate({
            "explanation": "Edge case",
            "moodWeight": 0,
            "historyWeight": 100,
            "contentMix": [{"genre": "drama", "proportion": 1}],
        })
        assert analysis.mood_weight == 0
        assert analysis.history_weight == 100

    @pytest.mark.parametrize("field,value", [
        ("moodWeight", 101),
        ("moodWeight", -1),
        ("historyWeight", 150),
    ])
    def test_analysis_weight_out_of_range(self, analysis_payload, field, value):
        analysis_payload[field] = value
        with pytest.raises(PydanticValidationError):
            WatchPatternAnalysis.model_validate(analysis_payload)

    def test_analysis_proportion_out_of_range(self, analysis_payload):
        analysis_payload["contentMix"] = [{"genre": "comedy", "proportion": 1.5}]
        with pytest.raises(PydanticValidationError):
            WatchPatternAnalysis.model_validate(analysis_payload)

    def test_analysis_empty_content_mix_allowed(self, analysis_payload):
        analysis_payload["contentMix"] = []
        assert WatchPatternAnalysis.model_validate(analysis_payload).content_mix == []

    def test_analysis_content_mix_mapping_normalized(self, analysis_payload):
        analysis_payload["contentMix"] = {"comedy": 0.7, "drama": 0.3}
        analysis = WatchPatternAnalysis.model_validate(analysis_payload)
        assert [(e.genre, e.proportion) for e in analysis.content_mix] == [("comedy", 0.7), ("drama", 0.3)]

    def test_analysis_dumps_wire_names(self, analysis_payload):
        dumped = WatchPatternAnalysis.model_validate(analysis_payload).model_dump(by_alias=True)
        assert set(dumped) == {"explanation", "moodWeight", "historyWeight", "contentMix"}


def test_format_error_location():
    assert format_error_location((0, "reason")) == "0.reason"
    assert format_error_location(()) == "<root>"
