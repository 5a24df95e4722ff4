"""
Pydantic schemas for watch-pattern analysis.

The analysis output is strict: all four fields are mandatory, weights are
percentages in [0, 100] and content-mix proportions are in [0, 1].
"""

from typing import Any, List

from pydantic import Field, TypeAdapter, field_validator

from firesync.schemas.recommendations import (
    FireSyncModel,
    Mood,
    TimeOfDay,
    ViewingHistoryEntry,
)
from firesync.utils.history import serialize_viewing_history

_history_adapter = TypeAdapter(List[ViewingHistoryEntry])


class WatchPatternAnalysisInput(FireSyncModel):
    """
    Input for watch-pattern analysis.

    viewing_history is JSON text; a list of entries is serialized to JSON so
    the model can see per-entry moodAtWatch tags.
    """

    viewing_history: str = Field(
        ...,
        description="JSON array of viewing history entries (titles, ratings, completions, moodAtWatch)",
    )
    current_mood: Mood
    current_time: TimeOfDay

    @field_validator("viewing_history", mode="before")
    @classmethod
    def serialize_history_entries(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return serialize_viewing_history(_history_adapter.validate_python(value))
        return value


class ContentMixEntry(FireSyncModel):
    """Share of one genre in the suggested content mix."""

    genre: str = Field(..., min_length=1, examples=["comedy"])
    proportion: float = Field(..., ge=0, le=1, examples=[0.6])


class WatchPatternAnalysis(FireSyncModel):
    """
    Result of analyzing a user's viewing history.

    Proportions in content_mix are expected to sum to roughly 1.0; this is an
    instruction to the model and is not enforced.
    """

    explanation: str = Field(..., min_length=1)
    mood_weight: float = Field(..., ge=0, le=100, description="Influence of mood, percent")
    history_weight: float = Field(..., ge=0, le=100, description="Influence of history, percent")
    content_mix: List[ContentMixEntry] = Field(
        ..., description="Suggested genre mix; empty when no mix can be derived"
    )

    @field_validator("content_mix", mode="before")
    @classmethod
    def mapping_to_entries(cls, value: Any) -> Any:
        # Models sometimes answer with {"comedy": 0.6, ...} instead of a list
        if isinstance(value, dict):
            return [{"genre": genre, "proportion": proportion} for genre, proportion in value.items()]
        return value
