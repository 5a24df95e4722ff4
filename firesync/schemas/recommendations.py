"""
Pydantic schemas for the recommendation modes.

These models define the strict request/response contracts for the
personalized, text-query, surprise and group-compromise recommendation flows.
Wire field names are camelCase; Python attributes are snake_case. Both are
accepted on input.
"""

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from firesync.utils.history import summarize_viewing_history

# ============================================================================
# CLOSED VALUE SETS
# ============================================================================

Mood = Literal["Happy", "Sad", "Goofy", "Excited", "Relaxed", "Adventurous", "Romantic", "Neutral"]

TimeOfDay = Literal["Morning", "Afternoon", "Evening", "Night"]

ContentType = Literal["MOVIES", "TV_SERIES", "BOTH"]

Language = Literal[
    "Any", "English", "Spanish", "French", "German", "Italian", "Hindi", "Japanese", "Korean"
]


class FireSyncModel(BaseModel):
    """Base model: camelCase aliases, whitespace-stripped strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


# ============================================================================
# VIEWING HISTORY
# ============================================================================

class ViewingHistoryEntry(FireSyncModel):
    """
    A single watched title logged by the user.

    Owned by the caller. The core only reads entries to serialize them into
    prompt context; it never mutates them.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = Field(None, description="Caller-side identifier of the entry")
    title: str = Field(..., min_length=1, examples=["Inception"])
    rating: int = Field(..., ge=1, le=5, description="User rating, 1-5 inclusive")
    completed: bool = Field(..., description="Whether the user finished watching")
    mood_at_watch: Optional[Mood] = Field(
        None, description="The user's mood when they watched this title"
    )
    time_of_day_at_watch: Optional[TimeOfDay] = None
    language_at_watch: Optional[str] = None


_history_adapter = TypeAdapter(List[ViewingHistoryEntry])


class HistoryContextInput(FireSyncModel):
    """
    Base for inputs carrying viewing history as prompt context.

    Accepts already-serialized text, or a list of entries which is summarized
    into one sentence before templating.
    """

    viewing_history: str = Field(
        ...,
        description=(
            "A summary of the user's viewing history. May include titles, ratings, "
            "completion status and moodAtWatch."
        ),
    )

    @field_validator("viewing_history", mode="before")
    @classmethod
    def summarize_history_entries(cls, value: Any) -> Any:
        if isinstance(value, (list, tuple)):
            return summarize_viewing_history(_history_adapter.validate_python(value))
        return value


# ============================================================================
# REQUEST MODELS (one per mode)
# ============================================================================

class PersonalizedRecommendationInput(HistoryContextInput):
    """Input for personalized recommendations (mood + time + history)."""

    mood: Mood = Field(..., description="The current mood of the user")
    time_of_day: TimeOfDay = Field(..., description="The current time of day")
    content_type: ContentType = Field(..., description="MOVIES, TV_SERIES or BOTH")


class TextQueryRecommendationInput(HistoryContextInput):
    """Input for free-text search recommendations personalized with context."""

    user_query: str = Field(
        ...,
        min_length=1,
        max_length=500,
        examples=["a movie about a friendly robot", "historical drama series"],
    )
    mood: Mood
    time_of_day: TimeOfDay
    content_type: ContentType
    language: Language = Field("Any", description="Original-language filter; Any disables it")


class SurpriseRecommendationInput(HistoryContextInput):
    """Input for "surprise me" recommendations. The history is the baseline to diverge from."""

    content_type: ContentType


class GroupCompromiseRecommendationInput(FireSyncModel):
    """Input for group-compromise recommendations between two profiles."""

    user1_profile_summary: str = Field(
        ...,
        min_length=1,
        description="Summary of the first user's profile including their name",
    )
    user2_profile_summary: str = Field(
        ...,
        min_length=1,
        description="Summary of the second user's profile including their name",
    )
    current_time_of_day: TimeOfDay
    target_content_type: ContentType


class UserProfile(FireSyncModel):
    """A user's saved preferences and history, used to build a group profile summary."""

    name: str = Field(..., min_length=1, max_length=100, examples=["Admin", "Parth"])
    mood: Mood = "Neutral"
    time_of_day: TimeOfDay
    viewing_history: List[ViewingHistoryEntry] = Field(default_factory=list)
    content_type: ContentType = "BOTH"
    language: Language = "Any"


class GroupProfilesRequest(FireSyncModel):
    """
    Request to build group-compromise recommendations from two structured profiles.

    When target_content_type is omitted, a shared preference is used, or BOTH
    when the two profiles disagree.
    """

    user1: UserProfile
    user2: UserProfile
    current_time_of_day: TimeOfDay
    target_content_type: Optional[ContentType] = None


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationItem(FireSyncModel):
    """
    A single recommended movie or series.

    All four fields are mandatory and must be non-blank.
    """

    title: str = Field(..., min_length=1, description="The title of the movie or TV series")
    description: str = Field(..., min_length=1, description="A brief description")
    reason: str = Field(
        ...,
        min_length=1,
        description="Why this item was picked; content depends on the mode",
    )
    platform: str = Field(
        ...,
        min_length=1,
        description="The OTT platform where it is available (e.g., Netflix, Hulu)",
        examples=["Netflix", "Amazon Prime Video"],
    )


class RecommendationListResponse(FireSyncModel):
    """
    Response for every recommendation mode.

    An empty list is a normal "no results" state, not an error.
    """

    recommendations: List[RecommendationItem] = Field(default_factory=list)
