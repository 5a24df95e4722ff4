"""
Closed value sets and per-mode constants for recommendation requests.

The tuples mirror the Literal types in firesync.schemas.recommendations and
are used where a runtime sequence is needed (CLI choices, tests).
"""

MOODS = (
    "Happy",
    "Sad",
    "Goofy",
    "Excited",
    "Relaxed",
    "Adventurous",
    "Romantic",
    "Neutral",
)

TIMES_OF_DAY = ("Morning", "Afternoon", "Evening", "Night")

CONTENT_TYPES = ("MOVIES", "TV_SERIES", "BOTH")

LANGUAGES = (
    "Any",
    "English",
    "Spanish",
    "French",
    "German",
    "Italian",
    "Hindi",
    "Japanese",
    "Korean",
)

# Human-readable content noun used inside prompts
CONTENT_TYPE_LABELS = {
    "MOVIES": "movies",
    "TV_SERIES": "TV series",
    "BOTH": "movies and TV series",
}

# Item counts requested from the model. The provider is instructed, not forced:
# shorter lists are accepted, longer ones are truncated to the maximum.
TEXT_QUERY_ITEM_COUNT = 6
SURPRISE_ITEM_COUNT = 6
GROUP_MIN_ITEMS = 3
GROUP_MAX_ITEMS = 4

# Neutral analysis weights used when no pattern is discernible
DEFAULT_MOOD_WEIGHT = 50
DEFAULT_HISTORY_WEIGHT = 50
