"""
Viewing-history serialization helpers.

The recommendation prompts receive viewing history as text. Two renderings are
used:
- a one-line natural-language summary for the recommendation modes
- a JSON array for watch-pattern analysis, which needs per-entry structure

Entries are never mutated here; both helpers return new strings.
"""

import json
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from firesync.schemas.recommendations import UserProfile, ViewingHistoryEntry


NO_HISTORY_SUMMARY = "User has no viewing history yet."


def summarize_viewing_history(entries: Sequence["ViewingHistoryEntry"]) -> str:
    """
    Summarize viewing history into a single sentence for prompt context.

    Example:
        "User has watched: Inception (rated 5/5, completed: true, mood when watched: Excited)."
    """
    if not entries:
        return NO_HISTORY_SUMMARY

    parts = []
    for entry in entries:
        details = f"rated {entry.rating}/5, completed: {'true' if entry.completed else 'false'}"
        if entry.mood_at_watch:
            details += f", mood when watched: {entry.mood_at_watch}"
        if entry.time_of_day_at_watch:
            details += f", watched in the {entry.time_of_day_at_watch}"
        parts.append(f"{entry.title} ({details})")

    return f"User has watched: {', '.join(parts)}."


def serialize_viewing_history(entries: Sequence["ViewingHistoryEntry"]) -> str:
    """Serialize viewing history as a JSON array using the wire (camelCase) field names."""
    return json.dumps(
        [entry.model_dump(by_alias=True, exclude_none=True) for entry in entries],
        ensure_ascii=False,
    )


def build_profile_summary(profile: "UserProfile") -> str:
    """
    Build the profile summary used by group-compromise recommendations.

    The summary leads with the profile name so the model can quote it verbatim.
    """
    titles = [entry.title for entry in profile.viewing_history]
    top_rated = [entry.title for entry in profile.viewing_history if entry.rating >= 4]

    summary = (
        f"Name: {profile.name}. "
        f"Mood: {profile.mood}. "
        f"Time of day: {profile.time_of_day}. "
        f"Prefers: {profile.content_type}."
    )
    if profile.language != "Any":
        summary += f" Preferred language: {profile.language}."
    if titles:
        summary += f" Recently watched: {', '.join(titles[:10])}."
    else:
        summary += " No viewing history yet."
    if top_rated:
        summary += f" Rated highly: {', '.join(top_rated[:5])}."
    return summary
