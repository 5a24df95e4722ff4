"""
Tests for viewing-history serialization helpers.
"""

import json

from firesync.schemas.recommendations import UserProfile, ViewingHistoryEntry
from firesync.utils.history import (
    NO_HISTORY_SUMMARY,
    build_profile_summary,
    serialize_viewing_history,
    summarize_viewing_history,
)


def _entries(*rows):
    return [ViewingHistoryEntry.model_validate(row) for row in rows]


class TestSummarizeViewingHistory:

    def test_empty(self):
        assert summarize_viewing_history([]) == NO_HISTORY_SUMMARY

    def test_single_entry_with_mood_and_time(self):
        entries = _entries({
            "title": "Inception", "rating": 5, "completed": True,
            "moodAtWatch": "Excited", "timeOfDayAtWatch": "Night",
        })
        assert summarize_viewing_history(entries) == (
            "User has watched: Inception (rated 5/5, completed: true, "
            "mood when watched: Excited, watched in the Night)."
        )

    def test_multiple_entries(self):
        entries = _entries(
            {"title": "Up", "rating": 4, "completed": True},
            {"title": "Cats", "rating": 1, "completed": False},
        )
        assert summarize_viewing_history(entries) == (
            "User has watched: Up (rated 4/5, completed: true), "
            "Cats (rated 1/5, completed: false)."
        )


class TestSerializeViewingHistory:

    def test_uses_wire_names_and_drops_nulls(self):
        entries = _entries({"title": "Amélie", "rating": 5, "completed": True, "moodAtWatch": "Romantic"})
        assert json.loads(serialize_viewing_history(entries)) == [
            {"title": "Amélie", "rating": 5, "completed": True, "moodAtWatch": "Romantic"}
        ]
        assert "Amélie" in serialize_viewing_history(entries)

    def test_empty(self):
        assert serialize_viewing_history([]) == "[]"


class TestBuildProfileSummary:

    def test_without_history(self):
        profile = UserProfile(name="Parth", time_of_day="Morning")
        assert build_profile_summary(profile) == (
            "Name: Parth. Mood: Neutral. Time of day: Morning. Prefers: BOTH. No viewing history yet."
        )

    def test_with_history_and_language(self):
        profile = UserProfile.model_validate({
            "name": "Admin",
            "mood": "Excited",
            "timeOfDay": "Evening",
            "contentType": "MOVIES",
            "language": "Japanese",
            "viewingHistory": [
                {"title": "Akira", "rating": 5, "completed": True},
                {"title": "Cats", "rating": 1, "completed": False},
            ],
        })
        summary = build_profile_summary(profile)
        assert summary.startswith("Name: Admin. Mood: Excited.")
        assert "Preferred language: Japanese." in summary
        assert "Recently watched: Akira, Cats." in summary
        assert summary.endswith("Rated highly: Akira.")
