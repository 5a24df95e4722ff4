"""
AI Components for FireSync.

Recommendation System (Single-Shot Structured Generation)
   - One Gemini call per request, JSON output constrained by response_schema
   - NOT an ADK agent - uses the Google Gen AI SDK directly
   - Located in: firesync/agents/recommendation/
"""

from firesync.agents.recommendation import (
    RecommendationMode,
    get_orchestrator,
    run_mode,
)

__all__ = [
    "RecommendationMode",
    "get_orchestrator",
    "run_mode",
]
