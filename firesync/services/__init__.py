"""
Service layer for FireSync.

Contains business logic orchestration that:
- Adapts endpoint requests to recommendation mode calls
- Builds derived inputs (group profile summaries, content-type resolution)
- Returns validated Pydantic models to the routes

Services act as the glue between routes (HTTP layer) and the agents.
"""

from .recommendation_service import (
    analyze_watch_patterns,
    build_group_compromise_input,
    generate_content_recommendations,
    generate_group_compromise_recommendations,
    generate_group_recommendations_for_profiles,
    generate_surprise_recommendations,
    generate_text_query_recommendations,
    resolve_group_content_type,
)

__all__ = [
    "analyze_watch_patterns",
    "build_group_compromise_input",
    "generate_content_recommendations",
    "generate_group_compromise_recommendations",
    "generate_group_recommendations_for_profiles",
    "generate_surprise_recommendations",
    "generate_text_query_recommendations",
    "resolve_group_content_type",
]
