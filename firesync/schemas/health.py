"""
Health check endpoint schemas.
"""

from pydantic import Field

from firesync.schemas.recommendations import FireSyncModel


class HealthResponse(FireSyncModel):
    """Response model for GET /health."""

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = Field(default="firesync", examples=["firesync"])
    provider_configured: bool = Field(
        ...,
        description="Whether GOOGLE_API_KEY is set; recommendation endpoints return 503 otherwise",
    )
