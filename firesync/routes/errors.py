"""
Mapping from recommendation faults to HTTP errors.

- ValidationError -> 422 invalid_request
- ProviderError (not configured) -> 503 provider_not_configured
- ProviderError -> 502 provider_error
- OutputSchemaViolation / EmptyOutputError / MandatoryFieldMissingError -> 502
"""

import logging

from fastapi import HTTPException, status

from firesync.agents.recommendation.errors import (
    EmptyOutputError,
    MandatoryFieldMissingError,
    OutputSchemaViolation,
    ProviderError,
    RecommendationError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def to_http_exception(exc: RecommendationError, operation: str) -> HTTPException:
    """
    Build the HTTPException for a recommendation fault.

    Args:
        exc: The fault raised by the service layer
        operation: Human-readable name of the failed operation,
            e.g. "fetch content recommendations"
    """
    details = f"Failed to {operation}: {exc}"

    if isinstance(exc, ValidationError):
        logger.warning(f"Rejected request: {exc}")
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"error": "invalid_request", "field": exc.field, "details": details},
        )

    if isinstance(exc, ProviderError):
        if not exc.configured:
            logger.error("Recommendation provider not configured")
            return HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={"error": "provider_not_configured", "details": details},
            )
        logger.error(f"Provider failure: {exc}")
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"error": "provider_error", "details": details},
        )

    if isinstance(exc, MandatoryFieldMissingError):
        error = "incomplete_output"
    elif isinstance(exc, EmptyOutputError):
        error = "empty_output"
    elif isinstance(exc, OutputSchemaViolation):
        error = "invalid_output"
    else:
        error = "recommendation_error"

    logger.error(f"{error}: {exc}")
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail={"error": error, "details": details},
    )
