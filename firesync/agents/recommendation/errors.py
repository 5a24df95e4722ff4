"""
Recommendation error taxonomy.

- ValidationError: caller input rejected before any LLM call
- OutputSchemaViolation: model output does not match the output schema
- ProviderError: transport or provider failure (timeout, rate limit, API error)
- EmptyOutputError: personalized mode got no output at all
- MandatoryFieldMissingError: watch-pattern analysis is missing mandatory fields

None of these are retried inside the core. Callers decide whether to retry.
"""

from typing import List, Optional, Sequence


class RecommendationError(Exception):
    """Base class for all recommendation failures."""


class ValidationError(RecommendationError):
    """Input failed schema constraints. Names the offending field path."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid value for '{field}': {message}")


class OutputSchemaViolation(RecommendationError):
    """
    Model output did not match the declared output schema.

    missing_fields lists the field paths that were absent or null and
    invalid_fields the ones present with a wrong type or value, so the fallback
    layer can tell an incomplete answer from a malformed one.
    """

    def __init__(
        self,
        message: str,
        missing_fields: Optional[Sequence[str]] = None,
        invalid_fields: Optional[Sequence[str]] = None,
    ):
        self.missing_fields: List[str] = list(missing_fields or [])
        self.invalid_fields: List[str] = list(invalid_fields or [])
        super().__init__(message)

    @property
    def only_missing_fields(self) -> bool:
        """True when every problem in the payload is an absent mandatory field."""
        return bool(self.missing_fields) and not self.invalid_fields


class ProviderError(RecommendationError):
    """The LLM provider could not be reached or rejected the request."""

    def __init__(self, message: str, configured: bool = True):
        self.configured = configured
        super().__init__(message)


class EmptyOutputError(RecommendationError):
    """The model returned no output where the mode treats that as fatal."""


class MandatoryFieldMissingError(RecommendationError):
    """Analysis output is missing one or more mandatory fields."""

    def __init__(self, missing_fields: Sequence[str]):
        self.missing_fields = list(missing_fields)
        super().__init__(
            "AI returned incomplete output. Missing mandatory field(s): "
            + ", ".join(self.missing_fields)
        )
