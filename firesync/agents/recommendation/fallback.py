"""
Fallback/Normalization Layer

Per-mode policy for absent or incomplete model output.

| Mode             | Absent output                     | Missing mandatory field         |
|------------------|-----------------------------------|---------------------------------|
| Personalized     | EmptyOutputError                  | OutputSchemaViolation propagates|
| Text-query       | []                                | []                              |
| Surprise         | []                                | []                              |
| Group-compromise | []                                | []                              |
| Analysis         | MandatoryFieldMissingError (all)  | MandatoryFieldMissingError      |

An empty recommendation list is a normal "no results" state. An incomplete
analysis is a provider contract violation and is surfaced loudly. Malformed
output (wrong types, out-of-range numbers) propagates in every mode.
"""

import logging
from enum import Enum
from typing import Any, List, Mapping

from firesync.agents.recommendation.errors import (
    EmptyOutputError,
    MandatoryFieldMissingError,
    OutputSchemaViolation,
)
from firesync.agents.recommendation.schemas import OutputSchema, RecommendationMode

logger = logging.getLogger(__name__)


class FallbackPolicy(str, Enum):
    """How a mode resolves absent or incomplete output."""

    FAIL_ON_EMPTY = "fail_on_empty"
    EMPTY_LIST = "empty_list"
    REQUIRE_MANDATORY_FIELDS = "require_mandatory_fields"


FALLBACK_POLICIES: Mapping[RecommendationMode, FallbackPolicy] = {
    RecommendationMode.PERSONALIZED: FallbackPolicy.FAIL_ON_EMPTY,
    RecommendationMode.TEXT_QUERY: FallbackPolicy.EMPTY_LIST,
    RecommendationMode.SURPRISE: FallbackPolicy.EMPTY_LIST,
    RecommendationMode.GROUP_COMPROMISE: FallbackPolicy.EMPTY_LIST,
    RecommendationMode.WATCH_PATTERN_ANALYSIS: FallbackPolicy.REQUIRE_MANDATORY_FIELDS,
}


def resolve_absent_output(policy: FallbackPolicy, output_schema: OutputSchema) -> List[Any]:
    """
    Resolve a null/absent model output.

    Returns an empty list for EMPTY_LIST; raises for the other policies.
    """
    if policy is FallbackPolicy.EMPTY_LIST:
        logger.info(f"Model returned no {output_schema.name}; returning empty list")
        return []

    if policy is FallbackPolicy.REQUIRE_MANDATORY_FIELDS:
        logger.error(f"Model returned no output for {output_schema.name}")
        raise MandatoryFieldMissingError(output_schema.mandatory_fields)

    logger.error(f"Model returned no output for {output_schema.name}")
    raise EmptyOutputError("AI returned no recommendations.")


def resolve_schema_violation(
    policy: FallbackPolicy,
    violation: OutputSchemaViolation,
    output_schema: OutputSchema,
) -> List[Any]:
    """
    Resolve an output that failed schema validation.

    Only incomplete output (absent/null mandatory fields) is eligible for a
    fallback. Anything else re-raises the violation.
    """
    if policy is FallbackPolicy.EMPTY_LIST and violation.only_missing_fields:
        logger.warning(
            f"{output_schema.name} missing mandatory field(s) {violation.missing_fields}; "
            "returning empty list"
        )
        return []

    if policy is FallbackPolicy.REQUIRE_MANDATORY_FIELDS:
        missing = [
            field for field in output_schema.mandatory_fields
            if field in violation.missing_fields
        ]
        if missing:
            raise MandatoryFieldMissingError(missing) from violation

    raise violation


def normalize_output(output: Any, output_schema: OutputSchema) -> Any:
    """Truncate list outputs to the mode's maximum item count."""
    if isinstance(output, list) and output_schema.max_items is not None:
        if len(output) > output_schema.max_items:
            logger.warning(
                f"Model returned {len(output)} items, truncating to {output_schema.max_items}"
            )
            return output[: output_schema.max_items]
    return output
