"""
Mode Orchestrator

One generic flow shared by all five modes:

    validate input -> render prompt -> invoke model -> apply fallback -> return

Each mode is an instance parameterized by its schema pair, prompt builder and
fallback policy. Stateless across calls; concurrent runs share nothing but the
immutable registry.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel

from firesync.agents.recommendation.client import InvocationClient, get_invocation_client
from firesync.agents.recommendation.errors import OutputSchemaViolation
from firesync.agents.recommendation.fallback import (
    FALLBACK_POLICIES,
    FallbackPolicy,
    normalize_output,
    resolve_absent_output,
    resolve_schema_violation,
)
from firesync.agents.recommendation.prompts import PROMPT_BUILDERS
from firesync.agents.recommendation.schemas import (
    MODE_SCHEMAS,
    ModeSchema,
    RecommendationMode,
    validate_mode_input,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModeOrchestrator:
    """Runs one recommendation mode end to end."""

    schema: ModeSchema
    render: Callable[[Any], str]
    fallback_policy: FallbackPolicy

    @property
    def mode(self) -> RecommendationMode:
        return self.schema.mode

    async def run(
        self,
        payload: Union[BaseModel, Mapping[str, Any]],
        client: Optional[InvocationClient] = None,
    ) -> Any:
        """
        Execute the mode.

        Args:
            payload: Mode input, as the input model or a mapping
            client: Invocation client; defaults to the shared Gemini client

        Returns:
            Validated output (a list of RecommendationItem or a
            WatchPatternAnalysis), with the mode's fallback applied

        Raises:
            ValidationError: input rejected; the model is never called
            ProviderError: provider unreachable or failed
            OutputSchemaViolation: malformed model output
            EmptyOutputError: personalized mode received nothing
            MandatoryFieldMissingError: analysis missing mandatory fields
        """
        request = validate_mode_input(self.mode, payload)
        prompt = self.render(request)

        invocation_client = client or get_invocation_client()
        output_schema = self.schema.output

        logger.info(f"Running {self.mode.value} recommendation flow")

        try:
            output = await invocation_client.invoke(prompt, output_schema)
        except OutputSchemaViolation as violation:
            return resolve_schema_violation(self.fallback_policy, violation, output_schema)

        if output is None:
            return resolve_absent_output(self.fallback_policy, output_schema)

        output = normalize_output(output, output_schema)

        if isinstance(output, list):
            logger.info(f"{self.mode.value} flow returned {len(output)} item(s)")
        return output


ORCHESTRATORS: Mapping[RecommendationMode, ModeOrchestrator] = {
    mode: ModeOrchestrator(
        schema=MODE_SCHEMAS[mode],
        render=PROMPT_BUILDERS[mode],
        fallback_policy=FALLBACK_POLICIES[mode],
    )
    for mode in RecommendationMode
}


def get_orchestrator(mode: RecommendationMode) -> ModeOrchestrator:
    """Return the orchestrator registered for a mode."""
    return ORCHESTRATORS[RecommendationMode(mode)]


async def run_mode(
    mode: RecommendationMode,
    payload: Union[BaseModel, Mapping[str, Any]],
    client: Optional[InvocationClient] = None,
) -> Any:
    """Convenience wrapper: look up the mode's orchestrator and run it."""
    return await get_orchestrator(mode).run(payload, client=client)
