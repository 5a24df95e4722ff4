"""
Invocation Client - Gemini structured generation

Sends a rendered prompt plus an output schema to Gemini and returns a
structurally validated object.

Contract:
- invoke(prompt, output_schema) -> validated output, or None when the model
  returned nothing at all (no candidates, empty text, JSON null)
- structural mismatch -> OutputSchemaViolation
- transport/provider failure -> ProviderError (httpx or aiohttp transport)
- no retries, no partial results

Architecture:
- Model: Gemini 2.5 Flash (configurable)
- API: Google Gen AI Python SDK (google-genai), async client
- Output: response_mime_type='application/json' with response_schema
"""

import asyncio
import json
import logging
import re
from typing import Any, Optional, Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from pydantic import ValidationError as PydanticValidationError

from firesync.agents.recommendation.errors import OutputSchemaViolation, ProviderError
from firesync.agents.recommendation.prompts import RECOMMENDATION_SYSTEM_PROMPT
from firesync.agents.recommendation.schemas import OutputSchema, format_error_location
from firesync.config import settings

try:
    import aiohttp
except ImportError:
    aiohttp = None

logger = logging.getLogger(__name__)

# google-genai uses aiohttp for async calls when it is installed, httpx otherwise
TRANSPORT_ERRORS: tuple = (httpx.HTTPError,)
if aiohttp is not None:
    TRANSPORT_ERRORS += (aiohttp.ClientError,)

# Initialize Gemini client (lazy initialization)
_gemini_client: Optional[genai.Client] = None


class InvocationClient(Protocol):
    """Anything that can turn a prompt plus an output schema into validated output."""

    async def invoke(self, prompt: str, output_schema: OutputSchema) -> Optional[Any]:
        ...


def _get_gemini_client() -> Optional[genai.Client]:
    """
    Lazy initialization of Gemini client.
    Uses the Google Gen AI SDK. Returns None when no API key is configured.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.warning(
            "GOOGLE_API_KEY not configured. Recommendation service will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    _gemini_client = genai.Client(
        api_key=settings.GOOGLE_API_KEY,
        http_options=types.HttpOptions(timeout=int(settings.GEMINI_TIMEOUT_SECONDS * 1000)),
    )
    logger.info("Gemini client initialized successfully for recommendations")
    return _gemini_client


def _clean_json_text(content: str) -> str:
    """Strip markdown code fences and trailing commas the model sometimes adds."""
    json_content = content.strip()

    fence_match = re.search(r'```(?:json)?\s*([\s\S]*?)```', json_content, re.IGNORECASE)
    if fence_match:
        json_content = fence_match.group(1).strip()

    # Remove trailing commas before } or ] (common LLM mistake)
    return re.sub(r',(\s*[}\]])', r'\1', json_content)


def _response_text(response: Any) -> Optional[str]:
    """Extract the text payload from a Gemini response, or None if there is none."""
    if not response.candidates or not response.candidates[0].content:
        return None
    text = response.text
    if not text or not text.strip():
        return None
    return text


def parse_structured_output(content: Optional[str], output_schema: OutputSchema) -> Optional[Any]:
    """
    Parse and validate the model's JSON text against an output schema.

    Returns None for absent output (empty text or JSON null).

    Raises:
        OutputSchemaViolation: unparseable JSON or a payload that does not match
            the schema. missing_fields/invalid_fields carry the failing paths.
    """
    if content is None or not content.strip():
        return None

    try:
        payload = json.loads(content)
    except json.JSONDecodeError:
        # Only repair text that is not already valid JSON
        try:
            payload = json.loads(_clean_json_text(content))
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON response for {output_schema.name}: {e.msg}")
            raise OutputSchemaViolation(f"Model output is not valid JSON: {e.msg}") from e

    if payload is None:
        return None

    try:
        return output_schema.adapter.validate_python(payload)
    except PydanticValidationError as e:
        missing_fields = []
        invalid_fields = []
        for error in e.errors():
            path = format_error_location(error["loc"])
            if error["type"] == "missing" or error.get("input", "") is None:
                missing_fields.append(path)
            else:
                invalid_fields.append(path)

        first = e.errors()[0]
        logger.warning(
            f"{output_schema.name} output failed validation: "
            f"missing={missing_fields} invalid={invalid_fields}"
        )
        raise OutputSchemaViolation(
            f"{output_schema.name} output does not match schema "
            f"({e.error_count()} error(s); first at '{format_error_location(first['loc'])}': {first['msg']})",
            missing_fields=missing_fields,
            invalid_fields=invalid_fields,
        ) from e


class GeminiInvocationClient:
    """
    Invocation client backed by Gemini structured output.

    Holds no per-request state, so one instance can serve concurrent calls.
    """

    def __init__(
        self,
        genai_client: Optional[genai.Client] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
    ):
        self._genai_client = genai_client
        self.model = model or settings.GEMINI_MODEL
        self.temperature = settings.GEMINI_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or settings.GEMINI_MAX_OUTPUT_TOKENS

    async def invoke(self, prompt: str, output_schema: OutputSchema) -> Optional[Any]:
        client = self._genai_client or _get_gemini_client()
        if client is None:
            raise ProviderError(
                "Recommendation service is not configured. Set GOOGLE_API_KEY.",
                configured=False,
            )

        config = types.GenerateContentConfig(
            system_instruction=RECOMMENDATION_SYSTEM_PROMPT,
            temperature=self.temperature,
            max_output_tokens=self.max_output_tokens,
            response_mime_type="application/json",
            response_schema=output_schema.response_schema,
        )

        logger.debug(f"Calling Gemini model={self.model} schema={output_schema.name}")
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error: code={e.code} status={e.status}")
            raise ProviderError(f"Gemini API error ({e.code}): {e.message}") from e
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            logger.error("Gemini request timed out")
            raise ProviderError("Gemini request timed out") from e
        except TRANSPORT_ERRORS as e:
            logger.error(f"Gemini transport error: {e!r}")
            raise ProviderError(f"Could not reach Gemini: {e}") from e

        content = _response_text(response)
        if content is None:
            logger.warning(f"Gemini returned no content for {output_schema.name}")
            return None

        return parse_structured_output(content, output_schema)


_default_client: Optional[GeminiInvocationClient] = None


def get_invocation_client() -> GeminiInvocationClient:
    """Return the shared Gemini invocation client."""
    global _default_client
    if _default_client is None:
        _default_client = GeminiInvocationClient()
    return _default_client
