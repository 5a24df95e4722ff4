"""
Pytest configuration for FireSync backend tests.

Sets up test environment and global fixtures.
"""
import json
import os
from typing import Any, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")


def make_gemini_response(payload: Any = None, text: Optional[str] = None) -> MagicMock:
    """
    Build a fake google-genai GenerateContentResponse.

    payload is JSON-encoded into response.text; text overrides it verbatim.
    Passing neither yields a response with no candidates.
    """
    response = MagicMock()
    if payload is None and text is None:
        response.candidates = []
        response.text = None
        return response

    candidate = MagicMock()
    candidate.content = MagicMock()
    response.candidates = [candidate]
    response.text = text if text is not None else json.dumps(payload)
    return response


def make_genai_client(response: Any = None, side_effect: Any = None) -> MagicMock:
    """Fake genai.Client whose aio.models.generate_content is an AsyncMock."""
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=side_effect)
    return client


class StubInvocationClient:
    """
    Deterministic invocation client.

    Returns the same canned output for every call and records the prompts it
    was given.
    """

    def __init__(self, output: Any = None, error: Optional[Exception] = None):
        self.output = output
        self.error = error
        self.prompts: List[str] = []
        self.schemas: List[Any] = []

    async def invoke(self, prompt, output_schema):
        self.prompts.append(prompt)
        self.schemas.append(output_schema)
        if self.error is not None:
            raise self.error
        if self.output is None:
            return None
        return output_schema.adapter.validate_python(self.output)


def make_items(count: int, reason: str = "Fits your evening mood.") -> List[dict]:
    """Build count valid recommendation item payloads."""
    return [
        {
            "title": f"Title {i}",
            "description": f"Description {i}",
            "reason": reason,
            "platform": "Netflix",
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def viewing_history() -> List[dict]:
    """A small viewing history in wire format."""
    return [
        {"title": "Inception", "rating": 5, "completed": True, "moodAtWatch": "Excited", "timeOfDayAtWatch": "Night"},
        {"title": "The Office", "rating": 4, "completed": True, "moodAtWatch": "Goofy"},
        {"title": "The Notebook", "rating": 2, "completed": False},
    ]


@pytest.fixture
def analysis_payload() -> dict:
    """A valid watch-pattern analysis as Gemini would return it."""
    return {
        "explanation": "Comedies rate highly and the user is happy.",
        "moodWeight": 70,
        "historyWeight": 20,
        "contentMix": [
            {"genre": "comedy", "proportion": 0.6},
            {"genre": "action", "proportion": 0.3},
            {"genre": "documentary", "proportion": 0.1},
        ],
    }


@pytest.fixture
def stub_client_factory():
    """StubInvocationClient class, for tests that need canned model output."""
    return StubInvocationClient


@pytest.fixture
def items_factory():
    return make_items


@pytest.fixture
def gemini_response_factory():
    return make_gemini_response


@pytest.fixture
def genai_client_factory():
    return make_genai_client
