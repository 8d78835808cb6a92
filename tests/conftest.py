"""
Pytest configuration and fixtures.
"""

import json
import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["ANTHROPIC_API_KEY"] = "test-key"
os.environ["USE_OPENAI"] = "true"
os.environ["PROMPT_OVERRIDES_PATH"] = "tests/.no_prompt_overrides.json"


PASSWORD_RESET_FEATURE = """```gherkin
@passwordReset
Feature: Password Reset

As a user, I want to reset my password
So that I can regain access to my account

Scenario: Request a reset link
  Given I am on the login page
  When I request a password reset for my email
  Then I receive a reset link

Scenario: Reset with a valid link
  Given I am on the login page
  When I open a valid reset link
  Then I can choose a new password
```"""

COMPLEXITY_RESPONSE = {
    "overallComplexity": 4,
    "scenarios": [
        {
            "name": "Request a reset link",
            "complexity": 3,
            "factors": {"stepCount": 3, "dataDependencies": 2, "conditionalLogic": 1, "technicalDifficulty": 2},
            "explanation": "Simple request flow",
        },
        {
            "name": "Reset with a valid link",
            "complexity": 5,
            "factors": {"stepCount": 3, "dataDependencies": 4, "conditionalLogic": 3, "technicalDifficulty": 4},
            "explanation": "Depends on token validity",
        },
    ],
    "recommendations": ["Add a scenario for expired links"],
}

QUALITY_RESPONSE = {
    "quality_score": 82,
    "suggestions": ["Cover the expired link case", "Avoid UI wording in steps"],
    "improved_title": "Self-Service Password Reset",
}


@pytest.fixture
def password_reset_raw() -> str:
    """Raw model output for the Password Reset feature (fenced, blank line after Feature)."""
    return PASSWORD_RESET_FEATURE


@pytest.fixture
def complexity_payload() -> dict:
    return json.loads(json.dumps(COMPLEXITY_RESPONSE))


@pytest.fixture
def quality_payload() -> dict:
    return json.loads(json.dumps(QUALITY_RESPONSE))


@pytest.fixture
def mock_invoker(password_reset_raw, complexity_payload, quality_payload):
    """
    Stub model invoker: one AsyncMock per call type, answering with canned
    Password Reset responses.
    """
    invoker = MagicMock()
    invoker.generate_feature_text = AsyncMock(return_value=password_reset_raw)
    invoker.analyze_complexity = AsyncMock(return_value=json.dumps(complexity_payload))
    invoker.analyze_quality = AsyncMock(return_value=json.dumps(quality_payload))
    invoker.suggest_titles = AsyncMock(
        return_value=json.dumps({"titles": ["Password Reset", "Account Recovery", "Forgot Password"]})
    )
    invoker.suggest_improvements = AsyncMock(
        return_value=json.dumps({"suggestions": ["Name the user role", "State the business value"]})
    )
    return invoker


def make_openai_response(content: str) -> MagicMock:
    """Shape of an OpenAI chat completion with a single choice."""
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    return response


@pytest.fixture
def mock_openai_client():
    """Mock AsyncOpenAI client; set .chat.completions.create.return_value per test."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_openai_response("{}"))
    return client


@pytest.fixture
def mock_anthropic_client():
    """Mock AsyncAnthropic client answering with <json>-wrapped output."""
    client = MagicMock()
    response = MagicMock()
    response.content = [MagicMock(text='<json>{"titles": ["Password Reset"]}</json>')]
    client.messages.create = AsyncMock(return_value=response)
    return client


@pytest.fixture
def feature_store(tmp_path):
    """Feature store backed by a temporary JSON file."""
    from featuresmith.storage.feature_store import FeatureStore

    return FeatureStore(storage_path=str(tmp_path / "features.json"))


@pytest.fixture
def workflow(feature_store, mock_invoker):
    """Feature workflow wired to the stub invoker and a temporary store."""
    from featuresmith.workflows.feature_workflow import FeatureWorkflow

    return FeatureWorkflow(store=feature_store, invoker=mock_invoker)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Each test starts with empty performance counters."""
    from featuresmith.monitoring.metrics import get_metrics

    get_metrics().reset()
    yield
    get_metrics().reset()
