"""
Unit tests for FeatureGenerator (stubbed model).
"""

import pytest

from featuresmith.ai.feature_generator import FeatureGenerator
from featuresmith.ai.output_normalizer import OutputNormalizer
from featuresmith.core.exceptions import FeatureValidationError, ModelInvocationError


@pytest.fixture
def generator(mock_invoker):
    return FeatureGenerator(invoker=mock_invoker, normalizer=OutputNormalizer(extract_background=False))


@pytest.mark.asyncio
async def test_password_reset_end_to_end(generator, mock_invoker):
    """Tag, header adjacency and scenario count hold for the stubbed Password Reset output."""
    result = await generator.generate("Password Reset", "As a user, I want to reset my password", 2)

    lines = result.content.split("\n")
    assert result.tag == "@passwordReset"
    assert lines[0] == "@passwordReset"
    assert lines[1] == "Feature: Password Reset"
    assert lines[2] == "As a user, I want to reset my password"
    assert result.content.count("Scenario:") == 2
    assert result.content.count("@passwordReset") == 1
    assert "```" not in result.content
    assert result.warnings == []

    system, prompt = mock_invoker.generate_feature_text.call_args.args
    assert "@passwordReset" in prompt
    assert "with 2 scenarios" in prompt


@pytest.mark.asyncio
async def test_scenario_count_mismatch_is_a_warning(generator):
    result = await generator.generate("Password Reset", "As a user, I want to reset my password", 4)
    assert result.warnings == ["Requested 4 scenarios, found 2"]


@pytest.mark.asyncio
async def test_generate_feature_returns_text(generator):
    content = await generator.generate_feature("Password Reset", "As a user, I want to reset my password", 2)
    assert content.startswith("@passwordReset\nFeature: Password Reset\n")


@pytest.mark.asyncio
@pytest.mark.parametrize("title,story,count,cause", [
    ("", "As a user I log in", 1, "title is required"),
    ("   ", "As a user I log in", 1, "title is required"),
    ("Login", "", 1, "story is required"),
    ("Login", "As a user I log in", 0, "scenario count must be at least 1"),
])
async def test_invalid_input_never_calls_the_model(generator, mock_invoker, title, story, count, cause):
    with pytest.raises(FeatureValidationError) as exc_info:
        await generator.generate(title, story, count)

    assert str(exc_info.value) == f"Failed to generate feature: {cause}"
    assert exc_info.value.status_code == 400
    mock_invoker.generate_feature_text.assert_not_called()


@pytest.mark.asyncio
async def test_model_failure_propagates(generator, mock_invoker):
    mock_invoker.generate_feature_text.side_effect = ModelInvocationError("generate feature", "rate limited")

    with pytest.raises(ModelInvocationError, match="Failed to generate feature: rate limited"):
        await generator.generate("Password Reset", "As a user, I want to reset my password", 2)
