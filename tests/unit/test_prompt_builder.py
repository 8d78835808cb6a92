"""
Unit tests for PromptBuilder and the canonical feature tag.
"""

import json

import pytest

from featuresmith.ai.generation.prompt_builder import PromptBuilder, feature_tag
from featuresmith.ai.prompts import GENERATION_SYSTEM_INSTRUCTION


class TestFeatureTag:

    def test_multi_word_title(self):
        assert feature_tag("User Login Flow") == "@userLoginFlow"

    def test_first_word_is_lowercased(self):
        assert feature_tag("API Gateway") == "@apiGateway"

    def test_later_words_keep_their_tail(self):
        """Only the first character of later words changes."""
        assert feature_tag("password reset via SMS") == "@passwordResetViaSMS"

    def test_surrounding_and_repeated_whitespace(self):
        assert feature_tag("  Password   Reset ") == "@passwordReset"

    def test_empty_title(self):
        assert feature_tag("") == "@"

    def test_single_word(self):
        assert feature_tag("Checkout") == "@checkout"


class TestGenerationPrompt:

    @pytest.fixture
    def builder(self, tmp_path):
        return PromptBuilder(overrides_path=str(tmp_path / "missing.json"))

    def test_prompt_carries_title_story_count_and_tag(self, builder):
        system, prompt = builder.build_generation_prompt(
            "Password Reset", "As a user, I want to reset my password", 2
        )

        assert system == GENERATION_SYSTEM_INSTRUCTION
        assert '"Password Reset"' in prompt
        assert "with 2 scenarios" in prompt
        assert "As a user, I want to reset my password" in prompt
        assert "@passwordReset\nFeature: Password Reset" in prompt

    def test_prompt_is_deterministic(self, builder):
        first = builder.build_generation_prompt("Checkout", "As a buyer I pay", 3)
        second = builder.build_generation_prompt("Checkout", "As a buyer I pay", 3)
        assert first == second

    def test_overrides_replace_named_sections(self, tmp_path):
        overrides = tmp_path / "overrides.json"
        overrides.write_text(json.dumps({
            "GENERATION_SYSTEM_INSTRUCTION": "You write terse Gherkin.",
            "GENERATION_GUIDELINES": "Keep every step under ten words.",
        }))
        builder = PromptBuilder(overrides_path=str(overrides))

        system, prompt = builder.build_generation_prompt("Checkout", "As a buyer I pay", 1)

        assert system == "You write terse Gherkin."
        assert "Keep every step under ten words." in prompt

    def test_corrupt_overrides_fall_back_to_defaults(self, tmp_path):
        overrides = tmp_path / "overrides.json"
        overrides.write_text("{not json")
        builder = PromptBuilder(overrides_path=str(overrides))

        system, _ = builder.build_generation_prompt("Checkout", "As a buyer I pay", 1)

        assert system == GENERATION_SYSTEM_INSTRUCTION


class TestAnalysisPrompts:

    @pytest.fixture
    def builder(self, tmp_path):
        return PromptBuilder(overrides_path=str(tmp_path / "missing.json"))

    def test_quality_prompt_includes_content_and_title(self, builder):
        _, prompt = builder.build_quality_prompt("Feature: Checkout", "Checkout")
        assert "Feature: Checkout" in prompt
        assert 'Current title: "Checkout"' in prompt
        assert "quality_score" in prompt

    def test_complexity_prompt_asks_for_factors(self, builder):
        _, prompt = builder.build_complexity_prompt("Feature: Checkout")
        assert "Feature: Checkout" in prompt
        assert "overallComplexity" in prompt
        assert "stepCount" in prompt

    def test_title_prompt_asks_for_three_titles(self, builder):
        _, prompt = builder.build_title_prompt("As a shopper I want to save items")
        assert "up to 3" in prompt
        assert '"titles"' in prompt

    def test_story_prompt_asks_for_suggestions(self, builder):
        _, prompt = builder.build_story_suggestions_prompt("As a shopper I want to save items")
        assert '"suggestions"' in prompt
