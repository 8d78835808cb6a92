"""
Unit tests for TitleSuggester and StoryAdvisor.
"""

import pytest

from featuresmith.ai.story_advisor import StoryAdvisor
from featuresmith.ai.title_suggester import TitleSuggester
from featuresmith.core.exceptions import ModelInvocationError, ModelResponseError


class TestTitleSuggester:

    @pytest.fixture
    def suggester(self, mock_invoker):
        return TitleSuggester(invoker=mock_invoker)

    def test_threshold_boundary(self, suggester):
        assert suggester.should_suggest("x" * 19) is False
        assert suggester.should_suggest("x" * 20) is True

    def test_whitespace_does_not_count(self, suggester):
        assert suggester.should_suggest("   " + "x" * 19 + "   ") is False

    def test_empty_story(self, suggester):
        assert suggester.should_suggest("") is False
        assert suggester.should_suggest(None) is False

    @pytest.mark.asyncio
    async def test_suggest(self, suggester, mock_invoker):
        titles = await suggester.suggest("As a user, I want to reset my password")

        assert titles == ["Password Reset", "Account Recovery", "Forgot Password"]
        _, prompt = mock_invoker.suggest_titles.call_args.args
        assert "As a user, I want to reset my password" in prompt

    @pytest.mark.asyncio
    async def test_extra_titles_pass_through(self, suggester, mock_invoker):
        mock_invoker.suggest_titles.return_value = '{"titles": ["A", "B", "C", "D"]}'
        assert await suggester.suggest("As a user, I want to reset my password") == ["A", "B", "C", "D"]

    @pytest.mark.asyncio
    async def test_missing_titles_field(self, suggester, mock_invoker):
        mock_invoker.suggest_titles.return_value = '{"names": ["A"]}'
        assert await suggester.suggest("As a user, I want to reset my password") == []

    @pytest.mark.asyncio
    async def test_non_json(self, suggester, mock_invoker):
        mock_invoker.suggest_titles.return_value = "Password Reset"
        with pytest.raises(ModelResponseError, match="^Failed to suggest titles"):
            await suggester.suggest("As a user, I want to reset my password")

    def test_custom_minimum(self, mock_invoker):
        assert TitleSuggester(invoker=mock_invoker, min_story_length=5).should_suggest("hello")


class TestStoryAdvisor:

    @pytest.fixture
    def advisor(self, mock_invoker):
        return StoryAdvisor(invoker=mock_invoker)

    @pytest.mark.asyncio
    async def test_suggestions(self, advisor):
        suggestions = await advisor.get_suggestions("As a user I want things")
        assert suggestions == ["Name the user role", "State the business value"]

    @pytest.mark.asyncio
    async def test_empty_story_skips_model(self, advisor, mock_invoker):
        assert await advisor.get_suggestions("  ") == []
        mock_invoker.suggest_improvements.assert_not_called()

    @pytest.mark.asyncio
    async def test_model_failure_returns_empty(self, advisor, mock_invoker):
        mock_invoker.suggest_improvements.side_effect = ModelInvocationError("get story suggestions", "down")
        assert await advisor.get_suggestions("As a user I want things") == []

    @pytest.mark.asyncio
    async def test_non_json_returns_empty(self, advisor, mock_invoker):
        mock_invoker.suggest_improvements.return_value = "Be more specific."
        assert await advisor.get_suggestions("As a user I want things") == []
