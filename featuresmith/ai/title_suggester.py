"""
Title suggester: proposes feature titles from a partially written story.
"""

from typing import List, Optional

from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.core.exceptions import ModelResponseError
from featuresmith.core.protocols import IModelInvoker
from featuresmith.ai.generation.prompt_builder import PromptBuilder
from featuresmith.ai.generation.response_parser import ResponseParser
from featuresmith.ai.model_invoker import ModelInvoker

OPERATION = "suggest titles"


class TitleSuggester:
    """
    Requests up to 3 titles for a story. The limit is a prompt instruction
    only; whatever the model returns is passed through in order.
    """

    def __init__(
        self,
        invoker: Optional[IModelInvoker] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
        min_story_length: Optional[int] = None,
    ):
        self.invoker = invoker or ModelInvoker()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_parser = response_parser or ResponseParser()
        self.min_story_length = (
            settings.title_suggestion_min_length if min_story_length is None else min_story_length
        )

    def should_suggest(self, story: str) -> bool:
        """True once the story is long enough to be worth a model call."""
        return len((story or "").strip()) >= self.min_story_length

    async def suggest(self, story: str) -> List[str]:
        """
        Ask the model for titles. Callers check should_suggest() first.

        Raises:
            ModelInvocationError: If the model call fails
            ModelResponseError: If the answer is not a JSON object
        """
        system, prompt = self.prompt_builder.build_title_prompt(story)
        response_text = await self.invoker.suggest_titles(system, prompt)

        try:
            data = self.response_parser.parse_ai_response(response_text)
        except ValueError as e:
            raise ModelResponseError(OPERATION, str(e)) from e

        titles = self.response_parser.build_string_list(data, "titles")
        logger.info(f"Suggested {len(titles)} titles")
        return titles
