"""
Story advisor: brief, best-effort suggestions for improving a user story.
"""

from typing import List, Optional

from loguru import logger

from featuresmith.core.exceptions import FeatureSmithError, ModelResponseError
from featuresmith.core.protocols import IModelInvoker
from featuresmith.ai.generation.prompt_builder import PromptBuilder
from featuresmith.ai.generation.response_parser import ResponseParser
from featuresmith.ai.model_invoker import ModelInvoker

OPERATION = "get story suggestions"


class StoryAdvisor:
    """Suggestions are advisory: any failure yields an empty list."""

    def __init__(
        self,
        invoker: Optional[IModelInvoker] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.invoker = invoker or ModelInvoker()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_parser = response_parser or ResponseParser()

    async def get_suggestions(self, story: str) -> List[str]:
        if not story or not story.strip():
            return []

        try:
            system, prompt = self.prompt_builder.build_story_suggestions_prompt(story)
            response_text = await self.invoker.suggest_improvements(system, prompt)
            try:
                data = self.response_parser.parse_ai_response(response_text)
            except ValueError as e:
                raise ModelResponseError(OPERATION, str(e)) from e
        except FeatureSmithError as e:
            logger.warning(f"Story suggestions unavailable: {e}")
            return []

        return self.response_parser.build_string_list(data, "suggestions")
