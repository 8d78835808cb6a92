"""
Complexity scorer: asks the model to rate every scenario and normalizes the answer.
"""

from typing import Optional

from loguru import logger

from featuresmith.core.exceptions import FeatureValidationError, ModelResponseError
from featuresmith.core.protocols import IModelInvoker
from featuresmith.models.reports import ComplexityReport
from featuresmith.ai.generation.prompt_builder import PromptBuilder
from featuresmith.ai.generation.response_parser import ResponseParser
from featuresmith.ai.model_invoker import ModelInvoker

OPERATION = "analyze feature complexity"


class ComplexityScorer:
    """Scores per-scenario complexity along four weighted factors."""

    def __init__(
        self,
        invoker: Optional[IModelInvoker] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.invoker = invoker or ModelInvoker()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_parser = response_parser or ResponseParser()

    async def analyze(self, content: str) -> ComplexityReport:
        """
        Analyze a normalized feature file.

        Missing fields are defaulted and scores clamped; output that is not
        JSON raises ModelResponseError ("Failed to analyze feature complexity: ...").
        """
        if not content or not content.strip():
            raise FeatureValidationError(OPERATION, "feature content is required")

        system, prompt = self.prompt_builder.build_complexity_prompt(content)
        response_text = await self.invoker.analyze_complexity(system, prompt)

        try:
            data = self.response_parser.parse_ai_response(response_text)
        except ValueError as e:
            raise ModelResponseError(OPERATION, str(e)) from e

        report = self.response_parser.build_complexity_report(data)
        logger.info(
            f"Complexity analysis: overall={report.overall_complexity}, "
            f"{len(report.scenarios)} scenarios, {len(report.recommendations)} recommendations"
        )
        return report
