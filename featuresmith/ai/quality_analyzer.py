"""
Quality analyzer: scores a feature file from 0 to 100 and proposes improvements.
"""

from typing import Optional

from loguru import logger

from featuresmith.core.exceptions import FeatureValidationError, ModelResponseError
from featuresmith.core.protocols import IModelInvoker
from featuresmith.models.reports import QualityReport
from featuresmith.ai.generation.prompt_builder import PromptBuilder
from featuresmith.ai.generation.response_parser import ResponseParser
from featuresmith.ai.model_invoker import ModelInvoker

OPERATION = "analyze feature"


class QualityAnalyzer:

    def __init__(
        self,
        invoker: Optional[IModelInvoker] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.invoker = invoker or ModelInvoker()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_parser = response_parser or ResponseParser()

    async def analyze(self, content: str, current_title: str) -> QualityReport:
        """Return the quality report for `content`, scored against `current_title`."""
        if not content or not content.strip():
            raise FeatureValidationError(OPERATION, "feature content is required")

        system, prompt = self.prompt_builder.build_quality_prompt(content, current_title or "")
        response_text = await self.invoker.analyze_quality(system, prompt)

        try:
            data = self.response_parser.parse_ai_response(response_text)
        except ValueError as e:
            raise ModelResponseError(OPERATION, str(e)) from e

        report = self.response_parser.build_quality_report(data)
        logger.info(f"Quality analysis: score={report.quality_score}, {len(report.suggestions)} suggestions")
        return report
