"""AI generation services."""

from featuresmith.ai.generation.ai_client_factory import AIClientFactory
from featuresmith.ai.generation.prompt_builder import PromptBuilder, feature_tag
from featuresmith.ai.generation.response_parser import ResponseParser

__all__ = ["AIClientFactory", "PromptBuilder", "ResponseParser", "feature_tag"]
