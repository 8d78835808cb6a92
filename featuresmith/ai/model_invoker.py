"""
Model invoker: sends one prompt to the language model and returns the raw text.
Single Responsibility: provider calls and per-call-type parameters.

Each call type fixes its own output mode, temperature and token cap. Any
transport or API failure is raised as ModelInvocationError with the message
"Failed to <operation>: <cause>". Nothing is retried.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.core.exceptions import ModelInvocationError
from featuresmith.ai.generation.ai_client_factory import AIClientFactory
from featuresmith.ai.prompts import JSON_TAG_INSTRUCTION
from featuresmith.monitoring.metrics import get_metrics


class CallType(str, Enum):
    """The model calls the pipeline makes."""

    GENERATE_FEATURE = "generate_feature"
    ANALYZE_QUALITY = "analyze_quality"
    ANALYZE_COMPLEXITY = "analyze_complexity"
    SUGGEST_TITLES = "suggest_titles"
    SUGGEST_IMPROVEMENTS = "suggest_improvements"


@dataclass(frozen=True)
class CallProfile:
    """Fixed parameters of one call type."""

    operation: str
    json_mode: bool
    temperature: float
    max_tokens: Optional[int] = None


def default_profiles() -> Dict[CallType, CallProfile]:
    """Call profiles built from the current settings."""
    return {
        CallType.GENERATE_FEATURE: CallProfile(
            operation="generate feature",
            json_mode=False,
            temperature=settings.generation_temperature,
            max_tokens=settings.generation_max_tokens,
        ),
        CallType.ANALYZE_QUALITY: CallProfile(
            operation="analyze feature",
            json_mode=True,
            temperature=settings.analysis_temperature,
        ),
        CallType.ANALYZE_COMPLEXITY: CallProfile(
            operation="analyze feature complexity",
            json_mode=True,
            temperature=settings.analysis_temperature,
        ),
        CallType.SUGGEST_TITLES: CallProfile(
            operation="suggest titles",
            json_mode=True,
            temperature=settings.suggestion_temperature,
        ),
        CallType.SUGGEST_IMPROVEMENTS: CallProfile(
            operation="get story suggestions",
            json_mode=True,
            temperature=settings.suggestion_temperature,
            max_tokens=settings.story_suggestion_max_tokens,
        ),
    }


class ModelInvoker:
    """
    Async gateway to OpenAI or Anthropic chat models.

    Pass `client` to inject a ready-made (or mocked) client; otherwise one is
    created through AIClientFactory.
    """

    def __init__(
        self,
        client=None,
        model: Optional[str] = None,
        use_openai: Optional[bool] = None,
        api_key: Optional[str] = None,
        profiles: Optional[Dict[CallType, CallProfile]] = None,
    ):
        if client is None:
            self.client, self.model, self.use_openai = AIClientFactory.create_client(
                use_openai=use_openai,
                api_key=api_key,
                model=model,
            )
        else:
            self.use_openai = settings.use_openai if use_openai is None else use_openai
            self.client = client
            self.model = model or (settings.ai_model if self.use_openai else settings.default_ai_model)

        self.profiles = profiles or default_profiles()
        logger.info(f"ModelInvoker initialized with model: {self.model} (openai={self.use_openai})")

    async def generate_feature_text(self, system: str, prompt: str) -> str:
        return await self._complete(CallType.GENERATE_FEATURE, system, prompt)

    async def analyze_quality(self, system: str, prompt: str) -> str:
        return await self._complete(CallType.ANALYZE_QUALITY, system, prompt)

    async def analyze_complexity(self, system: str, prompt: str) -> str:
        return await self._complete(CallType.ANALYZE_COMPLEXITY, system, prompt)

    async def suggest_titles(self, system: str, prompt: str) -> str:
        return await self._complete(CallType.SUGGEST_TITLES, system, prompt)

    async def suggest_improvements(self, system: str, prompt: str) -> str:
        return await self._complete(CallType.SUGGEST_IMPROVEMENTS, system, prompt)

    async def _complete(self, call_type: CallType, system: str, prompt: str) -> str:
        """
        Issue one completion and return the first choice's text.

        Raises:
            ModelInvocationError: On any client, transport or API failure
        """
        profile = self.profiles[call_type]
        logger.debug(f"AI prompt for {call_type.value} (~{len(prompt) // 4} tokens, {len(prompt)} chars)")

        try:
            async with get_metrics().track(f"model.{call_type.value}"):
                if self.use_openai:
                    response_text = await self._call_openai(profile, system, prompt)
                else:
                    response_text = await self._call_anthropic(profile, system, prompt)
        except Exception as e:
            logger.error(f"AI API call failed ({call_type.value}): {e}")
            raise ModelInvocationError(profile.operation, str(e)) from e

        logger.info(f"{call_type.value}: model returned {len(response_text)} chars")
        return response_text

    async def _call_openai(self, profile: CallProfile, system: str, prompt: str) -> str:
        request = {
            "model": self.model,
            "temperature": profile.temperature,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
        }
        if profile.max_tokens:
            request["max_tokens"] = profile.max_tokens
        if profile.json_mode:
            request["response_format"] = {"type": "json_object"}

        response = await self.client.chat.completions.create(**request)
        return response.choices[0].message.content or ""

    async def _call_anthropic(self, profile: CallProfile, system: str, prompt: str) -> str:
        # Claude has no JSON response mode; the parser reads <json> tags instead
        if profile.json_mode:
            prompt = prompt + "\n\n" + JSON_TAG_INSTRUCTION

        response = await self.client.messages.create(
            model=self.model,
            max_tokens=profile.max_tokens or settings.max_tokens,
            temperature=profile.temperature,
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.content[0].text
