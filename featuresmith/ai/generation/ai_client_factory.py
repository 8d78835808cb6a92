"""
AI client factory for creating OpenAI and Anthropic clients.
Single Responsibility: AI client creation and configuration.

Both clients are async and built with SDK retries disabled: a failed model
call surfaces immediately as one error instead of being replayed.
"""

from typing import Any, Optional, Tuple

from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.core.exceptions import ConfigurationError


def _require_key(api_key: Optional[str], setting: str, provider: str) -> str:
    if not api_key:
        raise ConfigurationError(f"{provider} API key is not configured (set {setting.upper()})", setting)
    return api_key


class AIClientFactory:
    """
    Factory for creating AI client instances.
    Supports OpenAI and Anthropic (Claude) clients.
    """

    @staticmethod
    def create_openai_client(api_key: Optional[str] = None, model: Optional[str] = None) -> Tuple[Any, str]:
        """
        Create an AsyncOpenAI client.

        Args:
            api_key: Optional API key (uses settings.openai_api_key if not provided)
            model: Optional model name (uses settings.ai_model if not provided)

        Returns:
            Tuple of (async_client, model_name)

        Raises:
            ConfigurationError: If no API key is available
        """
        from openai import AsyncOpenAI

        key = _require_key(api_key or settings.openai_api_key, "openai_api_key", "OpenAI")
        model = model or settings.ai_model

        client = AsyncOpenAI(api_key=key, max_retries=0, timeout=settings.request_timeout)
        logger.info(f"Created AsyncOpenAI client with model: {model}")
        return client, model

    @staticmethod
    def create_anthropic_client(api_key: Optional[str] = None, model: Optional[str] = None) -> Tuple[Any, str]:
        """
        Create an AsyncAnthropic client.

        Raises:
            ConfigurationError: If no API key is available
        """
        from anthropic import AsyncAnthropic

        key = _require_key(api_key or settings.anthropic_api_key, "anthropic_api_key", "Anthropic")
        model = model or settings.default_ai_model

        client = AsyncAnthropic(api_key=key, max_retries=0, timeout=settings.request_timeout)
        logger.info(f"Created AsyncAnthropic client with model: {model}")
        return client, model

    @staticmethod
    def create_client(
        use_openai: Optional[bool] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
    ) -> Tuple[Any, str, bool]:
        """
        Create the client for the configured provider.

        Returns:
            Tuple of (async_client, model_name, use_openai)
        """
        use_openai = settings.use_openai if use_openai is None else use_openai
        create = AIClientFactory.create_openai_client if use_openai else AIClientFactory.create_anthropic_client
        client, model = create(api_key, model)
        return client, model, use_openai
