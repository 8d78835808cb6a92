"""
Configuration settings for the application.
Loads environment variables and provides type-safe configuration.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # API Configuration
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    environment: str = Field(default="production", description="Environment (development/production)")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    # AI Provider Keys
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    anthropic_api_key: Optional[str] = Field(default=None, description="Anthropic (Claude) API key (optional)")
    use_openai: bool = Field(default=True, description="Use OpenAI (True) or Anthropic (False)")

    # AI Model Configuration
    ai_model: str = Field(default="gpt-4o", description="OpenAI model for all pipeline calls")
    default_ai_model: str = Field(
        default="claude-3-5-sonnet-20241022", description="Anthropic model used when use_openai is False"
    )
    generation_temperature: float = Field(default=0.3, description="Temperature for feature generation")
    generation_max_tokens: int = Field(default=1500, description="Max tokens for a generated feature file")
    analysis_temperature: float = Field(default=0.3, description="Temperature for quality and complexity analysis")
    suggestion_temperature: float = Field(default=0.7, description="Temperature for title and story suggestions")
    story_suggestion_max_tokens: int = Field(default=200, description="Max tokens for story improvement suggestions")
    max_tokens: int = Field(
        default=1024,
        description="Fallback token cap for providers that require one (Anthropic) when a call defines none",
    )
    request_timeout: float = Field(default=60.0, description="Seconds before a model request is abandoned")

    # Pipeline behaviour
    title_suggestion_min_length: int = Field(
        default=20, description="Minimum story length before titles are suggested"
    )
    extract_background: bool = Field(
        default=True, description="Hoist Given steps shared by every scenario into a Background block"
    )

    # Storage
    feature_store_path: str = Field(default="./data/features.json", description="JSON file for features and analytics")
    prompt_overrides_path: str = Field(
        default="data/prompt_overrides.json", description="Optional JSON file overriding named prompt sections"
    )


# Global settings instance
settings = Settings()
