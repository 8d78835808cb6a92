"""Application configuration."""

from featuresmith.config.settings import Settings, settings

__all__ = ["Settings", "settings"]
