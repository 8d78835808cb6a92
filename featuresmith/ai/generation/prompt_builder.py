"""
Prompt builder for every pipeline call.
Single Responsibility: turning raw user input into model prompts.

Prompts are pure functions of their inputs, except that named sections
(system instructions, guidelines) can be overridden from a JSON file.
"""

import json
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.ai.prompts import (
    COMPLEXITY_FACTORS,
    COMPLEXITY_JSON_SHAPE,
    COMPLEXITY_SYSTEM_INSTRUCTION,
    GENERATION_GUIDELINES,
    GENERATION_SYSTEM_INSTRUCTION,
    QUALITY_JSON_SHAPE,
    QUALITY_SYSTEM_INSTRUCTION,
    STORY_SYSTEM_INSTRUCTION,
    TITLE_SYSTEM_INSTRUCTION,
)


def feature_tag(title: str) -> str:
    """
    Derive the canonical camel-case tag for a feature title.

    "User Login Flow" -> "@userLoginFlow". An empty title yields "@".
    """
    words = title.split()
    parts = [
        word.lower() if index == 0 else word[0].upper() + word[1:]
        for index, word in enumerate(words)
    ]
    return "@" + "".join(parts)


def _load_prompt_overrides(path: Optional[str] = None) -> Dict[str, str]:
    """Load prompt overrides from disk."""
    overrides_file = Path(path or settings.prompt_overrides_path)
    try:
        if overrides_file.exists():
            with open(overrides_file, "r", encoding="utf-8") as f:
                return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load prompt overrides from {overrides_file}: {e}")
    return {}


class PromptBuilder:
    """
    Builds (system, user) prompt pairs for the five model calls:
    feature generation, quality analysis, complexity analysis,
    title suggestion and story improvement suggestions.
    """

    def __init__(self, overrides_path: Optional[str] = None):
        """
        Initialize prompt builder.

        Args:
            overrides_path: Optional JSON file of section overrides (defaults to settings)
        """
        self.overrides_path = overrides_path

    def _section(self, name: str, default: str) -> str:
        return _load_prompt_overrides(self.overrides_path).get(name, default)

    def build_generation_prompt(self, title: str, story: str, scenario_count: int) -> tuple[str, str]:
        """
        Build the prompt that asks for a complete feature file.

        Args:
            title: Feature title
            story: User story text
            scenario_count: Number of scenarios requested

        Returns:
            Tuple of (system instruction, user prompt)
        """
        tag = feature_tag(title)
        guidelines = self._section("GENERATION_GUIDELINES", GENERATION_GUIDELINES)

        prompt = f"""Generate a Cucumber BDD feature file for the feature titled "{title}" with {scenario_count} scenarios.
IMPORTANT: Use exactly ONE feature tag that matches this format: {tag}

Feature Story:
{story}

{guidelines}

Example Format:
{tag}
Feature: {title}
As a user, I want to do something
So that I can achieve a goal

Background:
  Given some shared context

Scenario: First Scenario
  Given some context
  When an action occurs
  Then there is an outcome

Ensure each scenario follows a high-level, outcome-oriented format with "Given, When, Then" steps."""

        logger.debug(f"Built generation prompt for '{title}' ({len(prompt)} chars, tag={tag})")
        return self._section("GENERATION_SYSTEM_INSTRUCTION", GENERATION_SYSTEM_INSTRUCTION), prompt

    def build_quality_prompt(self, content: str, current_title: str) -> tuple[str, str]:
        """Build the prompt that scores a feature's quality (0-100)."""
        prompt = f"""Analyze the quality of this Cucumber feature file.

Current title: "{current_title}"

Feature file:
{content}

Consider declarative style, scenario independence, Background usage, clarity for
non-technical readers, and whether the title describes the behaviour well.
Give at most 5 suggestions. Only include improved_title if the current title can be improved.

Respond with JSON in this exact shape:
{QUALITY_JSON_SHAPE}"""
        return self._section("QUALITY_SYSTEM_INSTRUCTION", QUALITY_SYSTEM_INSTRUCTION), prompt

    def build_complexity_prompt(self, content: str) -> tuple[str, str]:
        """Build the prompt that scores per-scenario complexity (1-10)."""
        prompt = f"""Analyze the complexity of every scenario in this Cucumber feature file.

Feature file:
{content}

{COMPLEXITY_FACTORS}

List the scenarios in the order they appear in the file.

Respond with JSON in this exact shape:
{COMPLEXITY_JSON_SHAPE}"""
        return self._section("COMPLEXITY_SYSTEM_INSTRUCTION", COMPLEXITY_SYSTEM_INSTRUCTION), prompt

    def build_title_prompt(self, story: str) -> tuple[str, str]:
        """Build the prompt that proposes up to 3 feature titles for a story."""
        prompt = f"""Suggest up to 3 concise feature titles (2-6 words each) for this user story:
"{story}"

Respond with JSON: {{"titles": ["<title>", ...]}}"""
        return self._section("TITLE_SYSTEM_INSTRUCTION", TITLE_SYSTEM_INSTRUCTION), prompt

    def build_story_suggestions_prompt(self, story: str) -> tuple[str, str]:
        """Build the prompt that asks for story improvement suggestions."""
        prompt = f"""Analyze this feature story and provide up to 3 brief suggestions to improve its clarity, completeness, and alignment with BDD best practices. The story: "{story}"

Respond with JSON: {{"suggestions": ["<suggestion>", ...]}}"""
        return self._section("STORY_SYSTEM_INSTRUCTION", STORY_SYSTEM_INSTRUCTION), prompt
