"""
Response parser for JSON-mode model calls.
Single Responsibility: turning raw model text into validated report objects.

Each report type has exactly one normalization function. Missing or
malformed fields fall back to defaults and numbers are clamped into range;
only output that is not JSON at all raises.
"""

import json
import math
from typing import Any, List, Optional

from loguru import logger

from featuresmith.models.reports import (
    ComplexityFactors,
    ComplexityReport,
    QualityReport,
    ScenarioComplexity,
)


def _as_int(value: Any, default: int) -> int:
    """Coerce a model-supplied number to int, or return the default."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return default
        return int(round(value))
    return default


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if isinstance(item, (str, int, float)) and str(item).strip()]


class ResponseParser:
    """
    Parses model responses into report objects.
    Features:
    - JSON extraction (plain JSON or Claude-style <json> tags)
    - Complexity, quality and suggestion normalization
    """

    def parse_ai_response(self, response_text: str) -> dict:
        """
        Parse model response text into a JSON object.

        Handles both:
        - OpenAI: Direct JSON (json_object response format)
        - Claude: JSON wrapped in <json> tags

        Args:
            response_text: Raw response from the model

        Returns:
            Parsed dictionary

        Raises:
            ValueError: If the response holds no JSON object
        """
        response_text = response_text or ""

        if "<json>" in response_text and "</json>" in response_text:
            logger.debug("Detected Claude format (XML-wrapped JSON)")
            json_start = response_text.find("<json>") + 6
            json_end = response_text.find("</json>")
            json_text = response_text[json_start:json_end].strip()
        else:
            json_start = response_text.find("{")
            json_end = response_text.rfind("}") + 1

            if json_start == -1 or json_end == 0:
                raise ValueError("No JSON found in AI response")

            json_text = response_text[json_start:json_end]

        try:
            data = json.loads(json_text)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON: {e}")
            logger.debug(f"Response text preview: {json_text[:500]}")
            raise ValueError(f"Invalid JSON in AI response: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    def build_complexity_report(self, data: dict) -> ComplexityReport:
        """
        Normalize a complexity payload.

        overallComplexity and each scenario complexity are clamped to [1, 10]
        (default 1); factor scores default to 0 and are not clamped.
        """
        scenarios = []
        raw_scenarios = data.get("scenarios")
        for entry in raw_scenarios if isinstance(raw_scenarios, list) else []:
            if not isinstance(entry, dict):
                entry = {}
            factors = entry.get("factors")
            if not isinstance(factors, dict):
                factors = {}

            name = entry.get("name")
            explanation = entry.get("explanation")
            scenarios.append(
                ScenarioComplexity(
                    name=str(name) if name else "Unnamed Scenario",
                    complexity=_clamp(_as_int(entry.get("complexity"), 1), 1, 10),
                    factors=ComplexityFactors(
                        step_count=_as_int(factors.get("stepCount"), 0),
                        data_dependencies=_as_int(factors.get("dataDependencies"), 0),
                        conditional_logic=_as_int(factors.get("conditionalLogic"), 0),
                        technical_difficulty=_as_int(factors.get("technicalDifficulty"), 0),
                    ),
                    explanation=str(explanation) if explanation is not None else "",
                )
            )

        report = ComplexityReport(
            overall_complexity=_clamp(_as_int(data.get("overallComplexity"), 1), 1, 10),
            scenarios=scenarios,
            recommendations=_string_list(data.get("recommendations")),
        )
        logger.debug(
            f"Complexity report: overall={report.overall_complexity}, scenarios={len(report.scenarios)}"
        )
        return report

    def build_quality_report(self, data: dict) -> QualityReport:
        """Normalize a quality payload; quality_score is clamped to [0, 100]."""
        improved_title: Optional[Any] = data.get("improved_title")
        return QualityReport(
            quality_score=_clamp(_as_int(data.get("quality_score"), 0), 0, 100),
            suggestions=_string_list(data.get("suggestions")),
            improved_title=str(improved_title) if improved_title is not None else None,
        )

    def build_string_list(self, data: dict, key: str) -> List[str]:
        """Extract a list of strings (titles, suggestions); missing field gives []."""
        return _string_list(data.get(key))
