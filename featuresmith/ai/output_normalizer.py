"""
Post-processing for generated Gherkin text.

The normalizer walks the text line by line with named states instead of
running regexes over the whole document, so tags, blank lines and keywords
inside scenario bodies are never touched by the header repairs.

Guarantees after normalize():
- exactly one tag line, equal to the canonical tag of the title
- the tag line is immediately followed by the Feature line (when one exists)
- no blank line between the Feature line and the first story line
"""

import re
from enum import Enum
from typing import List, Optional

from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.ai.generation.prompt_builder import feature_tag

CODE_FENCE_PATTERN = re.compile(r"```[A-Za-z0-9_+-]*")
PLACEHOLDER_PATTERN = re.compile(r"<[^<>\s][^<>]*>")

SCENARIO_KEYWORDS = ("Scenario:", "Scenario Outline:", "Scenario Template:", "Example:")
SECTION_KEYWORDS = ("Feature:", "Background:", "Rule:", "Examples:", "Scenarios:") + SCENARIO_KEYWORDS
CONTINUATION_KEYWORDS = ("And", "But")


class _State(Enum):
    BEFORE_TAG = "before_tag"
    TAG = "tag"
    FEATURE_LINE = "feature_line"
    STORY = "story"
    BODY = "body"


def strip_code_fences(text: str) -> str:
    """Remove ``` markers, with or without a language hint, anywhere in the text."""
    return CODE_FENCE_PATTERN.sub("", text)


def is_tag_line(line: str) -> bool:
    tokens = line.split()
    return bool(tokens) and all(token.startswith("@") for token in tokens)


def is_feature_line(line: str) -> bool:
    return line.strip().startswith("Feature:")


def _is_structural(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(SECTION_KEYWORDS) or stripped.startswith("#") or is_tag_line(stripped)


def _is_scenario_header(line: str) -> bool:
    return line.strip().startswith(SCENARIO_KEYWORDS)


def _step_keyword(line: str) -> Optional[str]:
    first = line.strip().split(" ", 1)[0]
    if first in ("Given", "When", "Then", "And", "But", "*"):
        return first
    return None


def _step_body(line: str) -> str:
    parts = line.strip().split(" ", 1)
    return parts[1].strip() if len(parts) > 1 else ""


def _indent(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


class OutputNormalizer:
    """
    Repairs the header of a generated feature file and optionally hoists
    shared Given steps into a Background block.
    """

    def __init__(self, extract_background: Optional[bool] = None):
        self.extract_background_enabled = (
            settings.extract_background if extract_background is None else extract_background
        )

    def normalize(self, raw_text: str, title: str) -> str:
        """
        Normalize raw model output for the feature titled `title`.

        Steps: unify line endings, strip code fences, trim, replace the
        leading tag run with the canonical tag, drop blank lines between the
        Feature line and the story, then (if enabled) extract a Background.
        """
        tag = feature_tag(title)
        text = strip_code_fences((raw_text or "").replace("\r\n", "\n")).strip()
        content = self._repair_header(text, tag)

        if self.extract_background_enabled:
            content = self.extract_background(content)

        return content

    def _repair_header(self, text: str, tag: str) -> str:
        lines = text.split("\n") if text else []
        has_feature_line = any(is_feature_line(line) for line in lines)

        output: List[str] = []
        pending: List[str] = []
        state = _State.BEFORE_TAG

        for line in lines:
            if state in (_State.BEFORE_TAG, _State.TAG):
                if is_tag_line(line):
                    state = _State.TAG
                    continue
                if is_feature_line(line):
                    output.extend([tag, line.strip()])
                    state = _State.FEATURE_LINE
                    continue
                if not line.strip():
                    continue
                if has_feature_line:
                    logger.debug(f"Dropping preamble line before Feature: {line.strip()[:80]}")
                    continue
                output.extend([tag, line])
                state = _State.BODY
                continue

            if state is _State.FEATURE_LINE:
                # Tags here belong to the first scenario, or are a misplaced feature tag
                if not line.strip() or is_tag_line(line):
                    pending.append(line)
                    continue
                if _is_structural(line):
                    # No story: leave the spacing and scenario tags before the first section as they were
                    output.extend(pending)
                    state = _State.BODY
                else:
                    stray_tags = [held.strip() for held in pending if held.strip()]
                    if stray_tags:
                        logger.debug(f"Dropping tag line(s) between Feature and story: {stray_tags}")
                    state = _State.STORY
                pending = []
                output.append(line)
                continue

            if state is _State.STORY and _is_structural(line):
                state = _State.BODY
            output.append(line)

        if not output:
            output.append(tag)
        return "\n".join(output)

    def extract_background(self, content: str) -> str:
        """
        Hoist the Given steps shared by every scenario into a Background.

        No-op when a Background or Rule already exists, when fewer than two
        scenarios exist, or when the scenarios share no leading Given step.
        Steps carrying a data table, doc string or outline placeholder are
        never hoisted.
        """
        lines = content.split("\n")
        if any(line.strip().startswith(("Background:", "Rule:")) for line in lines):
            return content

        headers = [index for index, line in enumerate(lines) if _is_scenario_header(line)]
        if len(headers) < 2:
            return content

        blocks = [self._leading_given_block(lines, header) for header in headers]
        shared = self._shared_prefix_length(lines, blocks)
        if shared == 0:
            return content

        first_block = blocks[0]
        background_steps = [lines[index] for index in first_block[:shared]]
        removed = {index for block in blocks for index in block[:shared]}
        rewrite = {block[shared] for block in blocks if len(block) > shared}

        # Scenario tags move with their scenario; the feature header never does
        header_end = self._header_end(lines)
        insert_at = headers[0]
        while insert_at > header_end and (
            is_tag_line(lines[insert_at - 1]) or lines[insert_at - 1].strip().startswith("#")
        ):
            insert_at -= 1

        background = [f"{_indent(lines[headers[0]])}Background:", *background_steps, ""]
        if insert_at > header_end and lines[insert_at - 1].strip():
            background.insert(0, "")

        output: List[str] = []
        for index, line in enumerate(lines):
            if index == insert_at:
                output.extend(background)
            if index in removed:
                continue
            if index in rewrite:
                line = f"{_indent(line)}Given {_step_body(line)}"
            output.append(line)

        logger.info(f"Extracted {shared} shared Given step(s) from {len(headers)} scenarios into a Background")
        return "\n".join(output)

    @staticmethod
    def _header_end(lines: List[str]) -> int:
        """Index of the first line after the feature tag and Feature line."""
        feature_index = next((i for i, line in enumerate(lines) if is_feature_line(line)), None)
        if feature_index is not None:
            return feature_index + 1
        return 1 if lines and is_tag_line(lines[0]) else 0

    @staticmethod
    def _leading_given_block(lines: List[str], header: int) -> List[int]:
        """Line indexes of the Given/And/But run that opens a scenario."""
        block: List[int] = []
        index = header + 1
        while index < len(lines):
            keyword = _step_keyword(lines[index])
            expected = ("Given",) if not block else CONTINUATION_KEYWORDS
            if keyword not in expected:
                break
            next_line = lines[index + 1].strip() if index + 1 < len(lines) else ""
            if next_line.startswith(("|", '"""')) or PLACEHOLDER_PATTERN.search(lines[index]):
                break
            block.append(index)
            index += 1
        return block

    @staticmethod
    def _shared_prefix_length(lines: List[str], blocks: List[List[int]]) -> int:
        shared = min(len(block) for block in blocks)
        reference = [_step_body(lines[index]) for index in blocks[0]]
        for block in blocks[1:]:
            for position in range(shared):
                if _step_body(lines[block[position]]) != reference[position]:
                    shared = position
                    break
        return shared

    def validate_structure(self, content: str, title: str, scenario_count: Optional[int] = None) -> List[str]:
        """
        Check the structural guarantees of a normalized feature.

        Returns:
            List of human-readable warnings (empty when the structure is sound)
        """
        warnings: List[str] = []
        tag = feature_tag(title)
        lines = content.split("\n")

        feature_index = next((i for i, line in enumerate(lines) if is_feature_line(line)), None)
        header = lines[:feature_index] if feature_index is not None else lines[:1]
        tag_lines = [line for line in header if is_tag_line(line)]

        if len(tag_lines) != 1:
            warnings.append(f"Expected exactly one tag line, found {len(tag_lines)}")
        elif tag_lines[0].strip() != tag:
            warnings.append(f"Tag '{tag_lines[0].strip()}' does not match canonical tag '{tag}'")

        if feature_index is None:
            warnings.append("No 'Feature:' line found")
        else:
            if feature_index == 0 or lines[feature_index - 1].strip() != tag:
                warnings.append("Tag line is not immediately followed by the Feature line")
            if feature_index + 1 < len(lines) and not lines[feature_index + 1].strip():
                following = next((line for line in lines[feature_index + 1:] if line.strip()), "")
                if following and not _is_structural(following):
                    warnings.append("Blank line between 'Feature:' and the story")

        if scenario_count is not None:
            found = sum(1 for line in lines if _is_scenario_header(line))
            if found != scenario_count:
                warnings.append(f"Requested {scenario_count} scenarios, found {found}")

        for warning in warnings:
            logger.warning(f"Feature structure: {warning}")
        return warnings
