#!/usr/bin/env python3
"""
FeatureSmith CLI - Generate and score Cucumber feature files from user stories
"""

import sys
import json
import asyncio
import argparse
from pathlib import Path
from loguru import logger

from featuresmith.config.settings import settings
from featuresmith.config.logging_config import setup_logging
from featuresmith.core.exceptions import FeatureSmithError
from featuresmith.models.feature import FeatureRequest
from featuresmith.monitoring.metrics import get_metrics


def _read_feature_file(path: str) -> str:
    feature_path = Path(path)
    if not feature_path.exists():
        print(f"\n❌ File not found: {feature_path}")
        sys.exit(1)
    return feature_path.read_text(encoding="utf-8")


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def _generate(args) -> None:
    from featuresmith.workflows.feature_workflow import FeatureWorkflow

    workflow = FeatureWorkflow()
    request = FeatureRequest(title=args.title, story=args.story, scenario_count=args.scenarios)

    if workflow.title_exists(request.title):
        print(f"\n⚠️ A feature titled '{request.title}' already exists")

    result = await workflow.create_feature(request)

    print(f"\n✅ Feature {result.feature.id} generated\n")
    print(result.feature.generated_content)

    if args.output:
        Path(args.output).write_text(result.feature.generated_content + "\n", encoding="utf-8")
        print(f"\n📁 Saved to {args.output}")

    print(f"\n📊 Quality score: {result.analysis.quality_score}/100")
    print(f"📊 Overall complexity: {result.complexity.overall_complexity}/10")
    for scenario in result.complexity.scenarios:
        print(f"  • {scenario.name}: {scenario.complexity} ({scenario.label})")

    if args.analyze:
        if result.analysis.suggestions:
            print("\n💡 Suggestions:")
            for suggestion in result.analysis.suggestions:
                print(f"  • {suggestion}")
        if result.analysis.improved_title:
            print(f"\n💡 Suggested title: {result.analysis.improved_title}")
        if result.complexity.recommendations:
            print("\n💡 Recommendations:")
            for recommendation in result.complexity.recommendations:
                print(f"  • {recommendation}")


async def _analyze(args) -> None:
    from featuresmith.ai.quality_analyzer import QualityAnalyzer

    content = _read_feature_file(args.file)
    report = await QualityAnalyzer().analyze(content, args.title or "")
    _print_json(report.model_dump(by_alias=True))


async def _complexity(args) -> None:
    from featuresmith.ai.complexity_scorer import ComplexityScorer

    content = _read_feature_file(args.file)
    report = await ComplexityScorer().analyze(content)
    _print_json(report.model_dump(by_alias=True))


async def _suggest_title(args) -> None:
    from featuresmith.ai.title_suggester import TitleSuggester

    suggester = TitleSuggester()
    if not suggester.should_suggest(args.story):
        print(f"\n💡 Story is too short for title suggestions (minimum {suggester.min_story_length} characters)")
        return
    for title in await suggester.suggest(args.story):
        print(title)


async def _suggest(args) -> None:
    from featuresmith.ai.story_advisor import StoryAdvisor

    suggestions = await StoryAdvisor().get_suggestions(args.story)
    if not suggestions:
        print("\nℹ️ No suggestions available")
    for suggestion in suggestions:
        print(f"  • {suggestion}")


COMMANDS = {
    "generate": _generate,
    "analyze": _analyze,
    "complexity": _complexity,
    "suggest-title": _suggest_title,
    "suggest": _suggest,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="FeatureSmith - AI-powered Cucumber feature generation from user stories",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  featuresmith generate --title "Password Reset" --story "As a user..." --scenarios 3
  featuresmith generate --title "Password Reset" --story "As a user..." --analyze -o reset.feature
  featuresmith analyze --file reset.feature --title "Password Reset"
  featuresmith complexity --file reset.feature
  featuresmith suggest-title --story "As a shopper I want to save items for later"
  featuresmith suggest --story "As a shopper I want to save items for later"
        """
    )

    parser.add_argument(
        'command',
        choices=list(COMMANDS),
        help='Command to execute'
    )

    parser.add_argument('--title', help='Feature title (generate, analyze)')
    parser.add_argument('--story', help='User story text (generate, suggest-title, suggest)')

    parser.add_argument(
        '--scenarios',
        type=int,
        default=3,
        help='Number of scenarios to generate (default: 3)'
    )

    parser.add_argument('--file', help='Path to a .feature file (analyze, complexity)')
    parser.add_argument('--output', '-o', help='Write the generated feature to this path')

    parser.add_argument(
        '--analyze',
        action='store_true',
        help='Print quality suggestions and complexity recommendations after generation'
    )

    parser.add_argument(
        '--stats',
        action='store_true',
        help='Log per-operation timings when the command finishes'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging'
    )

    return parser


def _check_args(parser: argparse.ArgumentParser, args) -> None:
    required = {
        "generate": ("title", "story"),
        "analyze": ("file",),
        "complexity": ("file",),
        "suggest-title": ("story",),
        "suggest": ("story",),
    }
    missing = [f"--{name}" for name in required[args.command] if not getattr(args, name)]
    if missing:
        parser.error(f"{args.command} requires {', '.join(missing)}")


def main():
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args()
    _check_args(parser, args)

    setup_logging("DEBUG" if args.verbose else settings.log_level, settings.log_file)

    try:
        asyncio.run(COMMANDS[args.command](args))
    except FeatureSmithError as e:
        print(f"\n❌ {e.message}")
        logger.debug(f"Error details: {e.to_dict()}")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ {args.command} failed: {e}")
        logger.exception("Full error details:")
        sys.exit(1)
    finally:
        if args.stats:
            get_metrics().log_summary()


if __name__ == "__main__":
    main()
