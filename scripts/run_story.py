"""
CLI to generate one entrepreneur story and illustration end-to-end.

Usage:
    python scripts/run_story.py --output-dir stories/ --language en

Environment variables:
    GEMINI_API_KEY       - required (API_KEY is accepted as an alias)
    REPLICATE_API_TOKEN  - required
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path

from tqdm.auto import tqdm

# Ensure project root is on the Python path when running as a script.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chronicle import StoryOrchestrator, StoryResult
from chronicle.common import ConfigurationError, configure_logging, load_settings

logger = logging.getLogger("chronicle.cli")

TOTAL_STAGES = 3


class ProgressPrinter:
    """
    Prints numbered command-line progress for each pipeline stage.
    """

    def __init__(self) -> None:
        self._stage = 0

    def __call__(self, message: str) -> None:
        self._stage += 1
        tqdm.write(f"[{self._stage}/{TOTAL_STAGES}] {message}")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Generate an inspirational entrepreneur story with an illustration."
    )
    parser.add_argument(
        "--output-dir",
        default=".",
        help="Directory where story.yaml and the illustration are written.",
    )
    parser.add_argument(
        "--language",
        default=None,
        help="Story language code (vi or en). Defaults to CHRONICLE_STORY_LANGUAGE.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level override (e.g. DEBUG). Defaults to CHRONICLE_LOG_LEVEL.",
    )
    return parser.parse_args(argv)


def save_result(result: StoryResult, output_dir: Path) -> tuple[Path, Path]:
    output_dir.mkdir(parents=True, exist_ok=True)
    story_path = output_dir / "story.yaml"
    image_path = output_dir / result.download_filename()
    story_path.write_text(result.to_yaml(), encoding="utf-8")
    image_path.write_bytes(result.image_bytes())
    return story_path, image_path


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        settings = load_settings()
        if args.language:
            settings = dataclasses.replace(settings, story_language=args.language.strip().lower())
        configure_logging(args.log_level or settings.log_level)
        orchestrator = StoryOrchestrator.from_settings(settings)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(orchestrator.generate(ProgressPrinter()))
    except Exception:
        logger.exception("Story generation failed")
        print(orchestrator.language.failure_message, file=sys.stderr)
        return 1

    story_path, image_path = save_result(result, Path(args.output_dir))
    tqdm.write(f"\n{result.subject_name}\n\n{result.narrative}\n")
    print(f"Saved story to {story_path}")
    print(f"Saved illustration to {image_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
