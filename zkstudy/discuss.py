"""
Command-line runner for a single pipeline run.

Usage:
    python -m zkstudy.discuss "Zero Knowledge Proofs for Large Language Models"
    python -m zkstudy.discuss --fixture "zkSNARKs for blockchain scalability"
"""

import argparse
import asyncio
import dataclasses
import sys
from typing import List, Optional

from zkstudy.graph.pipeline import build_default_pipeline, validate_topic
from zkstudy.shared.errors import TopicValidationError
from zkstudy.shared.logging.config import configure_logging
from zkstudy.shared.settings import get_settings


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the research -> summary pipeline once.")
    parser.add_argument("topic", help="Research topic (3-200 characters)")
    parser.add_argument(
        "--fixture",
        action="store_true",
        help="Use the offline fixture model instead of the configured LLM backend",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="Override the pipeline deadline in seconds",
    )
    parser.add_argument(
        "--transcript",
        action="store_true",
        help="Print every message of the conversation, not just the summary",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    settings = get_settings()
    overrides = {}
    if args.fixture:
        overrides["llm_backend"] = "fixture"
    if args.deadline is not None:
        overrides["deadline_seconds"] = args.deadline
    if overrides:
        settings = dataclasses.replace(settings, **overrides)
    configure_logging(settings)

    try:
        topic = validate_topic(args.topic)
    except TopicValidationError as e:
        print(f"Invalid topic: {e}", file=sys.stderr)
        return 2

    pipeline = build_default_pipeline(settings)
    result, state = asyncio.run(pipeline.analyze(topic))

    if args.transcript:
        for message in state.messages:
            origin = f" ({message.origin_agent})" if message.origin_agent else ""
            print(f"--- {message.role.value}{origin}\n{message.content}\n")

    if not result.ok:
        print(f"Pipeline {result.outcome.value}: {result.detail}", file=sys.stderr)
        return 1

    print("\nFinal Summary:")
    print(result.content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
