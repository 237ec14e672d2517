"""CLI entrypoint for the word square finder."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from wordsquare.core.constants import IndexStrategy, SearchEngine
from wordsquare.core.exceptions import WordSquareError
from wordsquare.core.models import Solution, deduplicate_transposes
from wordsquare.data.dictionary import WordDictionary
from wordsquare.data.loader import load_words
from wordsquare.engine.finder import FinderConfig, WordSquareFinder
from wordsquare.utils.logger import configure_logging

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Find 5x5 word squares whose rows and columns are all dictionary words",
    )
    parser.add_argument(
        "--words",
        type=Path,
        default=Path("words.txt"),
        help="Word list, one word per line (only five lowercase letter lines are used)",
    )
    parser.add_argument("--limit", type=int, default=None, help="Use only the first N words")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads (default: CPU count)")
    parser.add_argument(
        "--index",
        type=str,
        choices=[s.value for s in IndexStrategy],
        default=IndexStrategy.BISECT.value,
        help="Prefix index strategy",
    )
    parser.add_argument(
        "--engine",
        type=str,
        choices=[e.value for e in SearchEngine],
        default=SearchEngine.DOUBLE_SIDED.value,
        help="Search engine",
    )
    parser.add_argument(
        "--unique",
        action="store_true",
        help="Report each square once instead of once per orientation",
    )
    parser.add_argument("--verify", action="store_true", help="Re-validate every square found")
    parser.add_argument(
        "--output",
        type=Path,
        help="Append squares to this file as they are found",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def write_solutions(solutions: List[Solution], stream: TextIO) -> None:
    for solution in sorted(solutions):
        print(solution, file=stream)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    config = FinderConfig(
        workers=args.workers,
        index_strategy=IndexStrategy(args.index),
        engine=SearchEngine(args.engine),
        verify=args.verify,
    )

    output: Optional[TextIO] = None
    try:
        if args.output is not None:
            output = args.output.open("a", encoding="utf-8")
        dictionary = WordDictionary(load_words(args.words, limit=args.limit))

        def sink(solution: Solution) -> None:
            if output is not None:
                output.write(f"{solution}\n")
                output.flush()

        result = WordSquareFinder(dictionary, config, sink=sink if output is not None else None).find()
    except (WordSquareError, OSError) as exc:
        LOGGER.error("%s", exc)
        return 1
    finally:
        if output is not None:
            output.close()

    solutions = deduplicate_transposes(result.solutions) if args.unique else result.solutions
    write_solutions(solutions, sys.stdout)
    LOGGER.info("%d squares (%d workers, %.2fs)", len(solutions), result.workers, result.elapsed)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
