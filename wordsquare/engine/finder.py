"""Word square search orchestration.

Pipeline:
  1. Dictionary: validate, deduplicate and sort the caller's words.
  2. Index: build the prefix index once, before any worker starts.
  3. Search: partition the starting words over worker threads (or hand the
     whole dictionary to the CP-SAT engine) and merge the results.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..core.constants import IndexStrategy, SearchEngine
from ..core.exceptions import SearchError
from ..core.models import Solution
from ..data.dictionary import DictionaryConfig, WordDictionary
from ..utils.logger import get_logger
from .builder import SearchStats, SolutionSink
from .partitioner import Partitioner, WorkerFailure
from .prefix_index import build_prefix_index
from .solver import solve_word_squares
from .validator import SquareValidator

LOGGER = get_logger(__name__)


@dataclass
class FinderConfig:
    """Search options.

    ``allow_partial`` returns whatever was found instead of raising
    :class:`SearchError`: failed starting words are listed in
    :attr:`SearchResult.failures`, and a CP-SAT run stopped by
    ``solver_timeout`` yields the squares enumerated so far.
    """

    workers: Optional[int] = None
    index_strategy: IndexStrategy = IndexStrategy.BISECT
    engine: SearchEngine = SearchEngine.DOUBLE_SIDED
    allow_partial: bool = False
    verify: bool = False
    solver_timeout: Optional[float] = None


@dataclass
class SearchResult:
    solutions: List[Solution]
    failures: List[WorkerFailure] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)
    elapsed: float = 0.0
    workers: int = 0

    def sorted(self) -> List[Solution]:
        """Solutions in a deterministic order."""
        return sorted(self.solutions)


class WordSquareFinder:
    """High-level orchestrator: dictionary, prefix index, then search."""

    def __init__(
        self,
        dictionary: WordDictionary,
        config: Optional[FinderConfig] = None,
        sink: Optional[SolutionSink] = None,
    ) -> None:
        self.dictionary = dictionary
        self.config = config or FinderConfig()
        self.sink = sink
        self.validator = SquareValidator(dictionary)

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def find(self) -> SearchResult:
        engine = SearchEngine(self.config.engine)
        LOGGER.info("Finding word squares over %d words with %s", len(self.dictionary), engine.value)
        started = time.perf_counter()

        if engine == SearchEngine.CP_SAT:
            result = self._run_cp_sat()
        else:
            result = self._run_double_sided()
        result.elapsed = time.perf_counter() - started

        if self.config.verify:
            self._verify(result)
        LOGGER.info("Found %d solutions in %.2fs", len(result.solutions), result.elapsed)
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _run_cp_sat(self) -> SearchResult:
        try:
            solutions = solve_word_squares(
                self.dictionary, timeout=self.config.solver_timeout, sink=self.sink
            )
        except SearchError as exc:
            if not self.config.allow_partial:
                raise
            LOGGER.warning("Returning %d squares from an incomplete enumeration", len(exc.solutions))
            solutions = exc.solutions
        return SearchResult(solutions=solutions, workers=1)

    def _run_double_sided(self) -> SearchResult:
        index = build_prefix_index(self.dictionary, self.config.index_strategy)
        partitioner = Partitioner(index, workers=self.config.workers, sink=self.sink)
        outcome = partitioner.run()
        if outcome.failures and not self.config.allow_partial:
            for failure in outcome.failures:
                LOGGER.error("Search failure: %s", failure)
            raise SearchError(
                f"{len(outcome.failures)} starting word(s) failed",
                failures=outcome.failures,
                solutions=outcome.solutions,
            )
        return SearchResult(
            solutions=outcome.solutions,
            failures=outcome.failures,
            stats=outcome.stats,
            workers=outcome.workers,
        )

    def _verify(self, result: SearchResult) -> None:
        for solution in result.solutions:
            validation = self.validator.validate(solution)
            if not validation.ok:
                raise SearchError(
                    f"Invalid square {solution}: {validation.messages}",
                    failures=result.failures,
                    solutions=result.solutions,
                )


def find_word_squares(
    words: Iterable[str],
    *,
    normalize: bool = False,
    sink: Optional[SolutionSink] = None,
    **options: object,
) -> List[Solution]:
    """Build a dictionary from ``words`` and return every word square.

    ``options`` are :class:`FinderConfig` fields. The result order depends on
    thread scheduling; sort it when a stable order matters.
    """

    dictionary = WordDictionary(words, DictionaryConfig(normalize=normalize))
    config = FinderConfig(**options)  # type: ignore[arg-type]
    return WordSquareFinder(dictionary, config, sink=sink).find().solutions
