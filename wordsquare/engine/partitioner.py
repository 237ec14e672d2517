"""Fan the starting row word out across a pool of worker threads."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import psutil

from ..core.models import Solution
from ..utils.logger import get_logger
from .builder import SearchStats, SolutionSink, SquareBuilder
from .prefix_index import PrefixIndex

LOGGER = get_logger(__name__)


def default_worker_count() -> int:
    """Logical CPU count, falling back to one when it cannot be determined."""

    return psutil.cpu_count(logical=True) or 1


@dataclass
class WorkerFailure:
    """A starting word (or a whole worker) whose search raised."""

    worker_id: int
    start_index: Optional[int]
    start_word: Optional[str]
    error: BaseException

    def __str__(self) -> str:
        where = self.start_word if self.start_word is not None else "<worker>"
        return f"worker {self.worker_id} at {where}: {self.error!r}"


@dataclass
class WorkerReport:
    worker_id: int
    solutions: List[Solution] = field(default_factory=list)
    failures: List[WorkerFailure] = field(default_factory=list)
    stats: SearchStats = field(default_factory=SearchStats)


@dataclass
class PartitionResult:
    solutions: List[Solution]
    failures: List[WorkerFailure]
    stats: SearchStats
    workers: int

    @property
    def ok(self) -> bool:
        return not self.failures


class Partitioner:
    """Static split of starting indices over ``workers`` threads.

    Worker ``k`` takes every ``workers``-th starting index beginning at ``k``
    and runs them one after another on its own :class:`SquareBuilder`. The
    prefix index is shared read-only. A starting word whose search raises is
    recorded as a :class:`WorkerFailure`; the worker moves on with a fresh
    builder and the other workers are unaffected.
    """

    def __init__(
        self,
        index: PrefixIndex,
        workers: Optional[int] = None,
        sink: Optional[SolutionSink] = None,
    ) -> None:
        self.index = index
        self.workers = workers if workers is not None else default_worker_count()
        if self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        self._sink = sink
        self._sink_lock = threading.Lock()

    def run(self, starts: Optional[Iterable[int]] = None) -> PartitionResult:
        start_indices: Sequence[int] = (
            list(starts) if starts is not None else range(len(self.index.words))
        )
        pool_size = max(1, min(self.workers, len(start_indices)))
        LOGGER.info(
            "Searching %d starting words on %d worker threads", len(start_indices), pool_size
        )

        solutions: List[Solution] = []
        failures: List[WorkerFailure] = []
        stats = SearchStats()
        with ThreadPoolExecutor(max_workers=pool_size) as executor:
            futures = {
                executor.submit(self._run_worker, worker_id, start_indices[worker_id::pool_size]): worker_id
                for worker_id in range(pool_size)
            }
            for future in as_completed(futures):
                worker_id = futures[future]
                try:
                    report = future.result()
                except Exception as exc:  # noqa: BLE001 - reported per worker below
                    LOGGER.error("Worker %d crashed: %s", worker_id, exc)
                    failures.append(WorkerFailure(worker_id, None, None, exc))
                    continue
                solutions.extend(report.solutions)
                failures.extend(report.failures)
                stats.merge(report.stats)

        LOGGER.info(
            "Search finished: %d solutions, %d placements, %d pruned, %d failures",
            len(solutions),
            stats.placements,
            stats.pruned,
            len(failures),
        )
        return PartitionResult(solutions=solutions, failures=failures, stats=stats, workers=pool_size)

    def _run_worker(self, worker_id: int, starts: Sequence[int]) -> WorkerReport:
        report = WorkerReport(worker_id=worker_id)
        builder = self._new_builder()
        for start in starts:
            try:
                report.solutions.extend(builder.search(start))
            except Exception as exc:  # noqa: BLE001 - isolated to this starting word
                word = self.index.words[start] if 0 <= start < len(self.index.words) else None
                LOGGER.warning("Worker %d failed on start %r: %s", worker_id, word, exc)
                report.failures.append(WorkerFailure(worker_id, start, word, exc))
                report.stats.merge(builder.stats)
                builder = self._new_builder()
        report.stats.merge(builder.stats)
        LOGGER.debug(
            "Worker %d done: %d starts, %d solutions", worker_id, len(starts), len(report.solutions)
        )
        return report

    def _new_builder(self) -> SquareBuilder:
        sink = self._locked_sink if self._sink is not None else None
        return SquareBuilder(self.index, sink=sink)

    def _locked_sink(self, solution: Solution) -> None:
        assert self._sink is not None
        with self._sink_lock:
            self._sink(solution)
