"""Double-sided backtracking search for 5x5 word squares.

Lines are filled alternating between rows and columns::

    row0 -> col0 -> row1 -> col1 -> row2 -> col2 -> row3 -> col3 -> (row4, col4)

Every candidate comes from a prefix range built from the perpendicular letters
already in place, and every placement is followed by a forward check of the
lines it crosses. The last row and column share cell (4,4) and are resolved
together from the letters completing their four letter prefixes.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from ..core.constants import WORD_LENGTH, Direction
from ..core.models import COLUMNS, ROWS, Slot, Solution
from ..utils.logger import get_logger
from .grid import SquareGrid
from .prefix_index import PrefixIndex

LOGGER = get_logger(__name__)

SolutionSink = Callable[[Solution], None]

# row4 and col4 are not in the order; they are resolved together at the leaf.
PLACEMENT_ORDER: Tuple[Slot, ...] = tuple(
    slot for pair in zip(ROWS[:-1], COLUMNS[:-1]) for slot in pair
)
LAST_ROW = ROWS[-1]
LAST_COLUMN = COLUMNS[-1]


@dataclass
class SearchStats:
    placements: int = 0
    pruned: int = 0
    solutions: int = 0

    def merge(self, other: "SearchStats") -> None:
        self.placements += other.placements
        self.pruned += other.pruned
        self.solutions += other.solutions


class SquareBuilder:
    """Runs the sequential search rooted at one starting row word at a time.

    A builder owns its grid and placed-word set, so each worker thread needs
    its own instance; the prefix index is only read.
    """

    def __init__(self, index: PrefixIndex, sink: Optional[SolutionSink] = None) -> None:
        self.index = index
        self.words = index.words
        self.grid = SquareGrid()
        self.placed: Set[int] = set()
        self.stats = SearchStats()
        self._slot_words: Dict[Slot, int] = {}
        self._sink = sink
        self._solutions: List[Solution] = []

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def search(self, start: int) -> List[Solution]:
        """Return every solution whose first row is ``self.words[start]``.

        Each square found is reported together with its transpose.
        """

        if not 0 <= start < len(self.words):
            raise IndexError(f"Starting index {start} outside dictionary of {len(self.words)}")
        assert self.grid.is_empty() and not self.placed, "builder reused with leftover state"

        self._solutions = []
        before = self.stats.solutions
        with self._placing(ROWS[0], start):
            if self._forward_check(ROWS[0]):
                self._fill(1)
        found, self._solutions = self._solutions, []

        assert self.grid.is_empty() and not self.placed, "search leaked grid state"
        LOGGER.debug(
            "Start %r: %d solutions (%d placements, %d pruned so far)",
            self.words[start],
            self.stats.solutions - before,
            self.stats.placements,
            self.stats.pruned,
        )
        return found

    # ------------------------------------------------------------------
    # Recursion
    # ------------------------------------------------------------------
    def _fill(self, depth: int) -> None:
        if depth == len(PLACEMENT_ORDER):
            self._resolve_last_cell()
            return
        slot = PLACEMENT_ORDER[depth]
        for candidate in self._candidates(slot):
            with self._placing(slot, candidate):
                if self._forward_check(slot):
                    self._fill(depth + 1)

    def _candidates(self, slot: Slot) -> Iterator[int]:
        prefix = self.grid.prefix(slot)
        # The first column must sort after the first row, so each square is
        # reached from exactly one starting word.
        floor = self._slot_words[ROWS[0]] if slot == COLUMNS[0] else -1
        for candidate in self.index.range(prefix):
            if candidate > floor and candidate not in self.placed:
                yield candidate

    def _forward_check(self, slot: Slot) -> bool:
        """Check that every open line crossing ``slot`` can still be completed."""
        if slot.direction == Direction.ROW:
            crossing = COLUMNS[slot.index:]
        else:
            crossing = ROWS[slot.index + 1:]
        for line in crossing:
            if not self.index.has_prefix(self.grid.prefix(line)):
                self.stats.pruned += 1
                return False
        return True

    def _resolve_last_cell(self) -> None:
        row_endings = self._endings(LAST_ROW)
        if not row_endings:
            return
        column_endings = self._endings(LAST_COLUMN)
        for letter in sorted(row_endings.keys() & column_endings.keys()):
            row_word, column_word = row_endings[letter], column_endings[letter]
            if row_word == column_word:
                continue
            with self._placing(LAST_ROW, row_word):
                with self._placing(LAST_COLUMN, column_word):
                    self._emit()

    def _endings(self, slot: Slot) -> Dict[str, int]:
        """Map each letter that completes ``slot`` to the word it completes."""
        return {
            self.words[candidate][-1]: candidate
            for candidate in self.index.range(self.grid.prefix(slot))
            if candidate not in self.placed
        }

    def _emit(self) -> None:
        solution = Solution(rows=tuple(self.words[self._slot_words[row]] for row in ROWS))
        if len(set(solution.words())) != 2 * WORD_LENGTH:
            return
        for found in (solution, solution.transpose()):
            self.stats.solutions += 1
            self._solutions.append(found)
            if self._sink is not None:
                self._sink(found)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @contextmanager
    def _placing(self, slot: Slot, candidate: int) -> Iterator[None]:
        """Commit ``candidate`` to ``slot`` and undo it on every exit path."""
        assert candidate not in self.placed, f"{self.words[candidate]!r} placed twice"
        filled_before = self.grid.filled_count
        self.stats.placements += 1
        self.placed.add(candidate)
        self._slot_words[slot] = candidate
        try:
            with self.grid.placed(slot, self.words[candidate]):
                yield
        finally:
            del self._slot_words[slot]
            self.placed.discard(candidate)
            assert self.grid.filled_count == filled_before, "grid not restored on backtrack"
            assert self._in_sync(), "placed words out of sync with grid"

    def _in_sync(self) -> bool:
        return self.placed == set(self._slot_words.values()) and all(
            self.grid.word_slots.get(slot) == self.words[word]
            for slot, word in self._slot_words.items()
        ) and len(self.grid.word_slots) == len(self._slot_words)
