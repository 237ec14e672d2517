"""Data models supporting the word square finder."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Iterable, List, Sequence, Set, Tuple

from .constants import WORD_LENGTH, Direction


@dataclass(frozen=True)
class Slot:
    """A single row or column of the square."""

    direction: Direction
    index: int

    @cached_property
    def cells(self) -> Tuple[Tuple[int, int], ...]:
        if self.direction == Direction.ROW:
            return tuple((self.index, i) for i in range(WORD_LENGTH))
        return tuple((i, self.index) for i in range(WORD_LENGTH))

    def __str__(self) -> str:
        return f"{self.direction.value.lower()}{self.index}"


ROWS: Tuple[Slot, ...] = tuple(Slot(Direction.ROW, i) for i in range(WORD_LENGTH))
COLUMNS: Tuple[Slot, ...] = tuple(Slot(Direction.COLUMN, i) for i in range(WORD_LENGTH))


@dataclass(frozen=True, order=True)
class Solution:
    """A finished word square, stored as its five row words."""

    rows: Tuple[str, ...]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Solution":
        if len(rows) != WORD_LENGTH or any(len(row) != WORD_LENGTH for row in rows):
            raise ValueError(f"A solution needs {WORD_LENGTH} rows of {WORD_LENGTH} letters")
        return cls(rows=tuple(rows))

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple("".join(column) for column in zip(*self.rows))

    def words(self) -> Tuple[str, ...]:
        """Rows followed by columns."""
        return self.rows + self.columns

    def transpose(self) -> "Solution":
        return Solution(rows=self.columns)

    def canonical(self) -> "Solution":
        """The lexicographically smaller of the square and its transpose."""
        return min(self, self.transpose())

    def __str__(self) -> str:
        return ",".join(self.rows)


def deduplicate_transposes(solutions: Iterable[Solution]) -> List[Solution]:
    """Collapse each square and its transpose into one canonical solution."""

    seen: Set[Solution] = set()
    unique: List[Solution] = []
    for solution in solutions:
        canonical = solution.canonical()
        if canonical in seen:
            continue
        seen.add(canonical)
        unique.append(canonical)
    return unique
