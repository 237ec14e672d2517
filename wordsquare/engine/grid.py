"""Mutable 5x5 grid used by a single search worker."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..core.constants import WORD_LENGTH
from ..core.exceptions import SlotPlacementError
from ..core.models import Slot


@dataclass
class Cell:
    """A grid cell and the slots whose words wrote it."""

    letter: Optional[str] = None
    owners: Set[Slot] = field(default_factory=set)

    def is_empty(self) -> bool:
        return self.letter is None


class SquareGrid:
    """Letters placed so far, with per-cell ownership for exact rollback.

    A cell crossed by a row and a column keeps its letter until both words
    covering it have been removed, so undoing placements in reverse order
    always returns the grid to its previous state.
    """

    def __init__(self) -> None:
        self.cells: List[List[Cell]] = [
            [Cell() for _ in range(WORD_LENGTH)] for _ in range(WORD_LENGTH)
        ]
        self.word_slots: Dict[Slot, str] = {}
        self._filled_count = 0

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    @property
    def filled_count(self) -> int:
        return self._filled_count

    def is_empty(self) -> bool:
        return self._filled_count == 0 and not self.word_slots

    def prefix(self, slot: Slot) -> str:
        """Letters of ``slot`` up to its first empty cell."""
        letters = []
        for row, col in slot.cells:
            letter = self.cells[row][col].letter
            if letter is None:
                break
            letters.append(letter)
        return "".join(letters)

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def place_word(self, slot: Slot, word: str) -> None:
        if len(word) != WORD_LENGTH:
            raise SlotPlacementError("Word length mismatch")
        if slot in self.word_slots:
            raise SlotPlacementError(f"Slot {slot} already holds {self.word_slots[slot]!r}")

        for index, (row, col) in enumerate(slot.cells):
            existing = self.cells[row][col].letter
            if existing is not None and existing != word[index]:
                raise SlotPlacementError(
                    f"Letter conflict at ({row},{col}): {existing!r} vs {word[index]!r}"
                )

        # All checks passed, mutate grid
        for index, (row, col) in enumerate(slot.cells):
            cell = self.cells[row][col]
            if cell.letter is None:
                cell.letter = word[index]
                self._filled_count += 1
            cell.owners.add(slot)
        self.word_slots[slot] = word

    def remove_word(self, slot: Slot) -> None:
        if slot not in self.word_slots:
            return
        for row, col in slot.cells:
            cell = self.cells[row][col]
            cell.owners.discard(slot)
            if not cell.owners:
                cell.letter = None
                self._filled_count -= 1
        del self.word_slots[slot]

    @contextmanager
    def placed(self, slot: Slot, word: str) -> Iterator[None]:
        """Hold ``word`` in ``slot`` for the duration of the block."""
        self.place_word(slot, word)
        try:
            yield
        finally:
            self.remove_word(slot)

    def snapshot(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        return tuple(tuple(cell.letter for cell in row) for row in self.cells)

    def rows(self) -> List[str]:
        """Row strings, ``.`` marking empty cells."""
        return ["".join(cell.letter or "." for cell in row) for row in self.cells]
