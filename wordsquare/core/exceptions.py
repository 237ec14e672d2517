"""Custom exception hierarchy for word square enumeration."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence

if TYPE_CHECKING:
    from ..engine.partitioner import WorkerFailure
    from .models import Solution


class WordSquareError(Exception):
    """Base exception for finder failures."""


class DictionaryLoadError(WordSquareError):
    """Raised when a word list file cannot be read."""


class InvalidWordError(WordSquareError, ValueError):
    """Raised when a dictionary entry is not a five letter lowercase word."""

    def __init__(self, word: object) -> None:
        super().__init__(f"Invalid dictionary entry: {word!r}")
        self.word = word


class SlotPlacementError(WordSquareError):
    """Raised when a word cannot be written into the grid."""


class ValidationError(WordSquareError):
    """Raised when a finished square fails an integrity check."""


class SearchError(WordSquareError):
    """Raised when one or more search workers failed.

    ``solutions`` holds whatever the healthy workers produced.
    """

    def __init__(
        self,
        message: str,
        failures: Sequence[WorkerFailure] = (),
        solutions: Sequence[Solution] = (),
    ) -> None:
        super().__init__(message)
        self.failures: List[WorkerFailure] = list(failures)
        self.solutions: List[Solution] = list(solutions)
