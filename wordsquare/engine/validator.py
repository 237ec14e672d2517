"""Deterministic rule validation for finished squares."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Set

from ..core.constants import WORD_LENGTH
from ..core.exceptions import ValidationError
from ..core.models import Solution
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class SquareValidator:
    """Checks a solution against the dictionary it was built from."""

    def __init__(self, dictionary: WordDictionary) -> None:
        self.dictionary = dictionary

    def validate(self, solution: Solution) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_shape(solution)
            self._check_words(solution)
            self._check_distinct(solution)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed for %s: %s", solution, exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_shape(self, solution: Solution) -> None:
        if len(solution.rows) != WORD_LENGTH:
            raise ValidationError(f"Expected {WORD_LENGTH} rows, got {len(solution.rows)}")
        for index, row in enumerate(solution.rows):
            if len(row) != WORD_LENGTH:
                raise ValidationError(f"Row {index} {row!r} is not {WORD_LENGTH} letters")

    def _check_words(self, solution: Solution) -> None:
        for label, words in (("row", solution.rows), ("column", solution.columns)):
            for index, word in enumerate(words):
                if word not in self.dictionary:
                    raise ValidationError(f"Invalid word {word!r} in {label} {index}")

    def _check_distinct(self, solution: Solution) -> None:
        seen: Set[str] = set()
        for word in solution.words():
            if word in seen:
                raise ValidationError(f"Duplicate word {word!r}")
            seen.add(word)
