"""Validated, deduplicated and sorted word dictionary."""

from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from ..core.exceptions import InvalidWordError
from ..utils.logger import get_logger
from .normalization import is_valid_word, normalize_word

LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary construction."""

    normalize: bool = False


class WordDictionary:
    """Immutable sorted set of five letter words.

    Every entry is checked on construction; a malformed entry raises
    :class:`InvalidWordError` so nothing downstream ever sees it. Duplicates
    are dropped and the survivors are kept in byte order, which is what the
    prefix indexes rely on.
    """

    def __init__(self, words: Iterable[str], config: Optional[DictionaryConfig] = None) -> None:
        self.config = config or DictionaryConfig()
        accepted = set()
        for raw in words:
            word = normalize_word(raw) if self.config.normalize and isinstance(raw, str) else raw
            if not is_valid_word(word):
                raise InvalidWordError(raw)
            accepted.add(word)
        self._words: Tuple[str, ...] = tuple(sorted(accepted))
        LOGGER.debug("Dictionary built with %d words", len(self._words))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def index_of(self, word: str) -> int:
        """Position of ``word`` in sorted order, or ``-1`` when absent."""
        position = bisect_left(self._words, word)
        if position < len(self._words) and self._words[position] == word:
            return position
        return -1

    def without(self, *removed: str) -> "WordDictionary":
        """Return a new dictionary lacking ``removed``."""
        dropped = set(removed)
        return WordDictionary(
            (word for word in self._words if word not in dropped),
            DictionaryConfig(normalize=False),
        )

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.index_of(word) >= 0

    def __getitem__(self, index: int) -> str:
        return self._words[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"WordDictionary({len(self._words)} words)"
