"""Prefix range lookups over the sorted dictionary.

Both strategies answer the same question, "which dictionary positions hold a
word starting with this prefix", and must agree on every query:

- :class:`BisectPrefixIndex` finds the half-open range with two binary
  searches over the sorted word tuple; it needs no extra memory.
- :class:`MapPrefixIndex` precomputes the positions for every prefix of every
  word, trading memory for constant time lookups.

Results are positions into ``WordDictionary.words`` in ascending order. An
absent prefix yields an empty sequence; the empty prefix yields every position.
Indexes are never mutated after construction, so worker threads share them
without locking.
"""

from __future__ import annotations

from bisect import bisect_left
from collections import defaultdict
from typing import Dict, List, Protocol, Sequence, Tuple

from ..core.constants import WORD_LENGTH, IndexStrategy
from ..data.dictionary import WordDictionary
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

# Sorts after every lowercase letter, so ``prefix + _PAST_LAST`` bounds the
# block of words starting with ``prefix``.
_PAST_LAST = chr(ord("z") + 1)


class PrefixIndex(Protocol):
    words: Tuple[str, ...]

    def range(self, prefix: str) -> Sequence[int]:
        ...

    def has_prefix(self, prefix: str) -> bool:
        ...


class BisectPrefixIndex:
    """Prefix ranges via partition points on the sorted word tuple."""

    def __init__(self, dictionary: WordDictionary) -> None:
        self.words: Tuple[str, ...] = dictionary.words

    def range(self, prefix: str) -> Sequence[int]:
        # first word not less than the prefix
        start = bisect_left(self.words, prefix)
        # first word that neither starts with the prefix nor sorts before it
        end = bisect_left(self.words, prefix + _PAST_LAST, lo=start)
        return range(start, end)

    def has_prefix(self, prefix: str) -> bool:
        start = bisect_left(self.words, prefix)
        return start < len(self.words) and self.words[start].startswith(prefix)


class MapPrefixIndex:
    """Prefix ranges precomputed for every prefix length 1..5."""

    def __init__(self, dictionary: WordDictionary) -> None:
        self.words: Tuple[str, ...] = dictionary.words
        table: Dict[str, List[int]] = defaultdict(list)
        for position, word in enumerate(self.words):
            for length in range(1, WORD_LENGTH + 1):
                table[word[:length]].append(position)
        self._table: Dict[str, Tuple[int, ...]] = {
            prefix: tuple(positions) for prefix, positions in table.items()
        }
        self._everything: Tuple[int, ...] = tuple(range(len(self.words)))
        LOGGER.debug("Prefix map holds %d prefixes", len(self._table))

    def range(self, prefix: str) -> Sequence[int]:
        if not prefix:
            return self._everything
        return self._table.get(prefix, ())

    def has_prefix(self, prefix: str) -> bool:
        if not prefix:
            return bool(self.words)
        return prefix in self._table


def build_prefix_index(
    dictionary: WordDictionary,
    strategy: IndexStrategy | str = IndexStrategy.BISECT,
) -> PrefixIndex:
    """Build the index for ``strategy`` once, before any worker starts."""

    strategy = IndexStrategy(strategy)
    if strategy == IndexStrategy.MAP:
        return MapPrefixIndex(dictionary)
    return BisectPrefixIndex(dictionary)
