"""Word square finder for 5x5 grids whose rows and columns are all words.

This package exposes the public API surface via:

- ``wordsquare.engine.finder.WordSquareFinder``: orchestrates a full search.
- ``wordsquare.engine.finder.find_word_squares``: one-call convenience wrapper.
- ``wordsquare.data.dictionary.WordDictionary``: validated, sorted word set.
- ``wordsquare.core.models.Solution``: an immutable finished square.
"""

from .core.models import Solution, deduplicate_transposes
from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.finder import FinderConfig, SearchResult, WordSquareFinder, find_word_squares

__all__ = [
    "DictionaryConfig",
    "FinderConfig",
    "SearchResult",
    "Solution",
    "WordDictionary",
    "WordSquareFinder",
    "deduplicate_transposes",
    "find_word_squares",
]

__version__ = "0.1.0"
