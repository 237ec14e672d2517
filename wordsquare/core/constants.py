"""Shared constants and enumerations for the word square finder."""

from __future__ import annotations

import string
from enum import Enum

WORD_LENGTH = 5
ALPHABET = string.ascii_lowercase


class Direction(str, Enum):
    """Line directions within a square."""

    ROW = "ROW"
    COLUMN = "COLUMN"


class IndexStrategy(str, Enum):
    """Interchangeable prefix lookup strategies."""

    BISECT = "bisect"
    MAP = "map"


class SearchEngine(str, Enum):
    """Enumeration engines available to the finder."""

    DOUBLE_SIDED = "double_sided"
    CP_SAT = "cp_sat"
