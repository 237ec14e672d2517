"""Word list loading and line filtering."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import WORD_RE

LOGGER = get_logger(__name__)


def five_letter_words(text: str) -> List[str]:
    """Keep only the lines of ``text`` that are five lowercase letters."""

    return [line for line in text.splitlines() if WORD_RE.fullmatch(line)]


def load_words(path: Path | str, limit: Optional[int] = None) -> List[str]:
    """Read a word list file, one word per line.

    Lines that are not exactly five lowercase letters are skipped. ``limit``
    keeps only the first ``limit`` accepted words.
    """

    source = Path(path)
    if not source.exists():
        raise DictionaryLoadError(f"Missing word list: {source}")
    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DictionaryLoadError(f"Cannot read word list {source}: {exc}") from exc

    words = five_letter_words(text)
    if limit is not None:
        words = words[: max(0, limit)]
    LOGGER.info("Loaded %d words from %s", len(words), source)
    return words
