"""Shared helpers for word normalization and validation."""

from __future__ import annotations

import re

from ..core.constants import WORD_LENGTH

WORD_RE = re.compile(rf"^[a-z]{{{WORD_LENGTH}}}$")


def normalize_word(text: str) -> str:
    """Return ``text`` stripped of surrounding whitespace and lower-cased."""

    if not text:
        return ""
    return text.strip().lower()


def is_valid_word(text: object) -> bool:
    """True when ``text`` is exactly five lowercase ASCII letters."""

    return isinstance(text, str) and WORD_RE.fullmatch(text) is not None


__all__ = ["normalize_word", "is_valid_word", "WORD_RE"]
