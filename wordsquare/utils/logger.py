"""Logging setup for the CLI and the engine modules.

Engine modules log through ``get_logger(__name__)``, so every record sits
under the ``wordsquare`` namespace. Searches fan out over worker threads and
each record carries the thread name.
"""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(threadName)s | %(name)s | %(message)s"


def configure_logging(level: int = logging.INFO) -> None:
    """Install a single stderr handler on the root logger at ``level``."""

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``wordsquare`` namespace, configuring defaults once."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "wordsquare")
