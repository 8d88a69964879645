"""Logging utilities tailored for crossword construction."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional


def configure_logging(level: int = logging.INFO) -> None:
    """Configure root logging with a sensible formatter.

    The fill engine performs many reversible attempts, so logging needs to be
    structured while remaining lightweight. The default configuration can be
    customized by callers before building puzzles.
    """

    handler = logging.StreamHandler()
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a namespaced logger, configuring defaults if needed."""

    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name or "crossfill")


@contextmanager
def silenced(name: str = "crossfill.engine", level: int = logging.ERROR) -> Iterator[None]:
    """Temporarily raise the threshold of ``name`` while probing placements."""

    logger = logging.getLogger(name)
    previous = logger.level
    logger.setLevel(level)
    try:
        yield
    finally:
        logger.setLevel(previous)
