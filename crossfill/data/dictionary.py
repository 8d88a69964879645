"""Word list loading and pattern-based candidate retrieval."""

from __future__ import annotations

import re
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Union

from ..core.exceptions import DictionaryLoadError
from ..utils.logger import get_logger
from .normalization import clean_word

LOGGER = get_logger(__name__)


@dataclass
class DictionaryConfig:
    """Configuration for dictionary loading and filtering."""

    path: Optional[Union[Path, str]] = None
    min_length: int = 2
    max_length: int = 21
    language: str = "en"
    encoding: str = "utf-8"
    skip_header: bool = False


class WordDictionary:
    """Length-bucketed word list answering regex pattern queries.

    The source is a plain text file with one word per line; blank lines and
    ``#`` comments are skipped and, for tab separated files, only the first
    column is read. Words are normalized with :func:`clean_word`, so every
    stored entry is uppercase ASCII. Bucket order follows the file order, which
    keeps seeded searches reproducible.
    """

    def __init__(self, config: DictionaryConfig, words: Optional[Iterable[str]] = None) -> None:
        self.config = config
        self._words_by_length: Dict[int, List[str]] = defaultdict(list)
        self._known: Set[str] = set()
        if words is None:
            words = self._read_source()
        self._hydrate(words)

    @classmethod
    def from_words(
        cls, words: Iterable[str], config: Optional[DictionaryConfig] = None
    ) -> "WordDictionary":
        """Build a dictionary from an in-memory word list."""

        return cls(config or DictionaryConfig(), words=words)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _read_source(self) -> List[str]:
        if self.config.path is None:
            raise DictionaryLoadError("No dictionary path configured")
        source = Path(self.config.path)
        if not source.exists():
            raise DictionaryLoadError(f"Missing dictionary file: {source}")
        try:
            lines = source.read_text(encoding=self.config.encoding).splitlines()
        except (OSError, UnicodeDecodeError) as exc:
            raise DictionaryLoadError(f"Cannot read dictionary {source}: {exc}") from exc
        if self.config.skip_header and lines:
            lines = lines[1:]

        entries: List[str] = []
        for line in lines:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            entries.append(line.split("\t", 1)[0])
        LOGGER.info("Read %d raw entries from %s", len(entries), source)
        return entries

    def _hydrate(self, words: Iterable[str]) -> None:
        for raw in words:
            surface = self.sanitize(raw)
            if not (self.config.min_length <= len(surface) <= self.config.max_length):
                continue
            if surface in self._known:
                continue
            self._known.add(surface)
            self._words_by_length[len(surface)].append(surface)
        LOGGER.debug(
            "Dictionary ready: %d words, lengths %s",
            len(self._known),
            sorted(self._words_by_length),
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def sanitize(self, text: str) -> str:
        return clean_word(text)

    def __len__(self) -> int:
        return len(self._known)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def contains(self, word: str) -> bool:
        return self.sanitize(word) in self._known

    def iter_length(self, length: int) -> Iterable[str]:
        return self._words_by_length.get(length, [])

    def iter_all(self) -> Iterable[str]:
        for length in sorted(self._words_by_length):
            yield from self._words_by_length[length]

    def lengths(self) -> List[int]:
        return sorted(self._words_by_length)

    def fitting_words(
        self,
        pattern: Union[str, re.Pattern[str]],
        min_len: int,
        max_len: int,
    ) -> Dict[int, List[str]]:
        """Return, per length in ``[min_len, max_len]``, the words matching ``pattern``.

        ``pattern`` is a regular expression searched (not fully matched) in each
        word, case-insensitively; anchor it with ``^``/``$`` to constrain whole
        words. Every requested length is present in the result, possibly with
        an empty list.
        """

        regex = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, re.IGNORECASE)
        results: Dict[int, List[str]] = {}
        for length in range(min_len, max_len + 1):
            results[length] = [w for w in self._words_by_length.get(length, []) if regex.search(w)]
        return results
