"""Shared helpers for word normalization."""

from __future__ import annotations

import re
import unicodedata

# Letters that Unicode decomposition does not reduce to plain ASCII.
SPECIAL_LETTERS = {
    "ß": "ss",
    "æ": "ae",
    "Æ": "ae",
    "œ": "oe",
    "Œ": "oe",
    "ø": "o",
    "Ø": "o",
    "đ": "d",
    "Đ": "d",
    "ł": "l",
    "Ł": "l",
    "ı": "i",
}

WORD_RE = re.compile(r"[^A-Za-z]")


def strip_accents(text: str) -> str:
    """Drop combining marks, e.g. ``"perché"`` becomes ``"perche"``."""

    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``."""

    if not text:
        return ""
    transformed = []
    for char in strip_accents(text):
        if char in SPECIAL_LETTERS:
            transformed.append(SPECIAL_LETTERS[char])
        elif char.isalpha():
            transformed.append(char)
    ascii_word = WORD_RE.sub("", "".join(transformed))
    return ascii_word.upper()


__all__ = ["clean_word", "strip_accents", "SPECIAL_LETTERS"]
