"""Text preprocessing for poem input."""

from __future__ import annotations

import re
from typing import List

_APOSTROPHE_VARIANTS = re.compile(r"[‘’ʼ`]")
_NON_WORD_CHARS = re.compile(r"[^a-zA-Z']")
_WHITESPACE = re.compile(r"\s+")


def split_lines(text: str) -> List[str]:
    """Split ``text`` into lines, keeping empty ones."""

    return (text or "").replace("\r\n", "\n").replace("\r", "\n").split("\n")


def tokenize_line(line: str) -> List[str]:
    """Split a line on whitespace, dropping empty tokens."""

    return [token for token in _WHITESPACE.split(line.strip()) if token]


def remove_punctuation(token: str) -> str:
    """Keep only letters and apostrophes, folding curly quotes to ``'``."""

    normalized = _APOSTROPHE_VARIANTS.sub("'", token)
    return _NON_WORD_CHARS.sub("", normalized)


__all__ = ["split_lines", "tokenize_line", "remove_punctuation"]
