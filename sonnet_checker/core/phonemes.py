"""Tagged phoneme tokens parsed once from raw ARPABET strings."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

_STRESS_DIGITS = "012"


class StressTag(enum.IntEnum):
    """Lexical stress carried by a vowel token."""

    NONE = 0
    PRIMARY = 1
    SECONDARY = 2


@dataclass(frozen=True)
class PhonemeToken:
    """A phoneme symbol with the stress tag of its vowel, if any."""

    symbol: str
    stress: Optional[StressTag] = None

    @classmethod
    def parse(cls, raw: str) -> "PhonemeToken":
        """Split a raw token such as ``"OW1"`` into symbol and stress.

        A token is a vowel exactly when its trailing character is a stress
        digit; consonant tokens carry no digit.
        """

        text = raw.strip().upper()
        if not text:
            raise ValueError("Empty phoneme token")
        if text[-1] in _STRESS_DIGITS and len(text) > 1:
            return cls(text[:-1], StressTag(int(text[-1])))
        return cls(text)

    @property
    def is_vowel(self) -> bool:
        return self.stress is not None

    def __str__(self) -> str:
        if self.stress is None:
            return self.symbol
        return f"{self.symbol}{int(self.stress)}"


PhonemeSequence = Tuple[PhonemeToken, ...]


def parse_phonemes(phonemes: Iterable[str | PhonemeToken]) -> PhonemeSequence:
    """Return a :data:`PhonemeSequence` from raw strings or parsed tokens."""

    tokens = []
    for phoneme in phonemes:
        if isinstance(phoneme, PhonemeToken):
            tokens.append(phoneme)
        elif isinstance(phoneme, str) and phoneme.strip():
            tokens.append(PhonemeToken.parse(phoneme))
    return tuple(tokens)


def format_phonemes(sequence: Iterable[PhonemeToken]) -> list[str]:
    """Render tokens back into raw ARPABET strings (``["HH", "OW1"]``)."""

    return [str(token) for token in sequence]


def stress_count(sequence: Iterable[PhonemeToken]) -> int:
    """Number of stress-tagged (vowel) tokens in ``sequence``."""

    return sum(1 for token in sequence if token.is_vowel)


__all__ = [
    "StressTag",
    "PhonemeToken",
    "PhonemeSequence",
    "parse_phonemes",
    "format_phonemes",
    "stress_count",
]
