"""Phonetic analysis of individual words: syllables, stress and rhyme keys."""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sonnet_checker.utils.observability import create_counter, get_logger
from sonnet_checker.utils.syllables import estimate_syllable_count

from .models import Syllable, WordAnalysis
from .phonemes import PhonemeSequence, PhonemeToken, StressTag
from .pronunciation_store import PronunciationStore, TableSnapshot, normalize_word

RHYME_KEY_SEPARATOR = "-"

# Suffix -> how many syllables before the final one carry primary stress.
STRESS_SHIFTING_SUFFIXES: Tuple[Tuple[str, int], ...] = (
    ("ical", 2),
    ("ity", 2),
    ("ety", 2),
    ("tion", 1),
    ("sion", 1),
    ("ic", 1),
)

_DICTIONARY_MISSES = create_counter(
    "sonnet_dictionary_misses_total",
    "Words resolved with the spelling heuristic instead of the dictionary.",
)


def segment_syllables(sequence: Sequence[PhonemeToken]) -> List[Syllable]:
    """Group phoneme tokens into syllables closed by each vowel.

    Consonants preceding a vowel open its syllable; consonants after the last
    vowel are appended to the final syllable. A sequence with no vowel yields
    no syllables.
    """

    syllables: List[Syllable] = []
    pending: List[PhonemeToken] = []

    for token in sequence:
        pending.append(token)
        if token.stress is not None:
            syllables.append(Syllable(phonemes=tuple(pending), stress=int(token.stress)))
            pending = []

    if pending and syllables:
        last = syllables[-1]
        syllables[-1] = Syllable(phonemes=last.phonemes + tuple(pending), stress=last.stress)

    return syllables


def rhyme_key(sequence: Sequence[PhonemeToken]) -> str:
    """Symbols from the last vowel (any stress) to the end, stress removed."""

    for index in range(len(sequence) - 1, -1, -1):
        if sequence[index].stress is not None:
            return RHYME_KEY_SEPARATOR.join(token.symbol for token in sequence[index:])
    return ""


def _fallback_stress_index(word: str, count: int) -> int:
    if count <= 2:
        return 0
    for suffix, shift in STRESS_SHIFTING_SUFFIXES:
        if word.endswith(suffix):
            return max(0, count - 1 - shift)
    return 1


def _variant_stress(syllables: Sequence[Syllable]) -> int:
    return syllables[0].stress if syllables else 0


class PhoneticAnalyzer:
    """Turn words into :class:`WordAnalysis` records using a pronunciation store."""

    def __init__(self, store: PronunciationStore) -> None:
        self.store = store
        self._logger = get_logger(__name__).bind(component="phonetic_analyzer")

    segment_syllables = staticmethod(segment_syllables)
    rhyme_key = staticmethod(rhyme_key)
    estimate_syllable_count = staticmethod(estimate_syllable_count)

    def fallback_analysis(self, word: str) -> WordAnalysis:
        """Heuristic analysis for a word missing from the store."""

        normalized = normalize_word(word)
        count = estimate_syllable_count(normalized)
        stressed = _fallback_stress_index(normalized, count)
        syllables = tuple(
            Syllable(phonemes=(), stress=int(StressTag.PRIMARY if i == stressed else StressTag.NONE))
            for i in range(count)
        )

        _DICTIONARY_MISSES.inc()
        self._logger.debug(
            "Word not in dictionary, using spelling heuristic",
            context={"word": normalized, "syllables": count, "stress_index": stressed},
        )
        return WordAnalysis(
            original_word=word,
            word=normalized,
            syllables=syllables,
            rhyme_key=normalized[-2:],
            found=False,
        )

    def pick_best_variant(
        self,
        variants: Sequence[PhonemeSequence],
        preferred_syllable_count: Optional[int] = None,
        preferred_stress: Optional[int] = None,
    ) -> PhonemeSequence:
        """Choose the variant that best fits the expected syllables and stress.

        Scoring: +10 for an exact syllable-count match, otherwise -2 per
        syllable of difference; for monosyllabic variants +5 when the stress
        equals ``preferred_stress`` and +2 when primary stress is wanted and
        the variant is stressed at all; -0.5 per syllable favours brevity.
        The first listed variant wins ties.
        """

        if not variants:
            raise ValueError("pick_best_variant requires at least one variant")
        if len(variants) == 1:
            return variants[0]

        best = variants[0]
        best_score: Optional[float] = None
        for variant in variants:
            syllables = segment_syllables(variant)
            count = len(syllables)
            score = 0.0
            if preferred_syllable_count is not None:
                if count == preferred_syllable_count:
                    score += 10
                else:
                    score -= 2 * abs(count - preferred_syllable_count)
            if count == 1 and preferred_stress is not None:
                stress = _variant_stress(syllables)
                if stress == preferred_stress:
                    score += 5
                if preferred_stress == StressTag.PRIMARY and stress != StressTag.NONE:
                    score += 2
            score -= 0.5 * count

            if best_score is None or score > best_score:
                best, best_score = variant, score
        return best

    def analyze_word(
        self,
        word: str,
        preferred_stress: Optional[int] = None,
        preferred_syllable_count: Optional[int] = None,
        table: Optional[TableSnapshot] = None,
    ) -> WordAnalysis:
        """Analyze ``word``, resolving it through ``table`` when given."""

        source = table if table is not None else self.store
        variants = source.resolve_all(word)
        if not variants:
            return self.fallback_analysis(word)

        if len(variants) == 1:
            sequence = variants[0]
        else:
            sequence = self.pick_best_variant(
                variants,
                preferred_syllable_count=preferred_syllable_count,
                preferred_stress=preferred_stress,
            )

        return WordAnalysis(
            original_word=word,
            word=normalize_word(word),
            syllables=tuple(segment_syllables(sequence)),
            rhyme_key=rhyme_key(sequence),
            found=True,
        )


__all__ = [
    "PhoneticAnalyzer",
    "RHYME_KEY_SEPARATOR",
    "STRESS_SHIFTING_SUFFIXES",
    "rhyme_key",
    "segment_syllables",
]
