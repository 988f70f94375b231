"""Dataclasses describing forms and the analysis report."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .phonemes import PhonemeToken, format_phonemes

StressPattern = Tuple[int, ...]
RhymeGroups = Mapping[str, Tuple[int, ...]]

IAMBIC = "iambic"
STRICT = "strict"
METER_FAMILIES = (IAMBIC, STRICT)


def freeze_groups(groups: Mapping[str, Sequence[int]]) -> RhymeGroups:
    """Read-only copy of a label -> line indices mapping."""

    return MappingProxyType({label: tuple(indices) for label, indices in groups.items()})


class MeterResult(enum.Enum):
    """Outcome of matching a line against the expected meter."""

    PASS = "pass"
    FAIL = "fail"
    INAPPLICABLE = "inapplicable"


@dataclass(frozen=True)
class Syllable:
    """One vowel nucleus with the consonants grouped around it."""

    phonemes: Tuple[PhonemeToken, ...]
    stress: int


@dataclass(frozen=True)
class WordAnalysis:
    """Syllables and rhyme key resolved for a single word."""

    original_word: str
    word: str
    syllables: Tuple[Syllable, ...]
    rhyme_key: str
    found: bool

    @property
    def stress_pattern(self) -> StressPattern:
        return tuple(syllable.stress for syllable in self.syllables)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "original_word": self.original_word,
            "word": self.word,
            "syllables": [
                {"phonemes": format_phonemes(s.phonemes), "stress": s.stress}
                for s in self.syllables
            ],
            "rhyme_key": self.rhyme_key,
            "found": self.found,
        }


@dataclass(frozen=True)
class MeterPattern:
    """Expected per-line stress pattern of a form."""

    name: str
    stress_pattern: StressPattern
    family: str = IAMBIC
    description: str = ""

    @property
    def syllable_count(self) -> int:
        return len(self.stress_pattern)


@dataclass(frozen=True)
class SonnetForm:
    """Rhyme scheme and meter a poem is checked against."""

    name: str
    rhyme_scheme: Tuple[str, ...]
    meter: MeterPattern

    @property
    def line_count(self) -> int:
        return len(self.rhyme_scheme)


@dataclass(frozen=True)
class AnalysisOptions:
    """Switches for :meth:`SonnetAnalyzer.analyze_sonnet`."""

    strict: bool = False
    meter_family: Optional[str] = None
    intelligent: bool = True


@dataclass(frozen=True)
class LineAnalysis:
    """Analysis of one non-blank poem line against the expected meter."""

    line_number: int
    text: str
    words: Tuple[WordAnalysis, ...]
    stress_pattern: StressPattern
    rhyme_key: str
    expected_stress_pattern: StressPattern
    meter_result: MeterResult

    @property
    def meter_valid(self) -> bool:
        return self.meter_result is MeterResult.PASS

    @property
    def meter_checked(self) -> bool:
        return self.meter_result is not MeterResult.INAPPLICABLE

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line_number": self.line_number,
            "text": self.text,
            "words": [word.as_dict() for word in self.words],
            "stress_pattern": list(self.stress_pattern),
            "rhyme_key": self.rhyme_key,
            "expected_stress_pattern": list(self.expected_stress_pattern),
            "meter_result": self.meter_result.value,
            "meter_valid": self.meter_valid,
        }


@dataclass(frozen=True)
class SonnetAnalysis:
    """Report produced for a whole poem."""

    lines: Tuple[LineAnalysis, ...]
    form: SonnetForm
    meter_valid: bool
    rhyme_scheme_valid: bool
    meter_issues: Tuple[str, ...]
    rhyme_issues: Tuple[str, ...]
    rhyme_groups: RhymeGroups = field(default_factory=dict)
    unknown_words: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rhyme_groups", freeze_groups(self.rhyme_groups))

    def as_dict(self) -> Dict[str, Any]:
        return {
            "form": {
                "name": self.form.name,
                "rhyme_scheme": list(self.form.rhyme_scheme),
                "meter": {
                    "name": self.form.meter.name,
                    "description": self.form.meter.description,
                    "stress_pattern": list(self.form.meter.stress_pattern),
                    "syllable_count": self.form.meter.syllable_count,
                    "family": self.form.meter.family,
                },
                "line_count": self.form.line_count,
            },
            "lines": [line.as_dict() for line in self.lines],
            "meter_valid": self.meter_valid,
            "rhyme_scheme_valid": self.rhyme_scheme_valid,
            "meter_issues": list(self.meter_issues),
            "rhyme_issues": list(self.rhyme_issues),
            "rhyme_groups": {label: list(indices) for label, indices in self.rhyme_groups.items()},
            "unknown_words": list(self.unknown_words),
        }


__all__ = [
    "IAMBIC",
    "STRICT",
    "METER_FAMILIES",
    "AnalysisOptions",
    "LineAnalysis",
    "MeterPattern",
    "MeterResult",
    "RhymeGroups",
    "SonnetAnalysis",
    "SonnetForm",
    "StressPattern",
    "Syllable",
    "WordAnalysis",
    "freeze_groups",
]
