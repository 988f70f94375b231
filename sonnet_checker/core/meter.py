"""Comparison of observed stress patterns against an expected meter."""

from __future__ import annotations

from typing import Callable, Iterator, Sequence

from .models import IAMBIC, METER_FAMILIES, MeterResult, StressPattern

EXACT = "exact"
LENIENT = "lenient"
MATCH_MODES = (EXACT, LENIENT)

# Lines further than this from the expected length are not checked at all.
MAX_LENGTH_DIFFERENCE = 2

Rule = Callable[[Sequence[int], Sequence[int]], bool]


def iambic_rule(observed: Sequence[int], expected: Sequence[int]) -> bool:
    """Stressed slots need primary or secondary stress; unstressed slots take anything."""

    for actual, wanted in zip(observed, expected):
        if wanted == 1 and actual == 0:
            return False
    return True


def strict_rule(observed: Sequence[int], expected: Sequence[int]) -> bool:
    """Stressed slots need primary stress; unstressed slots reject primary stress."""

    for actual, wanted in zip(observed, expected):
        if wanted == 1 and actual != 1:
            return False
        if wanted == 0 and actual == 1:
            return False
    return True


def rule_for(family: str) -> Rule:
    if family not in METER_FAMILIES:
        raise ValueError(f"Unknown meter family {family!r}; expected one of {METER_FAMILIES}")
    return iambic_rule if family == IAMBIC else strict_rule


def _fitted_candidates(observed: StressPattern, expected_length: int) -> Iterator[StressPattern]:
    if len(observed) == expected_length + 1:
        for skip in range(len(observed)):
            yield observed[:skip] + observed[skip + 1 :]
    elif len(observed) == expected_length - 1:
        for insert in range(len(observed) + 1):
            yield observed[:insert] + (0,) + observed[insert:]


def fit_meter(observed: Sequence[int], expected: Sequence[int], family: str = IAMBIC) -> bool:
    """Try every single-syllable deletion or unstressed insertion.

    Only an off-by-one length difference is repaired; two missing or extra
    syllables are never fitted.
    """

    rule = rule_for(family)
    expected_pattern = tuple(expected)
    return any(
        rule(candidate, expected_pattern)
        for candidate in _fitted_candidates(tuple(observed), len(expected_pattern))
    )


def match_meter(
    observed: Sequence[int],
    expected: Sequence[int],
    family: str = IAMBIC,
    mode: str = LENIENT,
) -> MeterResult:
    """Match ``observed`` against ``expected`` for a meter ``family``.

    Returns :attr:`MeterResult.INAPPLICABLE` when the lengths differ by more
    than two syllables. In ``lenient`` mode an off-by-one line passes when a
    single deletion or unstressed insertion makes it fit; ``exact`` mode fails
    any length mismatch.
    """

    rule = rule_for(family)
    if mode not in MATCH_MODES:
        raise ValueError(f"Unknown match mode {mode!r}; expected one of {MATCH_MODES}")

    difference = abs(len(observed) - len(expected))
    if difference > MAX_LENGTH_DIFFERENCE:
        return MeterResult.INAPPLICABLE

    if difference == 0:
        passed = rule(observed, expected)
    elif difference == 1 and mode == LENIENT:
        passed = fit_meter(observed, expected, family)
    else:
        passed = False
    return MeterResult.PASS if passed else MeterResult.FAIL


__all__ = [
    "EXACT",
    "LENIENT",
    "MATCH_MODES",
    "MAX_LENGTH_DIFFERENCE",
    "fit_meter",
    "iambic_rule",
    "match_meter",
    "rule_for",
    "strict_rule",
]
