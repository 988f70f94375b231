"""Registry of supported poetic forms and their meters."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .models import IAMBIC, METER_FAMILIES, STRICT, MeterPattern, SonnetForm


class UnknownFormError(LookupError):
    """Raised for form identifiers missing from the registry."""


def _alternating(feet: int, stressed_first: bool = False) -> tuple:
    foot = (1, 0) if stressed_first else (0, 1)
    return foot * feet


IAMBIC_PENTAMETER = MeterPattern(
    name="Iambic Pentameter",
    description="Five iambs per line (da-DUM x5)",
    stress_pattern=_alternating(5),
    family=IAMBIC,
)

IAMBIC_TETRAMETER = MeterPattern(
    name="Iambic Tetrameter",
    description="Four iambs per line (da-DUM x4)",
    stress_pattern=_alternating(4),
    family=IAMBIC,
)

TROCHAIC_TETRAMETER = MeterPattern(
    name="Trochaic Tetrameter",
    description="Four trochees per line (DUM-da x4)",
    stress_pattern=_alternating(4, stressed_first=True),
    family=STRICT,
)

METERS: Dict[str, MeterPattern] = {
    "iambic_pentameter": IAMBIC_PENTAMETER,
    "iambic_tetrameter": IAMBIC_TETRAMETER,
    "trochaic_tetrameter": TROCHAIC_TETRAMETER,
}


def build_form(name: str, rhyme_scheme: Iterable[str] | str, meter: MeterPattern) -> SonnetForm:
    """Create a form, validating labels and the meter's stress pattern.

    ``rhyme_scheme`` may be a string such as ``"ABAB CDCD EFEF GG"``; spaces
    are ignored.
    """

    labels = [label for label in rhyme_scheme if not label.isspace()]
    if not labels:
        raise ValueError(f"Form {name!r} needs a non-empty rhyme scheme")
    if any(len(label) != 1 for label in labels):
        raise ValueError(f"Form {name!r} rhyme labels must be single characters")
    if not meter.stress_pattern or any(value not in (0, 1) for value in meter.stress_pattern):
        raise ValueError(f"Meter {meter.name!r} must be a non-empty 0/1 stress pattern")
    if meter.family not in METER_FAMILIES:
        raise ValueError(f"Meter {meter.name!r} has unknown family {meter.family!r}")
    return SonnetForm(name=name, rhyme_scheme=tuple(labels), meter=meter)


FORMS: Dict[str, SonnetForm] = {
    "shakespearean": build_form("Shakespearean Sonnet", "ABAB CDCD EFEF GG", IAMBIC_PENTAMETER),
    "petrarchan": build_form("Petrarchan Sonnet", "ABBAABBA CDECDE", IAMBIC_PENTAMETER),
    "spenserian": build_form("Spenserian Sonnet", "ABAB BCBC CDCD EE", IAMBIC_PENTAMETER),
}


def _normalize_form_id(form_id: str) -> str:
    return str(form_id).strip().lower().replace("-", "_").replace(" ", "_")


def available_forms() -> List[str]:
    return sorted(FORMS)


def get_form(form_id: str) -> SonnetForm:
    """Return the registered form for ``form_id`` (case-insensitive)."""

    key = _normalize_form_id(form_id)
    try:
        return FORMS[key]
    except KeyError:
        raise UnknownFormError(
            f"Unknown form {form_id!r}; available forms: {', '.join(available_forms())}"
        ) from None


def get_meter(meter_id: str) -> MeterPattern:
    key = _normalize_form_id(meter_id)
    try:
        return METERS[key]
    except KeyError:
        raise UnknownFormError(
            f"Unknown meter {meter_id!r}; available meters: {', '.join(sorted(METERS))}"
        ) from None


def scheme_string(scheme: Sequence[str]) -> str:
    return "".join(scheme)


__all__ = [
    "FORMS",
    "IAMBIC_PENTAMETER",
    "IAMBIC_TETRAMETER",
    "METERS",
    "TROCHAIC_TETRAMETER",
    "UnknownFormError",
    "available_forms",
    "build_form",
    "get_form",
    "get_meter",
    "scheme_string",
]
