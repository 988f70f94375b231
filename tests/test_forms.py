import pytest

from sonnet_checker.core.forms import (
    FORMS,
    IAMBIC_PENTAMETER,
    TROCHAIC_TETRAMETER,
    UnknownFormError,
    available_forms,
    build_form,
    get_form,
    get_meter,
    scheme_string,
)
from sonnet_checker.core.models import STRICT, MeterPattern


def test_registered_forms():
    assert available_forms() == ["petrarchan", "shakespearean", "spenserian"]
    assert scheme_string(FORMS["shakespearean"].rhyme_scheme) == "ABABCDCDEFEFGG"
    assert scheme_string(FORMS["petrarchan"].rhyme_scheme) == "ABBAABBACDECDE"
    assert scheme_string(FORMS["spenserian"].rhyme_scheme) == "ABABBCBCCDCDEE"


def test_sonnets_have_fourteen_pentameter_lines():
    for form in FORMS.values():
        assert form.line_count == 14
        assert form.meter is IAMBIC_PENTAMETER
        assert form.meter.syllable_count == 10
        assert form.meter.stress_pattern == (0, 1, 0, 1, 0, 1, 0, 1, 0, 1)


def test_get_form_normalizes_identifier():
    assert get_form("Shakespearean") is FORMS["shakespearean"]
    assert get_form("  PETRARCHAN ") is FORMS["petrarchan"]


def test_get_form_unknown_lists_available_forms():
    with pytest.raises(UnknownFormError) as excinfo:
        get_form("villanelle")

    assert "villanelle" in str(excinfo.value)
    assert "shakespearean" in str(excinfo.value)
    assert isinstance(excinfo.value, LookupError)


def test_get_meter():
    assert get_meter("trochaic-tetrameter") is TROCHAIC_TETRAMETER
    assert TROCHAIC_TETRAMETER.family == STRICT
    with pytest.raises(UnknownFormError):
        get_meter("dactylic_hexameter")


def test_build_form_ignores_spaces():
    form = build_form("Quatrain", "AB AB", IAMBIC_PENTAMETER)
    assert form.rhyme_scheme == ("A", "B", "A", "B")
    assert form.line_count == 4


@pytest.mark.parametrize(
    "scheme, meter",
    [
        ("", IAMBIC_PENTAMETER),
        (["AB"], IAMBIC_PENTAMETER),
        ("AABB", MeterPattern(name="Empty", stress_pattern=())),
        ("AABB", MeterPattern(name="Odd", stress_pattern=(0, 2))),
        ("AABB", MeterPattern(name="Odd", stress_pattern=(0, 1), family="sprung")),
    ],
)
def test_build_form_rejects_invalid_definitions(scheme, meter):
    with pytest.raises(ValueError):
        build_form("Broken", scheme, meter)
