import pytest

from sonnet_checker.core.phonemes import (
    PhonemeToken,
    StressTag,
    format_phonemes,
    parse_phonemes,
    stress_count,
)


def test_parse_tags_vowels_only():
    assert PhonemeToken.parse("OW1") == PhonemeToken("OW", StressTag.PRIMARY)
    assert PhonemeToken.parse("ah0") == PhonemeToken("AH", StressTag.NONE)
    assert PhonemeToken.parse("EY2").stress is StressTag.SECONDARY
    assert PhonemeToken.parse("HH").stress is None
    assert not PhonemeToken.parse("L").is_vowel


def test_parse_rejects_empty_token():
    with pytest.raises(ValueError):
        PhonemeToken.parse("  ")


def test_parse_phonemes_round_trips_to_raw_strings():
    sequence = parse_phonemes(["HH", "AH0", "L", "OW1", ""])
    assert format_phonemes(sequence) == ["HH", "AH0", "L", "OW1"]
    assert stress_count(sequence) == 2
