import pytest

from sonnet_checker.utils.syllables import SYLLABLE_EXCEPTIONS, estimate_syllable_count


@pytest.mark.parametrize(
    "word,expected",
    [
        ("make", 1),
        ("table", 2),
        ("loved", 1),
        ("wanted", 2),
        ("agreed", 2),
        ("makes", 1),
        ("roses", 2),
        ("boxes", 2),
        ("nation", 2),
        ("creation", 3),
        ("glorious", 3),
        ("precious", 2),
        ("gorgeous", 2),
        ("beautiful", 3),
        ("the", 1),
        ("free", 1),
    ],
)
def test_estimate_syllable_count_heuristics(word, expected):
    assert estimate_syllable_count(word) == expected


def test_exception_table_overrides_vowel_groups():
    assert estimate_syllable_count("fire") == 1
    assert estimate_syllable_count("Hour") == 1
    assert estimate_syllable_count("o'er") == 1
    assert estimate_syllable_count("heav'n") == 1
    assert all(count >= 1 for count in SYLLABLE_EXCEPTIONS.values())


def test_estimate_never_returns_less_than_one():
    assert estimate_syllable_count("") == 1
    assert estimate_syllable_count("shh") == 1
    assert estimate_syllable_count("'") == 1


def test_estimate_syllable_count_module_location():
    assert estimate_syllable_count.__module__ == "sonnet_checker.utils.syllables"
