import json
import logging

import pytest

from sonnet_checker.core import (
    AnalysisOptions,
    MeterResult,
    PhoneticAnalyzer,
    SonnetAnalyzer,
    UnknownFormError,
)
from sonnet_checker.core.cmudict_loader import build_table
from sonnet_checker.core.forms import FORMS, TROCHAIC_TETRAMETER, build_form
from sonnet_checker.core.models import STRICT

OPENING_LINE = "Shall I compare thee to a summer's day?"


def test_blank_input_yields_empty_valid_report(sonnet_analyzer):
    report = sonnet_analyzer.analyze_sonnet("\n   \n\t\n", "shakespearean")

    assert report.lines == ()
    assert report.meter_valid is True
    assert report.rhyme_scheme_valid is True
    assert report.meter_issues == ()
    assert report.rhyme_issues == ()


def test_string_form_id_resolves_registry(sonnet_analyzer):
    report = sonnet_analyzer.analyze_sonnet(OPENING_LINE, "Shakespearean")
    assert report.form is FORMS["shakespearean"]


def test_unknown_form_id_raises(sonnet_analyzer):
    with pytest.raises(UnknownFormError):
        sonnet_analyzer.analyze_sonnet(OPENING_LINE, "villanelle")


def test_requires_analyzer_or_store(store):
    with pytest.raises(ValueError):
        SonnetAnalyzer()
    assert SonnetAnalyzer(store=store).phonetic_analyzer.store is store


def test_opening_line_scans_as_iambic_pentameter(sonnet_analyzer):
    report = sonnet_analyzer.analyze_sonnet(OPENING_LINE, FORMS["shakespearean"])
    line = report.lines[0]

    assert [word.word for word in line.words] == [
        "shall", "i", "compare", "thee", "to", "a", "summer's", "day",
    ]
    assert line.stress_pattern == (1, 1, 0, 1, 1, 1, 0, 1, 0, 1)
    assert line.meter_result is MeterResult.PASS
    assert line.rhyme_key == "EY"
    assert report.meter_valid is True
    assert report.meter_issues == ()


def test_strict_option_rejects_extra_syllable(sonnet_analyzer):
    text = "Shall I compare thee to a summer's day cat"

    lenient = sonnet_analyzer.analyze_sonnet(text, "shakespearean")
    strict = sonnet_analyzer.analyze_sonnet(text, "shakespearean", AnalysisOptions(strict=True))

    assert len(lenient.lines[0].stress_pattern) == 11
    assert lenient.lines[0].meter_result is MeterResult.PASS
    assert strict.lines[0].meter_result is MeterResult.FAIL
    assert strict.meter_issues == (
        "Line 1: Expected 10 syllables with pattern 0101010101, "
        "got 11 syllables with pattern 11011101011",
    )


def test_meter_family_override(sonnet_analyzer):
    report = sonnet_analyzer.analyze_sonnet(
        OPENING_LINE, "shakespearean", AnalysisOptions(meter_family=STRICT)
    )
    assert report.lines[0].meter_result is MeterResult.FAIL
    assert report.meter_valid is False


def test_issue_window_skips_lines_far_from_meter(sonnet_analyzer):
    text = "\n".join(
        [
            "the cat sat on the mat the cat sat on the mat",
            "the cat sat on the mat",
        ]
    )

    report = sonnet_analyzer.analyze_sonnet(text, "shakespearean")
    first, second = report.lines

    assert first.stress_pattern == (0, 1, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1)
    assert first.meter_result is MeterResult.FAIL
    assert second.meter_result is MeterResult.INAPPLICABLE
    assert second.meter_valid is False
    assert second.meter_checked is False
    assert report.meter_issues == (
        "Line 1: Expected 10 syllables with pattern 0101010101, "
        "got 12 syllables with pattern 011101011101",
    )


def test_blank_lines_do_not_count(sonnet_analyzer):
    report = sonnet_analyzer.analyze_sonnet("day\n\n\nmay\r\n", "shakespearean")

    assert [line.line_number for line in report.lines] == [1, 2]
    assert [line.text for line in report.lines] == ["day", "may"]


def test_rhyme_scheme_mismatch(sonnet_analyzer):
    form = build_form("Quatrain", "ABAB", FORMS["shakespearean"].meter)

    report = sonnet_analyzer.analyze_sonnet("day\nsee\nmay\nsky", form)

    assert [line.rhyme_key for line in report.lines] == ["EY", "IY", "EY", "AY"]
    assert report.rhyme_scheme_valid is False
    assert report.rhyme_issues == ("Rhyme group B has inconsistent rhymes: IY, AY",)
    assert report.rhyme_groups == {"A": (0, 2), "B": (1, 3)}
    with pytest.raises(TypeError):
        report.rhyme_groups["C"] = (0,)
    # One-syllable lines are too short for the meter to apply.
    assert report.meter_valid is True


def test_line_rhyme_key_falls_back_to_earlier_word(sonnet_analyzer):
    form = build_form("Couplet", "AA", FORMS["shakespearean"].meter)

    report = sonnet_analyzer.analyze_sonnet("the cat shh\nthe hat!", form)

    assert report.lines[0].rhyme_key == "AE-T"
    assert report.rhyme_scheme_valid is True


def test_unknown_words_are_collected_once(sonnet_analyzer):
    form = build_form("Couplet", "AA", FORMS["shakespearean"].meter)

    report = sonnet_analyzer.analyze_sonnet("Thrum thrum day\nthe drum", form)

    assert report.unknown_words == ("thrum", "drum")
    assert report.rhyme_issues == ("Rhyme group A has inconsistent rhymes: EY, um",)


def test_intelligent_variant_selection_follows_expected_stress(sonnet_analyzer):
    form = build_form("Trochaic couplet", "AA", TROCHAIC_TETRAMETER)

    chosen = sonnet_analyzer.analyze_line("a day", 1, form)
    naive = sonnet_analyzer.analyze_line("a day", 1, form, AnalysisOptions(intelligent=False))

    assert chosen.stress_pattern == (1, 1)
    assert naive.stress_pattern == (0, 1)


def test_analyze_line_without_form_is_unchecked(sonnet_analyzer):
    line = sonnet_analyzer.analyze_line("hello window", 3)

    assert line.line_number == 3
    assert line.stress_pattern == (0, 1, 1, 0)
    assert line.rhyme_key == "OW"
    assert line.expected_stress_pattern == ()
    assert line.meter_result is MeterResult.INAPPLICABLE


def test_punctuation_only_tokens_are_ignored(sonnet_analyzer):
    words, pattern = sonnet_analyzer.analyze_words("-- day , !")

    assert [word.word for word in words] == ["day"]
    assert pattern == (1,)


def test_report_serializes_to_json(sonnet_analyzer):
    report = sonnet_analyzer.analyze_sonnet(OPENING_LINE + "\nthrum", "petrarchan")

    payload = json.loads(json.dumps(report.as_dict()))

    assert payload["form"]["name"] == "Petrarchan Sonnet"
    assert payload["form"]["line_count"] == 14
    assert payload["lines"][0]["meter_result"] == "pass"
    assert payload["lines"][1]["meter_result"] == "inapplicable"
    assert payload["lines"][0]["words"][0]["syllables"][0]["phonemes"] == ["SH", "AE1", "L"]
    assert payload["unknown_words"] == ["thrum"]


def test_analysis_is_logged(sonnet_analyzer, caplog):
    caplog.set_level(logging.INFO, logger="sonnet_checker.core.sonnet")

    sonnet_analyzer.analyze_sonnet(OPENING_LINE, "shakespearean")

    messages = [record.message for record in caplog.records]
    assert any("Sonnet analysed" in message and '"lines": 1' in message for message in messages)


class _SwappingAnalyzer(PhoneticAnalyzer):
    """Replaces the store's tables after the first word is analysed."""

    def __init__(self, store):
        super().__init__(store)
        self.calls = 0

    def analyze_word(self, word, *args, **kwargs):
        self.calls += 1
        if self.calls == 2:
            self.store.swap_base(build_table({"day": [["D", "AY1"]], "may": [["M", "AY1"]]}))
            self.store.add_overlay("may", ["M", "OW1"])
        return super().analyze_word(word, *args, **kwargs)


def test_tables_are_fixed_for_the_whole_analysis(store):
    analyzer = SonnetAnalyzer(_SwappingAnalyzer(store))
    form = build_form("Couplet", "AA", FORMS["shakespearean"].meter)

    report = analyzer.analyze_sonnet("day\nmay", form)

    assert [line.rhyme_key for line in report.lines] == ["EY", "EY"]
    assert report.rhyme_scheme_valid is True
    assert [line.rhyme_key for line in analyzer.analyze_sonnet("day\nmay", form).lines] == [
        "AY",
        "OW",
    ]
