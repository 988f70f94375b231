"""Sonnet analysis orchestrating tokenization, phonetics, meter and rhyme."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from sonnet_checker.utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)

from .analyzer import PhoneticAnalyzer
from .forms import get_form
from .meter import EXACT, LENIENT, MAX_LENGTH_DIFFERENCE, match_meter
from .models import (
    AnalysisOptions,
    LineAnalysis,
    MeterResult,
    SonnetAnalysis,
    SonnetForm,
    StressPattern,
    WordAnalysis,
)
from .pronunciation_store import PronunciationStore, TableSnapshot
from .rhyme import validate_rhyme_scheme
from .tokenizer import remove_punctuation, split_lines, tokenize_line


def line_rhyme_key(words: Sequence[WordAnalysis]) -> str:
    """Last word's rhyme key, or the nearest earlier non-empty one."""

    for word in reversed(words):
        if word.rhyme_key:
            return word.rhyme_key
    return ""


def format_meter_issue(line: LineAnalysis) -> str:
    expected = line.expected_stress_pattern
    observed = line.stress_pattern
    return (
        f"Line {line.line_number}: Expected {len(expected)} syllables "
        f"with pattern {''.join(map(str, expected))}, "
        f"got {len(observed)} syllables with pattern {''.join(map(str, observed))}"
    )


class SonnetAnalyzer:
    """Analyze poems against a :class:`SonnetForm`."""

    def __init__(
        self,
        phonetic_analyzer: Optional[PhoneticAnalyzer] = None,
        *,
        store: Optional[PronunciationStore] = None,
    ) -> None:
        if phonetic_analyzer is None:
            if store is None:
                raise ValueError("SonnetAnalyzer needs a phonetic analyzer or a pronunciation store")
            phonetic_analyzer = PhoneticAnalyzer(store)
        self.phonetic_analyzer = phonetic_analyzer

        self._logger = get_logger(__name__).bind(component="sonnet_analyzer")
        self._metric_analyses = create_counter(
            "sonnet_analyses_total",
            "Total poems analyzed.",
        )
        self._metric_failures = create_counter(
            "sonnet_analysis_failures_total",
            "Poem analyses that raised an exception.",
        )
        self._metric_duration = create_histogram(
            "sonnet_analysis_seconds",
            "Latency of whole-poem analysis.",
        )

    def analyze_words(
        self,
        text: str,
        expected_pattern: Optional[Sequence[int]] = None,
        table: Optional[TableSnapshot] = None,
    ) -> Tuple[Tuple[WordAnalysis, ...], StressPattern]:
        """Analyze every token of ``text`` and flatten the stress pattern.

        With ``expected_pattern`` each word's dictionary variants are chosen
        using the stress expected at the word's first syllable.
        """

        words: List[WordAnalysis] = []
        pattern: List[int] = []

        for token in tokenize_line(text):
            cleaned = remove_punctuation(token)
            if not cleaned:
                continue

            preferred_stress = None
            if expected_pattern is not None and len(pattern) < len(expected_pattern):
                preferred_stress = expected_pattern[len(pattern)]

            analysis = self.phonetic_analyzer.analyze_word(
                cleaned, preferred_stress=preferred_stress, table=table
            )
            words.append(analysis)
            pattern.extend(syllable.stress for syllable in analysis.syllables)

        return tuple(words), tuple(pattern)

    def analyze_line(
        self,
        text: str,
        line_number: int,
        form: Optional[SonnetForm] = None,
        options: Optional[AnalysisOptions] = None,
        table: Optional[TableSnapshot] = None,
    ) -> LineAnalysis:
        """Analyze a single line; without ``form`` the meter is left unchecked."""

        options = options or AnalysisOptions()
        expected: StressPattern = form.meter.stress_pattern if form is not None else ()
        words, pattern = self.analyze_words(
            text,
            expected if (form is not None and options.intelligent) else None,
            table,
        )

        if form is None:
            result = MeterResult.INAPPLICABLE
        else:
            family = options.meter_family or form.meter.family
            result = match_meter(pattern, expected, family, EXACT if options.strict else LENIENT)

        return LineAnalysis(
            line_number=line_number,
            text=text,
            words=words,
            stress_pattern=pattern,
            rhyme_key=line_rhyme_key(words),
            expected_stress_pattern=expected,
            meter_result=result,
        )

    def analyze_sonnet(
        self,
        text: str,
        form: SonnetForm | str,
        options: Optional[AnalysisOptions] = None,
    ) -> SonnetAnalysis:
        """Analyze ``text`` against ``form`` (a form or a registry id).

        Blank lines are dropped and never count as poem lines. A line yields a
        meter issue only when it has words and is within two syllables of the
        expected length; rhyme groups follow the form's scheme. Every word is
        resolved against the pronunciation tables current when the call starts.
        """

        if isinstance(form, str):
            form = get_form(form)
        options = options or AnalysisOptions()
        table = self.phonetic_analyzer.store.snapshot()

        self._metric_analyses.inc()
        with start_span(
            "sonnet.analyze",
            {"form": form.name, "strict": options.strict},
        ) as span, self._metric_duration.time():
            try:
                report = self._analyze(text, form, options, table)
            except Exception as exc:
                self._metric_failures.inc()
                record_exception(span, exc)
                self._logger.error(
                    "Sonnet analysis failed",
                    context={"form": form.name, "error": str(exc)},
                )
                raise
            add_span_attributes(
                span,
                {
                    "lines": len(report.lines),
                    "meter_valid": report.meter_valid,
                    "rhyme_scheme_valid": report.rhyme_scheme_valid,
                },
            )

        self._logger.info(
            "Sonnet analysed",
            context={
                "form": form.name,
                "lines": len(report.lines),
                "expected_lines": form.line_count,
                "meter_issues": len(report.meter_issues),
                "rhyme_issues": len(report.rhyme_issues),
                "unknown_words": len(report.unknown_words),
            },
        )
        return report

    def _analyze(
        self,
        text: str,
        form: SonnetForm,
        options: AnalysisOptions,
        table: TableSnapshot,
    ) -> SonnetAnalysis:
        poem_lines = [line for line in split_lines(text) if line.strip()]
        lines = tuple(
            self.analyze_line(line, index + 1, form, options, table)
            for index, line in enumerate(poem_lines)
        )

        expected_length = len(form.meter.stress_pattern)
        meter_issues = tuple(
            format_meter_issue(line)
            for line in lines
            if line.words
            and abs(len(line.stress_pattern) - expected_length) <= MAX_LENGTH_DIFFERENCE
            and not line.meter_valid
        )

        rhyme = validate_rhyme_scheme([line.rhyme_key for line in lines], form.rhyme_scheme)

        unknown: Dict[str, None] = {}
        for line in lines:
            for word in line.words:
                if not word.found:
                    unknown.setdefault(word.word, None)

        return SonnetAnalysis(
            lines=lines,
            form=form,
            meter_valid=not meter_issues,
            rhyme_scheme_valid=rhyme.valid,
            meter_issues=meter_issues,
            rhyme_issues=rhyme.issues,
            rhyme_groups=rhyme.groups,
            unknown_words=tuple(unknown),
        )


__all__ = ["SonnetAnalyzer", "format_meter_issue", "line_rhyme_key"]
