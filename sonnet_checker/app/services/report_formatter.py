"""Markdown rendering of sonnet analysis reports."""

from __future__ import annotations

from typing import List

from sonnet_checker.core.forms import scheme_string
from sonnet_checker.core.models import LineAnalysis, SonnetAnalysis, WordAnalysis


def _pattern(values) -> str:
    return "".join(str(value) for value in values) or "-"


class SonnetReportFormatter:
    """Render a :class:`SonnetAnalysis` for the UI and the CLI."""

    def format_word(self, word: WordAnalysis) -> str:
        if not word.found:
            return f"_{word.original_word}_"
        stresses = [syllable.stress for syllable in word.syllables]
        if 1 in stresses:
            return f"**{word.original_word}**"
        return word.original_word

    def format_line(self, line: LineAnalysis, rhyme_label: str) -> str:
        words = " ".join(self.format_word(word) for word in line.words)
        if line.meter_valid:
            status = "✓"
        elif line.meter_checked:
            status = "✗"
        else:
            status = "·"
        return (
            f"{line.line_number}. {status} {words} `[{rhyme_label}]` "
            f"`{_pattern(line.stress_pattern)}`"
        )

    def format_report(self, analysis: SonnetAnalysis) -> str:
        form = analysis.form
        meter = form.meter
        output: List[str] = []

        if not analysis.lines:
            output.append("_No poem lines to analyse._")
        for index, line in enumerate(analysis.lines):
            label = form.rhyme_scheme[index] if index < len(form.rhyme_scheme) else "?"
            output.append(self.format_line(line, label))

        output.append("")
        output.append("### Analysis Summary")
        output.append(f"**Form:** {form.name}  ")
        output.append(f"**Expected Meter:** {meter.name} ({meter.description})  ")
        output.append(f"**Expected Rhyme Scheme:** {scheme_string(form.rhyme_scheme)}  ")
        if len(analysis.lines) != form.line_count:
            output.append(
                f"**Line count:** {len(analysis.lines)} (expected {form.line_count})  "
            )

        output.append("")
        output.append(f"**Meter:** {'✓ Valid' if analysis.meter_valid else '✗ Issues Found'}")
        output.extend(f"- {issue}" for issue in analysis.meter_issues)

        output.append("")
        output.append(
            f"**Rhyme Scheme:** {'✓ Valid' if analysis.rhyme_scheme_valid else '✗ Issues Found'}"
        )
        output.extend(f"- {issue}" for issue in analysis.rhyme_issues)

        if analysis.unknown_words:
            output.append("")
            output.append(
                "**Not in dictionary (estimated):** " + ", ".join(analysis.unknown_words)
            )

        return "\n".join(output)


__all__ = ["SonnetReportFormatter"]
