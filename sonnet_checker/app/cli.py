"""Command-line entrypoint for analysing poems and converting dictionaries."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from sonnet_checker.config import SETTINGS
from sonnet_checker.core import (
    DictionaryLoadError,
    UnknownFormError,
    available_forms,
    convert_cmudict,
    get_form,
)
from sonnet_checker.core.forms import scheme_string
from sonnet_checker.utils.logging_config import configure_logging

from .app import SonnetCheckerApp


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sonnet-checker",
        description="Check a poem's meter and rhyme scheme against a sonnet form.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to SONNET_LOG_LEVEL or INFO).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyse a poem file ('-' for stdin).")
    analyze.add_argument("path", help="Poem text file, or '-' to read stdin.")
    analyze.add_argument(
        "--form",
        default=SETTINGS.default_form,
        help=f"Form id (default: {SETTINGS.default_form}).",
    )
    analyze.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=SETTINGS.strict,
        help="Fail any line whose syllable count differs from the meter (default: SONNET_STRICT).",
    )
    analyze.add_argument(
        "--dictionary",
        default=None,
        help="JSON pronunciation table (defaults to SONNET_DICT_PATH or the bundled CMU data).",
    )
    analyze.add_argument("--json", action="store_true", help="Emit the report as JSON.")

    subparsers.add_parser("forms", help="List the available forms.")

    convert = subparsers.add_parser("convert", help="Convert a raw CMU dictionary to JSON.")
    convert.add_argument("input", help="Raw dictionary file (cmudict-0.7b format).")
    convert.add_argument("output", help="Destination JSON file.")

    return parser


def _read_poem(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _run_analyze(args: argparse.Namespace) -> int:
    get_form(args.form)
    settings = SETTINGS
    if args.dictionary:
        settings = replace(SETTINGS, dict_path=args.dictionary)

    app = SonnetCheckerApp(settings)
    report = app.analyze(_read_poem(args.path), args.form, strict=args.strict)
    if args.json:
        print(json.dumps(report.as_dict(), indent=2))
    else:
        print(app.formatter.format_report(report))
    return 0 if report.meter_valid and report.rhyme_scheme_valid else 1


def _run_forms() -> int:
    for form_id in available_forms():
        form = get_form(form_id)
        scheme = scheme_string(form.rhyme_scheme)
        print(f"{form_id:<15} {form.name:<22} {scheme:<16} {form.meter.name}")
    return 0


def _run_convert(args: argparse.Namespace) -> int:
    stats = convert_cmudict(args.input, args.output)
    print(f"Processed lines:      {stats.processed}")
    print(f"Skipped lines:        {stats.skipped}")
    print(f"Unique words:         {stats.unique_words}")
    print(f"Total pronunciations: {stats.total_pronunciations}")
    print(f"Output file:          {args.output}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level or SETTINGS.log_level)

    try:
        if args.command == "analyze":
            return _run_analyze(args)
        if args.command == "forms":
            return _run_forms()
        return _run_convert(args)
    except (UnknownFormError, DictionaryLoadError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
