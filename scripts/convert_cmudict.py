#!/usr/bin/env python3
"""Convert the raw CMU pronouncing dictionary into the JSON table format.

Usage::

    python scripts/convert_cmudict.py cmudict-0.7b data/cmu-dict-full.json
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sonnet_checker.core.cmudict_loader import convert_cmudict, load_table_json  # noqa: E402
from sonnet_checker.core.phonemes import format_phonemes  # noqa: E402
from sonnet_checker.utils.logging_config import configure_logging  # noqa: E402

SAMPLE_WORDS = ("hello", "world", "love", "poetry", "by")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("input", nargs="?", default="cmudict-0.7b", help="Raw dictionary file.")
    parser.add_argument(
        "output",
        nargs="?",
        default="data/cmu-dict-full.json",
        help="Destination JSON file.",
    )
    parser.add_argument("--quiet", action="store_true", help="Skip the sample entry listing.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging()

    stats = convert_cmudict(args.input, args.output)
    size_mb = Path(args.output).stat().st_size / 1024 / 1024
    lines: List[str] = [
        f"Processed lines:      {stats.processed}",
        f"Skipped lines:        {stats.skipped}",
        f"Unique words:         {stats.unique_words}",
        f"Total pronunciations: {stats.total_pronunciations}",
        f"Output file:          {args.output} ({size_mb:.2f} MB)",
    ]
    print("\n".join(lines))

    if not args.quiet:
        table = load_table_json(args.output)
        for word in SAMPLE_WORDS:
            if word in table:
                variants = [format_phonemes(sequence) for sequence in table[word]]
                print(f"  {word!r}: {json.dumps(variants)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
