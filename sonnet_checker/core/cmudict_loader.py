"""Utilities for ingesting and loading CMU-style pronunciation tables."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

import pronouncing

from sonnet_checker.utils.observability import get_logger

from .phonemes import PhonemeSequence, parse_phonemes

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")
_VALID_START_PATTERN = re.compile(r"^[a-z']")
_INLINE_COMMENT_PATTERN = re.compile(r"\s#")

RawTable = Dict[str, List[List[str]]]
PronunciationTable = Mapping[str, Tuple[PhonemeSequence, ...]]

_logger = get_logger(__name__).bind(component="cmudict_loader")


class DictionaryLoadError(RuntimeError):
    """Raised when a pronunciation table cannot be read or decoded."""


@dataclass(frozen=True)
class ConversionStats:
    """Counters reported by a raw dictionary conversion."""

    processed: int
    skipped: int
    unique_words: int
    total_pronunciations: int


def _strip_variant(word: str) -> str:
    return _WORD_VARIANT_PATTERN.sub("", word).lower()


def parse_cmudict_lines(lines: Iterable[str]) -> Tuple[RawTable, ConversionStats]:
    """Parse ``WORD PH1 PH2 ...`` entries into a sorted raw table.

    Blank lines and ``;;;`` comments are ignored. Lines with fewer than two
    fields and words starting with anything but a letter or apostrophe are
    counted as skipped. ``(N)`` variant markers are stripped so alternative
    pronunciations merge under one key, deduplicated in first-seen order.
    """

    table: RawTable = {}
    processed = 0
    skipped = 0

    for line in lines:
        entry = _INLINE_COMMENT_PATTERN.split(line, 1)[0].strip()
        if not entry or line.startswith(";;;"):
            continue

        parts = entry.split()
        if len(parts) < 2:
            skipped += 1
            continue

        raw_word, *phones = parts
        word = _strip_variant(raw_word)
        if not _VALID_START_PATTERN.match(word):
            skipped += 1
            continue

        variants = table.setdefault(word, [])
        if phones not in variants:
            variants.append(phones)
        processed += 1

    ordered = {word: table[word] for word in sorted(table)}
    stats = ConversionStats(
        processed=processed,
        skipped=skipped,
        unique_words=len(ordered),
        total_pronunciations=sum(len(variants) for variants in ordered.values()),
    )
    return ordered, stats


def write_table_json(table: Mapping[str, Sequence[Sequence[str]]], path: Path | str) -> Path:
    """Write ``table`` as JSON with one word per line."""

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    words = list(table)
    with output.open("w", encoding="utf-8") as handle:
        handle.write("{\n")
        for index, word in enumerate(words):
            comma = "," if index < len(words) - 1 else ""
            variants = json.dumps([list(variant) for variant in table[word]])
            handle.write(f"  {json.dumps(word)}: {variants}{comma}\n")
        handle.write("}")
    return output


def convert_cmudict(input_path: Path | str, output_path: Path | str) -> ConversionStats:
    """Convert a raw ``cmudict-0.7b`` style file into the JSON table format."""

    source = Path(input_path)
    try:
        with source.open("r", encoding="utf-8", errors="replace") as handle:
            table, stats = parse_cmudict_lines(handle)
    except OSError as exc:
        raise DictionaryLoadError(f"Cannot read raw dictionary {source}: {exc}") from exc

    write_table_json(table, output_path)
    _logger.info(
        "Raw dictionary converted",
        context={
            "input": str(source),
            "output": str(output_path),
            "processed": stats.processed,
            "skipped": stats.skipped,
            "unique_words": stats.unique_words,
            "total_pronunciations": stats.total_pronunciations,
        },
    )
    return stats


def build_table(raw: Mapping[str, Sequence[Sequence[str]]]) -> Dict[str, Tuple[PhonemeSequence, ...]]:
    """Parse raw phoneme strings into tagged tokens, dropping empty entries."""

    table: Dict[str, Tuple[PhonemeSequence, ...]] = {}
    for word, variants in raw.items():
        parsed = tuple(
            sequence for sequence in (parse_phonemes(variant) for variant in variants) if sequence
        )
        if parsed:
            table[str(word)] = parsed
    return table


def load_table_json(path: Path | str) -> Dict[str, Tuple[PhonemeSequence, ...]]:
    """Load a JSON pronunciation table produced by :func:`write_table_json`."""

    source = Path(path)
    try:
        with source.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DictionaryLoadError(f"Cannot load pronunciation table {source}: {exc}") from exc

    if not isinstance(raw, dict):
        raise DictionaryLoadError(f"Pronunciation table {source} is not a JSON object")

    table = build_table(raw)
    _logger.info(
        "Pronunciation table loaded",
        context={"path": str(source), "words": len(table)},
    )
    return table


def load_pronouncing_table() -> Dict[str, Tuple[PhonemeSequence, ...]]:
    """Build the base table from the CMU data bundled with ``pronouncing``."""

    pronouncing.init_cmu()
    lines = (f"{word} {phones}" for word, phones in pronouncing.pronunciations)
    raw, stats = parse_cmudict_lines(lines)
    table = build_table(raw)
    _logger.info(
        "Pronunciation table loaded",
        context={"source": "pronouncing", "words": len(table), "skipped": stats.skipped},
    )
    return table


__all__ = [
    "ConversionStats",
    "DictionaryLoadError",
    "PronunciationTable",
    "RawTable",
    "build_table",
    "convert_cmudict",
    "load_pronouncing_table",
    "load_table_json",
    "parse_cmudict_lines",
    "write_table_json",
]
