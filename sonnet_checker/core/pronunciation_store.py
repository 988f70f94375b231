"""Pronunciation lookup with a read-only base table and a user overlay."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Tuple

from sonnet_checker.utils.observability import get_logger

from .cmudict_loader import DictionaryLoadError, build_table, write_table_json
from .phonemes import PhonemeSequence, PhonemeToken, format_phonemes, parse_phonemes

_NON_WORD_PATTERN = re.compile(r"[^a-z']")

Table = Mapping[str, Tuple[PhonemeSequence, ...]]


def normalize_word(word: str) -> str:
    """Lowercase ``word`` and drop everything except letters and apostrophes."""

    return _NON_WORD_PATTERN.sub("", (word or "").lower())


class OverlayPort(Protocol):
    """Persistence boundary for user-added pronunciations."""

    def load(self) -> Mapping[str, Sequence[Sequence[str]]]:
        ...

    def save(self, overlay: Mapping[str, Sequence[Sequence[str]]]) -> None:
        ...


class InMemoryOverlayPort:
    """Overlay port that keeps the last saved snapshot in memory."""

    def __init__(self, initial: Optional[Mapping[str, Sequence[Sequence[str]]]] = None) -> None:
        self._data: Dict[str, List[List[str]]] = {
            word: [list(variant) for variant in variants]
            for word, variants in (initial or {}).items()
        }

    def load(self) -> Dict[str, List[List[str]]]:
        return {word: [list(v) for v in variants] for word, variants in self._data.items()}

    def save(self, overlay: Mapping[str, Sequence[Sequence[str]]]) -> None:
        self._data = {word: [list(v) for v in variants] for word, variants in overlay.items()}


class JsonFileOverlayPort:
    """Overlay port persisting to a JSON file in the table format."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> Dict[str, List[List[str]]]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DictionaryLoadError(f"Cannot load overlay {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise DictionaryLoadError(f"Overlay {self.path} is not a JSON object")
        return data

    def save(self, overlay: Mapping[str, Sequence[Sequence[str]]]) -> None:
        write_table_json({word: overlay[word] for word in sorted(overlay)}, self.path)


class TableSnapshot:
    """Lookup over the base and overlay tables captured at one moment.

    Later ``swap_base`` or ``add_overlay`` calls on the store replace its
    tables rather than mutating them, so a snapshot keeps resolving against
    the mappings it was created with.
    """

    def __init__(self, base: Table, overlay: Table) -> None:
        self._base = base
        self._overlay = overlay

    def resolve(self, word: str) -> Optional[PhonemeSequence]:
        variants = self.resolve_all(word)
        if not variants:
            return None
        return variants[0]

    def resolve_all(self, word: str) -> Optional[List[PhonemeSequence]]:
        normalized = normalize_word(word)
        if not normalized:
            return None
        variants = self._overlay.get(normalized) or self._base.get(normalized)
        if not variants:
            return None
        return list(variants)


class PronunciationStore:
    """Resolve words to phoneme sequences.

    The base table is treated as immutable; :meth:`swap_base` replaces it
    wholesale so a lookup never observes a partially loaded table. User
    additions live in a separate overlay that shadows the base table and is
    persisted through the optional ``port``.
    """

    def __init__(
        self,
        base: Optional[Table] = None,
        *,
        port: Optional[OverlayPort] = None,
    ) -> None:
        self._base: Table = dict(base or {})
        self._overlay: Dict[str, Tuple[PhonemeSequence, ...]] = {}
        self.port = port
        self._logger = get_logger(__name__).bind(component="pronunciation_store")

    @classmethod
    def from_raw(
        cls,
        raw: Mapping[str, Sequence[Sequence[str]]],
        *,
        port: Optional[OverlayPort] = None,
    ) -> "PronunciationStore":
        """Build a store from a raw ``word -> [[phoneme, ...], ...]`` mapping."""

        return cls(build_table(raw), port=port)

    # Lookup -------------------------------------------------------------
    def snapshot(self) -> TableSnapshot:
        """Capture the current base and overlay references."""

        return TableSnapshot(self._base, self._overlay)

    def resolve(self, word: str) -> Optional[PhonemeSequence]:
        return self.snapshot().resolve(word)

    def resolve_all(self, word: str) -> Optional[List[PhonemeSequence]]:
        return self.snapshot().resolve_all(word)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.resolve_all(word) is not None

    def __len__(self) -> int:
        return len(self._base.keys() | self._overlay.keys())

    # Mutation -----------------------------------------------------------
    def swap_base(self, table: Table) -> None:
        """Replace the base table in a single reference assignment."""

        self._base = dict(table)
        self._logger.info("Base pronunciation table swapped", context={"words": len(self._base)})

    def add_overlay(self, word: str, phonemes: Iterable[str | PhonemeToken]) -> PhonemeSequence:
        """Store a single-variant override for ``word`` and persist the overlay."""

        normalized = normalize_word(word)
        if not normalized:
            raise ValueError(f"Cannot add a pronunciation for {word!r}: no letters remain")
        sequence = parse_phonemes(phonemes)
        if not sequence:
            raise ValueError(f"Cannot add an empty pronunciation for {word!r}")

        overlay = dict(self._overlay)
        overlay[normalized] = (sequence,)
        self._overlay = overlay
        self._logger.info(
            "Overlay pronunciation added",
            context={"word": normalized, "phonemes": format_phonemes(sequence)},
        )
        if self.port is not None:
            self.port.save(self.overlay_snapshot())
        return sequence

    def load_overlay(self) -> int:
        """Replace the overlay with the port's persisted contents."""

        if self.port is None:
            return 0
        loaded = build_table(self.port.load())
        self._overlay = {
            normalize_word(word): variants[:1]
            for word, variants in loaded.items()
            if normalize_word(word)
        }
        self._logger.info("Overlay loaded", context={"words": len(self._overlay)})
        return len(self._overlay)

    def overlay_snapshot(self) -> Dict[str, List[List[str]]]:
        """Raw-string view of the overlay, as handed to the port."""

        return {
            word: [format_phonemes(sequence) for sequence in variants]
            for word, variants in self._overlay.items()
        }


__all__ = [
    "InMemoryOverlayPort",
    "JsonFileOverlayPort",
    "OverlayPort",
    "PronunciationStore",
    "TableSnapshot",
    "normalize_word",
]
