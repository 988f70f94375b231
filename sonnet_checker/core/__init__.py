"""Core phonetic and prosodic analysis for sonnet checking."""

from .analyzer import PhoneticAnalyzer, rhyme_key, segment_syllables
from .cmudict_loader import (
    ConversionStats,
    DictionaryLoadError,
    convert_cmudict,
    load_pronouncing_table,
    load_table_json,
    parse_cmudict_lines,
)
from .forms import UnknownFormError, available_forms, build_form, get_form, get_meter
from .meter import fit_meter, match_meter
from .models import (
    AnalysisOptions,
    LineAnalysis,
    MeterPattern,
    MeterResult,
    SonnetAnalysis,
    SonnetForm,
    Syllable,
    WordAnalysis,
)
from .phonemes import PhonemeToken, StressTag, parse_phonemes
from .pronunciation_store import (
    InMemoryOverlayPort,
    JsonFileOverlayPort,
    OverlayPort,
    PronunciationStore,
    TableSnapshot,
    normalize_word,
)
from .rhyme import RhymeValidation, validate_rhyme_scheme
from .sonnet import SonnetAnalyzer

__all__ = [
    "AnalysisOptions",
    "ConversionStats",
    "DictionaryLoadError",
    "InMemoryOverlayPort",
    "JsonFileOverlayPort",
    "LineAnalysis",
    "MeterPattern",
    "MeterResult",
    "OverlayPort",
    "PhonemeToken",
    "PhoneticAnalyzer",
    "PronunciationStore",
    "RhymeValidation",
    "SonnetAnalysis",
    "SonnetAnalyzer",
    "SonnetForm",
    "TableSnapshot",
    "StressTag",
    "Syllable",
    "UnknownFormError",
    "WordAnalysis",
    "available_forms",
    "build_form",
    "convert_cmudict",
    "fit_meter",
    "get_form",
    "get_meter",
    "load_pronouncing_table",
    "load_table_json",
    "match_meter",
    "normalize_word",
    "parse_cmudict_lines",
    "parse_phonemes",
    "rhyme_key",
    "segment_syllables",
    "validate_rhyme_scheme",
]
