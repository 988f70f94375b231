"""Check poems against sonnet meters and rhyme schemes."""

from .core import (
    AnalysisOptions,
    PhoneticAnalyzer,
    PronunciationStore,
    SonnetAnalysis,
    SonnetAnalyzer,
    get_form,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisOptions",
    "PhoneticAnalyzer",
    "PronunciationStore",
    "SonnetAnalysis",
    "SonnetAnalyzer",
    "get_form",
    "__version__",
]
