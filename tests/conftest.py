import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from sonnet_checker.core import (
    InMemoryOverlayPort,
    PhoneticAnalyzer,
    PronunciationStore,
    SonnetAnalyzer,
)


# Small CMU excerpt covering the sample lines used across the suite.
SAMPLE_TABLE = {
    "hello": [["HH", "AH0", "L", "OW1"], ["HH", "EH0", "L", "OW1"]],
    "shall": [["SH", "AE1", "L"]],
    "i": [["AY1"]],
    "compare": [["K", "AH0", "M", "P", "EH1", "R"]],
    "thee": [["DH", "IY1"]],
    "to": [["T", "UW1"], ["T", "IH0"], ["T", "AH0"]],
    "a": [["AH0"], ["EY1"]],
    "summer's": [["S", "AH1", "M", "ER0", "Z"]],
    "day": [["D", "EY1"]],
    "may": [["M", "EY1"]],
    "see": [["S", "IY1"]],
    "sky": [["S", "K", "AY1"]],
    "the": [["DH", "AH0"], ["DH", "AH1"], ["DH", "IY0"]],
    "cat": [["K", "AE1", "T"]],
    "hat": [["HH", "AE1", "T"]],
    "sat": [["S", "AE1", "T"]],
    "on": [["AA1", "N"], ["AO1", "N"]],
    "mat": [["M", "AE1", "T"]],
    "shh": [["SH"]],
    "window": [["W", "IH1", "N", "D", "OW0"]],
    "record": [["R", "EH1", "K", "ER0", "D"], ["R", "IH0", "K", "AO1", "R", "D"]],
}


@pytest.fixture
def store():
    return PronunciationStore.from_raw(SAMPLE_TABLE, port=InMemoryOverlayPort())


@pytest.fixture
def phonetic_analyzer(store):
    return PhoneticAnalyzer(store)


@pytest.fixture
def sonnet_analyzer(phonetic_analyzer):
    return SonnetAnalyzer(phonetic_analyzer)
