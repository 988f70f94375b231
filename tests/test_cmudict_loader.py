import json

import pytest

from sonnet_checker.core.cmudict_loader import (
    DictionaryLoadError,
    convert_cmudict,
    load_table_json,
    parse_cmudict_lines,
)
from sonnet_checker.core.phonemes import format_phonemes

RAW_DICTIONARY = """;;; # CMUdict  --  Major Version: 0.07
;;; comment line

!EXCLAMATION-POINT  EH2 K S K L AH0 M EY1 SH AH0 N P OY2 N T
HELLO  HH AH0 L OW1
HELLO(1)  HH EH0 L OW1
HELLO(2)  HH AH0 L OW1
'TIS  T IH1 Z
BROKEN
ABLE  EY1 B AH0 L
"""


def test_parse_cmudict_lines_merges_variants_and_counts():
    table, stats = parse_cmudict_lines(RAW_DICTIONARY.splitlines())

    assert list(table) == ["'tis", "able", "hello"]
    assert table["hello"] == [["HH", "AH0", "L", "OW1"], ["HH", "EH0", "L", "OW1"]]
    assert stats.processed == 5
    assert stats.skipped == 2
    assert stats.unique_words == 3
    assert stats.total_pronunciations == 4


def test_parse_cmudict_lines_ignores_inline_comments():
    table, _ = parse_cmudict_lines(["d'artagnan D AH0 R T AE1 NG Y AH0 N # foreign french"])
    assert table["d'artagnan"][0][-1] == "N"


def test_convert_cmudict_writes_one_word_per_line(tmp_path):
    source = tmp_path / "cmudict-0.7b"
    source.write_text(RAW_DICTIONARY, encoding="utf-8")
    output = tmp_path / "data" / "cmu-dict.json"

    stats = convert_cmudict(source, output)

    text = output.read_text(encoding="utf-8")
    assert text.splitlines()[1] == '  "\'tis": [["T", "IH1", "Z"]],'
    assert json.loads(text)["able"] == [["EY1", "B", "AH0", "L"]]
    assert stats.unique_words == 3

    table = load_table_json(output)
    assert [format_phonemes(v) for v in table["hello"]] == [
        ["HH", "AH0", "L", "OW1"],
        ["HH", "EH0", "L", "OW1"],
    ]


def test_convert_missing_input_raises(tmp_path):
    with pytest.raises(DictionaryLoadError):
        convert_cmudict(tmp_path / "missing", tmp_path / "out.json")


def test_load_table_json_rejects_non_object(tmp_path):
    path = tmp_path / "table.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(DictionaryLoadError):
        load_table_json(path)
