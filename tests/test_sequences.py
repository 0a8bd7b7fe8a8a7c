import pytest

from damerau_distance.sequences import render_element, to_sequence


def test_char_unit_keeps_code_points():
    assert list(to_sequence("héllo")) == ["h", "é", "l", "l", "o"]
    assert to_sequence(b"abc", "char") == "abc"


def test_byte_unit_encodes():
    assert to_sequence("é", "byte") == b"\xc3\xa9"
    assert to_sequence("é", "byte", encoding="latin-1") == b"\xe9"


def test_word_unit_splits_on_whitespace():
    assert to_sequence("  the cat\tsat\n", "word") == ["the", "cat", "sat"]


def test_none_is_empty():
    assert len(to_sequence(None, "word")) == 0


def test_unknown_unit():
    with pytest.raises(ValueError):
        to_sequence("abc", "grapheme")  # type: ignore[arg-type]


def test_render_element():
    assert render_element(None) == ""
    assert render_element(0x41) == "0x41"
    assert render_element(("a", "b")) == "ab"
    assert render_element(("cat", "sat"), "word") == "cat sat"


def test_render_single_letter_words_keep_separator():
    assert render_element(("b", "c"), "word") == "b c"
    assert render_element(("b", "c"), "char") == "bc"
    assert render_element((0x61, 0x62), "byte") == "0x61 0x62"
