import pytest

from fuzzfind.normalize import normalize_char, normalize_text


@pytest.mark.parametrize(
    "char, expected",
    [
        ("\u00e1", "a"),
        ("\u00f3", "o"),
        ("\u00e7", "c"),
        ("\u00c1", "A"),
        ("\u2184", "c"),
        ("\u1ec7", "e"),
        ("\u1ef0", "U"),
    ],
)
def test_normalize_char_known_entries(char, expected):
    assert normalize_char(char) == expected


@pytest.mark.parametrize("char", ["a", "Z", "0", " ", "/", "\u20ac", "\u4e00", "\u0301"])
def test_normalize_char_leaves_unmapped_characters(char):
    assert normalize_char(char) == char


def test_normalize_char_rejects_multiple_characters():
    with pytest.raises(ValueError):
        normalize_char("ab")


def test_normalize_char_rejects_empty_string():
    with pytest.raises(ValueError):
        normalize_char("")


def test_normalize_text_sample_phrase():
    assert normalize_text("S\u00f3 Dan\u00e7o Samba") == "So Danco Samba"
    assert normalize_text("Dan\u00e7o") == "Danco"


def test_normalize_text_ascii_unchanged():
    text = "fooBar baz/qux-123_~!"
    assert normalize_text(text) == text


def test_normalize_text_preserves_length():
    text = "\u00c0\u00e9\u1ea5\u0142\u00df\u1d22 plain"
    assert len(normalize_text(text)) == len(text)


def test_normalize_text_is_idempotent():
    text = "\u1ea4\u1ead\u1ebf\u1ed3\u1ef1 \u00f1\u00fc\u00ff"
    once = normalize_text(text)
    assert normalize_text(once) == once


def test_normalize_text_agrees_with_normalize_char():
    text = "\u00e1\u0103\u0250x\u20ac\u1e9b\u2071Q"
    assert normalize_text(text) == "".join(normalize_char(c) for c in text)


def test_normalize_text_output_is_ascii_for_mapped_letters():
    text = "\u00e1\u00e9\u00ed\u00f3\u00fa\u00c1\u00c9\u00cd\u00d3\u00da"
    assert normalize_text(text).isascii()
    assert normalize_text(text).lower() == "aeiouaeiou"


def test_normalize_text_empty():
    assert normalize_text("") == ""