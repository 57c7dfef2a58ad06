import pytest

from dynmenu.utf8 import UTF_INVALID, next_rune, utf8_decode


@pytest.mark.parametrize("ch", ["A", "~", "\u00e9", "\u20ac", "\u4e2d", "\U0001f600", "\U0010ffff"])
def test_decode_valid_characters(ch):
    encoded = ch.encode()
    assert utf8_decode(encoded) == (ord(ch), len(encoded))


def test_decode_only_first_rune():
    data = "\u20acabc".encode()
    assert utf8_decode(data) == (ord("\u20ac"), len("\u20ac".encode()))


def test_decode_accepts_str():
    assert utf8_decode("\u00e9x") == (ord("\u00e9"), len("\u00e9".encode()))


def test_decode_empty():
    assert utf8_decode(b"") == (UTF_INVALID, 0)


def test_decode_stray_continuation_byte():
    assert utf8_decode(b"\x80abc") == (UTF_INVALID, 1)


def test_decode_impossible_byte():
    assert utf8_decode(b"\xffabc") == (UTF_INVALID, 1)


def test_decode_truncated_sequence():
    assert utf8_decode(b"\xe2\x82") == (UTF_INVALID, 0)


def test_decode_broken_sequence_reports_bytes_before_break():
    assert utf8_decode(b"\xe2\x82A") == (UTF_INVALID, 2)


def test_decode_overlong_is_invalid():
    codepoint, consumed = utf8_decode(b"\xc0\x80")
    assert codepoint == UTF_INVALID
    assert consumed == len(b"\xc0\x80")


def test_decode_surrogate_is_invalid():
    codepoint, consumed = utf8_decode(b"\xed\xa0\x80")
    assert codepoint == UTF_INVALID
    assert consumed == len(b"\xed\xa0\x80")


def _starts(text):
    offsets, pos = [], 0
    for ch in text:
        offsets.append(pos)
        pos += len(ch.encode())
    offsets.append(pos)
    return offsets


def test_next_rune_forward_visits_each_character():
    text = "a\u00e9\u20acb\U0001f600"
    data = text.encode()
    cursor, visited = 0, [0]
    while cursor < len(data):
        cursor = next_rune(data, cursor, +1)
        visited.append(cursor)
    assert visited == _starts(text)


def test_next_rune_backward_visits_each_character():
    text = "a\u00e9\u20acb\U0001f600"
    data = text.encode()
    cursor, visited = len(data), [len(data)]
    while cursor > 0:
        cursor = next_rune(data, cursor, -1)
        visited.append(cursor)
    assert visited == list(reversed(_starts(text)))


def test_next_rune_rejects_bad_direction():
    with pytest.raises(ValueError):
        next_rune(b"abc", 0, 2)