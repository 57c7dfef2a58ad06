"""Decoding of single UTF-8 runes and cursor stepping over encoded text."""

from __future__ import annotations

UTF_INVALID = 0xFFFD
UTF_SIZ = 4

_UTF_BYTE = (0x80, 0x00, 0xC0, 0xE0, 0xF0)
_UTF_MASK = (0xC0, 0x80, 0xE0, 0xF0, 0xF8)
_UTF_MIN = (0, 0, 0x80, 0x800, 0x10000)
_UTF_MAX = (0x10FFFF, 0x7F, 0x7FF, 0xFFFF, 0x10FFFF)


def _decode_byte(c: int) -> tuple[int, int]:
    """Return the payload bits of one byte and its kind.

    Kind 0 is a continuation byte, 1 to 4 the length of a sequence that the
    byte starts, and 5 a byte that can never occur in UTF-8.
    """
    for kind, (mask, marker) in enumerate(zip(_UTF_MASK, _UTF_BYTE)):
        if c & mask == marker:
            return c & ~mask, kind
    return 0, len(_UTF_MASK)


def _validate(codepoint: int, length: int) -> int:
    out_of_range = not _UTF_MIN[length] <= codepoint <= _UTF_MAX[length]
    if out_of_range or 0xD800 <= codepoint <= 0xDFFF:
        return UTF_INVALID
    return codepoint


def utf8_decode(data: bytes | bytearray | str) -> tuple[int, int]:
    """Decode the first rune of *data*.

    Returns ``(codepoint, consumed)``. Malformed input yields the replacement
    codepoint U+FFFD; ``consumed`` is 0 for a sequence cut short by the end of
    the data and otherwise the number of bytes to skip.
    """
    if isinstance(data, str):
        data = data.encode()
    head = bytes(data[:UTF_SIZ])
    if not head:
        return UTF_INVALID, 0
    value, length = _decode_byte(head[0])
    if not 1 <= length <= UTF_SIZ:
        return UTF_INVALID, 1
    consumed = 1
    for byte in head[1:length]:
        part, kind = _decode_byte(byte)
        if kind:
            return UTF_INVALID, consumed
        value = (value << 6) | part
        consumed += 1
    if consumed < length:
        return UTF_INVALID, 0
    return _validate(value, length), length


def _byte_at(data: bytes | bytearray, index: int) -> int:
    return data[index] if 0 <= index < len(data) else 0


def next_rune(data: bytes | bytearray, cursor: int, inc: int) -> int:
    """Return the byte offset of the next rune from *cursor* in direction *inc*.

    *inc* is +1 or -1. Positions past the end read as a terminating zero byte.
    """
    if inc not in (1, -1):
        raise ValueError("inc must be +1 or -1")
    n = cursor + inc
    while n + inc >= 0 and _byte_at(data, n) & 0xC0 == 0x80:
        n += inc
    return n