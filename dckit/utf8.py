"""Encoding, decoding and validation of UTF-8 code points (RFC 3629).

   Char. number range  |        UTF-8 octet sequence
      (hexadecimal)    |              (binary)
   --------------------+---------------------------------------------
   0000 0000-0000 007F | 0xxxxxxx
   0000 0080-0000 07FF | 110xxxxx 10xxxxxx
   0000 0800-0000 FFFF | 1110xxxx 10xxxxxx 10xxxxxx
   0001 0000-0010 FFFF | 11110xxx 10xxxxxx 10xxxxxx 10xxxxxx
"""

from __future__ import annotations

from typing import Optional

__all__ = ["encode", "decode", "validate", "MAX_CODE_POINT"]

_COUNT1_MASK = 0b1000_0000
_COUNT2_MASK = 0b1110_0000
_COUNT3_MASK = 0b1111_0000
_COUNT4_MASK = 0b1111_1000
_SEQUENCE_MASK = 0b1100_0000

_COUNT1_VALUE = 0b0000_0000
_COUNT2_VALUE = 0b1100_0000
_COUNT3_VALUE = 0b1110_0000
_COUNT4_VALUE = 0b1111_0000
_SEQUENCE_VALUE = 0b1000_0000

_UPPER_BOUND1 = 0x7F
_UPPER_BOUND2 = 0x7FF
_UPPER_BOUND3 = 0xFFFF
MAX_CODE_POINT = 0x10_FFFF

_PAYLOAD_MASK = ~_SEQUENCE_MASK & 0xFF


def _as_bytes(data) -> bytes | bytearray | memoryview:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return data
    return bytes(data)


def _continuation(value: int) -> int:
    return _SEQUENCE_VALUE | (value & _PAYLOAD_MASK)


def encode(code_point: int) -> bytes:
    """Encode a code point as UTF-8.

    Code points above U+10FFFF have no encoding and yield empty bytes.
    """
    if code_point < 0:
        raise ValueError(f"code point cannot be negative: {code_point}")
    if code_point <= _UPPER_BOUND1:
        return bytes((code_point,))
    if code_point <= _UPPER_BOUND2:
        return bytes(
            (
                _COUNT2_VALUE | ((code_point >> 6) & (~_COUNT2_MASK & 0xFF)),
                _continuation(code_point),
            )
        )
    if code_point <= _UPPER_BOUND3:
        return bytes(
            (
                _COUNT3_VALUE | ((code_point >> 12) & (~_COUNT3_MASK & 0xFF)),
                _continuation(code_point >> 6),
                _continuation(code_point),
            )
        )
    if code_point <= MAX_CODE_POINT:
        return bytes(
            (
                _COUNT4_VALUE | ((code_point >> 18) & (~_COUNT4_MASK & 0xFF)),
                _continuation(code_point >> 12),
                _continuation(code_point >> 6),
                _continuation(code_point),
            )
        )
    return b""


def _sequence_size(lead: int) -> Optional[int]:
    if lead & _COUNT1_MASK == _COUNT1_VALUE:
        return 1
    if lead & _COUNT2_MASK == _COUNT2_VALUE:
        return 2
    if lead & _COUNT3_MASK == _COUNT3_VALUE:
        return 3
    if lead & _COUNT4_MASK == _COUNT4_VALUE:
        return 4
    return None


def decode(data, offset: int = 0) -> tuple[int, int]:
    """Decode the code point starting at ``offset``.

    Returns ``(code_point, size)`` where ``size`` is the number of bytes the
    sequence occupies. A lead byte that is not a 1, 2 or 3 byte lead is read
    as the start of a 4 byte sequence.
    """
    buf = _as_bytes(data)
    if not 0 <= offset < len(buf):
        raise IndexError(f"offset {offset} is outside data of size {len(buf)}")

    lead = buf[offset]
    if lead & _COUNT1_MASK == _COUNT1_VALUE:
        size, lead_mask = 1, ~_COUNT1_MASK & 0xFF
    elif lead & _COUNT2_MASK == _COUNT2_VALUE:
        size, lead_mask = 2, ~_COUNT2_MASK & 0xFF
    elif lead & _COUNT3_MASK == _COUNT3_VALUE:
        size, lead_mask = 3, ~_COUNT3_MASK & 0xFF
    else:
        size, lead_mask = 4, ~_COUNT4_MASK & 0xFF

    if offset + size > len(buf):
        raise ValueError(
            f"truncated UTF-8 sequence at offset {offset}: "
            f"needs {size} bytes, {len(buf) - offset} available"
        )

    code_point = lead & lead_mask
    for byte in buf[offset + 1 : offset + size]:
        code_point = (code_point << 6) | (byte & _PAYLOAD_MASK)
    return code_point, size


def validate(data, offset: int = 0) -> Optional[int]:
    """Return the sequence size announced by the byte at ``offset``.

    Returns ``None`` when that byte is a continuation byte or otherwise cannot
    start a sequence.
    """
    buf = _as_bytes(data)
    if not 0 <= offset < len(buf):
        raise IndexError(f"offset {offset} is outside data of size {len(buf)}")
    return _sequence_size(buf[offset])