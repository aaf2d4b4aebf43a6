"""Byte strings holding UTF-8 text: a read-only view, a mutable string and a
code point iterator.

Sizes and offsets are counted in bytes; ``length()`` counts code points.
"""

from __future__ import annotations

from typing import Iterator, Optional, Union

from dckit import utf8

__all__ = ["Utf8Iterator", "StringView", "String"]

TextLike = Union[str, bytes, bytearray, memoryview, "StringView", "String"]


def _to_bytes(data) -> bytes:
    """Return the raw bytes of any text-like value; ``str`` is UTF-8 encoded."""
    if isinstance(data, str):
        return data.encode("utf-8")
    if isinstance(data, (bytes, bytearray, memoryview, StringView, String)):
        return bytes(data)
    raise TypeError(f"cannot use {type(data).__name__} as text")


def _to_byte(byte) -> int:
    """Return a single byte value from an int, a one-byte bytes or a one-char str."""
    if isinstance(byte, int):
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"value is not a byte: {byte}")
        return byte
    raw = _to_bytes(byte)
    if len(raw) != 1:
        raise ValueError(f"expected exactly one byte, got {len(raw)}")
    return raw[0]


def _count_code_points(data: bytes) -> int:
    return sum(1 for _ in Utf8Iterator(data))


def _bad_character_search(text: bytes, pattern: bytes, start: int) -> Optional[int]:
    """Boyer-Moore search using the bad character rule only."""
    pattern_size = len(pattern)
    text_size = len(text)
    last_seen = {byte: index for index, byte in enumerate(pattern)}

    shift = start
    while shift <= text_size - pattern_size:
        j = pattern_size - 1
        while j >= 0 and pattern[j] == text[shift + j]:
            j -= 1
        if j < 0:
            return shift
        shift += max(1, j - last_seen.get(text[shift + j], -1))
    return None


def _find(text: bytes, pattern, offset: int) -> Optional[int]:
    needle = _to_bytes(pattern)
    if offset < 0:
        raise ValueError(f"offset cannot be negative: {offset}")
    if not needle or not text or len(needle) > len(text):
        return None
    if offset >= len(text):
        return None
    if len(needle) > len(text) - offset:
        return None
    return _bad_character_search(text, needle, offset)


def _find_byte(text: bytes, byte, offset: int) -> Optional[int]:
    value = _to_byte(byte)
    if offset < 0:
        raise ValueError(f"offset cannot be negative: {offset}")
    if offset >= len(text):
        return None
    found = text.find(value, offset)
    return None if found < 0 else found


def _clamped_range(size: int, offset: int, count: int) -> tuple[int, int]:
    if offset < 0 or offset > size:
        raise IndexError(f"offset {offset} is outside text of size {size}")
    if count < 0:
        raise ValueError(f"count cannot be negative: {count}")
    return offset, offset + min(count, size - offset)


###############################################################################
# Iterator
#


class Utf8Iterator:
    """Cursor over the code points of UTF-8 encoded bytes.

    The offset may sit one before the start (-1) or at the end of the data;
    only offsets inside the data refer to a code point.
    """

    def __init__(self, data, offset: int = 0) -> None:
        self._data = _to_bytes(data)
        self.offset = offset

    def __iter__(self) -> Iterator[int]:
        """Yield every code point from the start of the data to its end."""
        offset = 0
        while offset < len(self._data):
            code_point, size = utf8.decode(self._data, offset)
            yield code_point
            offset += size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Utf8Iterator):
            return NotImplemented
        same_data = self._data is other._data or self._data == other._data
        return (
            same_data
            and self.has_valid_offset() == other.has_valid_offset()
            and self.offset == other.offset
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Utf8Iterator(offset={self.offset}, size={len(self._data)})"

    def code_point(self) -> int:
        """Return the code point at the current offset."""
        if not self.has_valid_offset():
            raise IndexError(
                f"offset {self.offset} is outside data of size {len(self._data)}"
            )
        code_point, _ = utf8.decode(self._data, self.offset)
        return code_point

    def advance(self) -> "Utf8Iterator":
        """Move to the next code point."""
        _, size = utf8.decode(self._data, self.offset)
        self.offset += size
        return self

    def retreat(self) -> "Utf8Iterator":
        """Move to the previous code point, or to -1 from the first one."""
        size: Optional[int] = None
        start = min(self.offset, len(self._data)) - 1
        for position in range(start, -1, -1):
            size = utf8.validate(self._data, position)
            if size is not None:
                break
        self.offset -= size if size is not None else 1
        return self

    def has_valid_offset(self) -> bool:
        return 0 <= self.offset < len(self._data)


###############################################################################
# String view
#


class StringView:
    """Immutable UTF-8 byte text."""

    __slots__ = ("_data",)

    def __init__(self, data: TextLike = b"") -> None:
        self._data = _to_bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, pos):
        if isinstance(pos, slice):
            return StringView(self._data[pos])
        return self._data[pos]

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        try:
            return self._data == _to_bytes(other)
        except TypeError:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"StringView({self._data!r})"

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def length(self) -> int:
        """Number of code points."""
        return _count_code_points(self._data)

    def code_points(self) -> Iterator[int]:
        return iter(Utf8Iterator(self._data))

    def substring(self, offset: int, count: int) -> "StringView":
        """Return up to ``count`` bytes starting at ``offset``."""
        begin, end = _clamped_range(len(self._data), offset, count)
        return StringView(self._data[begin:end])

    def find(self, pattern: TextLike, offset: int = 0) -> Optional[int]:
        """Byte position of the first ``pattern`` at or after ``offset``."""
        return _find(self._data, pattern, offset)

    def find_byte(self, byte, offset: int = 0) -> Optional[int]:
        """Byte position of the first ``byte`` at or after ``offset``."""
        return _find_byte(self._data, byte, offset)


###############################################################################
# String
#


class String:
    """Mutable UTF-8 byte text."""

    def __init__(self, data: TextLike = b"") -> None:
        self._data = bytearray(_to_bytes(data))

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, pos):
        if isinstance(pos, slice):
            return String(bytes(self._data[pos]))
        return self._data[pos]

    def __setitem__(self, pos: int, value) -> None:
        self._data[pos] = _to_byte(value)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __eq__(self, other: object) -> bool:
        try:
            return self._data == _to_bytes(other)
        except TypeError:
            return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __iadd__(self, other) -> "String":
        if isinstance(other, int):
            self._data.append(_to_byte(other))
        else:
            self.append(other)
        return self

    def __repr__(self) -> str:
        return f"String({bytes(self._data)!r})"

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def clone(self) -> "String":
        return String(bytes(self._data))

    def view(self) -> StringView:
        return StringView(bytes(self._data))

    def length(self) -> int:
        """Number of code points."""
        return _count_code_points(bytes(self._data))

    def code_points(self) -> Iterator[int]:
        return iter(Utf8Iterator(bytes(self._data)))

    def is_empty(self) -> bool:
        return not self._data

    def assign(self, data: TextLike) -> None:
        """Replace the whole content."""
        self._data[:] = _to_bytes(data)

    def append(self, data: TextLike) -> None:
        self._data.extend(_to_bytes(data))

    def insert(self, data: TextLike, offset: int) -> None:
        """Write ``data`` at ``offset``, overwriting and growing as needed."""
        raw = _to_bytes(data)
        if offset < 0 or offset > len(self._data):
            raise IndexError(
                f"offset {offset} is larger than the size {len(self._data)}"
            )
        self._data[offset : offset + len(raw)] = raw

    def resize(self, size: int) -> int:
        """Truncate or zero-pad to ``size`` bytes; returns the new size."""
        if size < 0:
            raise ValueError(f"size cannot be negative: {size}")
        if size < len(self._data):
            del self._data[size:]
        else:
            self._data.extend(bytes(size - len(self._data)))
        return len(self._data)

    def find(self, pattern: TextLike, offset: int = 0) -> Optional[int]:
        """Byte position of the first ``pattern`` at or after ``offset``."""
        return _find(bytes(self._data), pattern, offset)

    def find_byte(self, byte, offset: int = 0) -> Optional[int]:
        """Byte position of the first ``byte`` at or after ``offset``."""
        return _find_byte(bytes(self._data), byte, offset)

    def substring(self, offset: int, count: int) -> "String":
        """Return up to ``count`` bytes starting at ``offset``."""
        begin, end = _clamped_range(len(self._data), offset, count)
        return String(bytes(self._data[begin:end]))

    def ends_with(self, byte) -> bool:
        value = _to_byte(byte)
        return bool(self._data) and self._data[-1] == value