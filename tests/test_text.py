import pytest

from dckit import utf8
from dckit.text import String, StringView, Utf8Iterator

LOREM_IPSUM = (
    "Lorem ipsum dolor sit amet, consectetur adipisicing elit, sed do eiusmod "
    "tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim "
    "veniam, quis nostrud exercitation ullamco laboris nisi ut aliquip ex ea "
    "commodo consequat. Duis aute irure dolor in reprehenderit in voluptate "
    "velit esse cillum dolore eu fugiat nulla pariatur. Excepteur sint "
    "occaecat cupidatat non proident, sunt in culpa qui officia deserunt "
    "mollit anim id est laborum."
)

FIRE = 0x1F525
OMEGA = 0x1F68
Z_STROKE = 0x01B5


def _mixed_string() -> String:
    text = String()
    for cp in (FIRE, ord(" "), OMEGA, ord(" "), Z_STROKE):
        text.append(utf8.encode(cp))
    return text


###############################################################################
# Iterator


def test_utf8_iterator_end_comparison():
    data = bytes(String("abc"))
    before_begin = Utf8Iterator(data, -1)
    begin = Utf8Iterator(data, 0)
    end = Utf8Iterator(data, 3)

    assert (begin == before_begin) is False
    assert (begin == end) is False
    assert (before_begin == end) is False
    assert before_begin == Utf8Iterator(data, -1)


def test_utf8_iterator_can_increment_to_end():
    data = bytes(String("abc"))
    it = Utf8Iterator(data, 0)
    end = Utf8Iterator(data, 3)

    for expected in "abc":
        assert it != end
        assert it.code_point() == ord(expected)
        it.advance()
    assert it == end


def test_utf8_iterator_can_decrement_to_before_begin():
    data = bytes(String("abc"))
    it = Utf8Iterator(data, 2)
    before_begin = Utf8Iterator(data, -1)

    for expected in "cba":
        assert it != before_begin
        assert it.code_point() == ord(expected)
        it.retreat()
    assert it == before_begin


def test_utf8_iterator_increment_with_large_characters():
    data = bytes(_mixed_string())
    it = Utf8Iterator(data, 0)
    end = Utf8Iterator(data, len(data))

    for expected in (FIRE, ord(" "), OMEGA, ord(" "), Z_STROKE):
        assert it != end
        assert it.code_point() == expected
        it.advance()
    assert it == end


def test_utf8_iterator_decrement_with_large_characters():
    data = bytes(_mixed_string())
    it = Utf8Iterator(data, len(data))
    before_begin = Utf8Iterator(data, -1)

    for expected in (Z_STROKE, ord(" "), OMEGA, ord(" "), FIRE):
        it.retreat()
        assert it != before_begin
        assert it.code_point() == expected
    it.retreat()
    assert it == before_begin


def test_utf8_iterator_code_point_outside_raises():
    it = Utf8Iterator(b"abc", -1)
    assert it.has_valid_offset() is False
    with pytest.raises(IndexError):
        it.code_point()


###############################################################################
# StringView


def test_string_view_from_string():
    text = String("runtime length")
    view = text.view()
    assert len(view) == len(text) == len("runtime length")
    assert bytes(view) == b"runtime length"


def test_string_view_constructed_from_string():
    text = String("Hello World")
    view = StringView(text)
    assert len(view) == len(text)
    assert bytes(view) == bytes(text) == b"Hello World"


def test_string_constructed_from_string_view():
    view = StringView("Test String")
    text = String(view)
    assert len(text) == len(view)
    assert bytes(text) == b"Test String"


def test_string_view_round_trip():
    original = String("Round Trip Test")
    copied = String(StringView(original))
    assert copied == original
    assert len(copied) == len(original)


def test_string_utf8_iteration():
    text = String()
    text += 0xC6
    text += 0xB5
    text += 0xE1
    text += 0xBD
    text += 0xA8
    text += "x"
    assert list(text.code_points()) == [Z_STROKE, OMEGA, ord("x")]
    assert list(Utf8Iterator(text)) == [Z_STROKE, OMEGA, ord("x")]


def test_string_view_substring():
    view = StringView("Hello World")
    assert view.substring(0, 5) == b"Hello"
    assert view.substring(6, 5) == b"World"
    whole = view.substring(0, 100)
    assert len(whole) == len(view)
    assert whole == "Hello World"


def test_string_view_substring_offset_past_end_raises():
    with pytest.raises(IndexError):
        StringView("abc").substring(4, 1)


def test_string_view_getitem():
    view = StringView("abc")
    assert view[1] == ord("b")
    assert view[1:] == "bc"


###############################################################################
# String


def test_empty():
    assert String("").is_empty() is True


def test_not_empty():
    assert String("abc").is_empty() is False


def test_empty_after_being_big_string():
    text = String("123456789.123456789.123456789.123456789.123456789")
    assert text.is_empty() is False
    text.assign("")
    assert text.is_empty() is True


def test_clone():
    original = String("friday")
    copy = original.clone()
    assert copy == original
    copy += "!"
    assert original == "friday"


def test_size():
    assert len(String("123")) == 3
    assert len(String()) == 0
    assert len(String("")) == 0


def test_size_when_big_string():
    literal = "abc, abc, abc, abc, abc, abc, "
    assert len(String(literal)) == len(literal)


def test_substring():
    text = String("Hello World")
    first = text.substring(0, 5)
    assert len(first) == 5
    assert first == "Hello"
    second = text.substring(6, 5)
    assert len(second) == 5
    assert second == "World"
    whole = text.substring(0, 100)
    assert len(whole) == len(text)
    assert whole == "Hello World"


def test_string_assigned_from_string_view():
    view = StringView("Test String")
    text = String()
    text.assign(view)
    assert len(text) == len(view)
    assert text == "Test String"


def test_string_assigned_from_string_view_overwrites():
    text = String("Original")
    view = StringView("New String")
    text.assign(view)
    assert len(text) == len(view)
    assert text == "New String"


def test_iteration_count_matches_length():
    text = String("The quick brown fox jumps over the fence.")
    assert sum(1 for _ in text.code_points()) == text.length()


def test_length_of_one_byte_code_points():
    text = String("abc")
    assert text.length() == 3
    assert len(text) == 3


def test_length_of_multi_byte_code_point():
    text = String()
    for byte in (0xF0, 0x9F, 0x94, 0xA5):
        text += byte
    assert text.length() == 1
    assert len(text) == 4


def test_append_small_to_big():
    text = String("small")
    text += " The quick brown fox jumps over the fence."
    assert text == "small The quick brown fox jumps over the fence."


def test_insert_in_middle_of_string():
    text = String("Hellx World")
    text.insert("o", 4)
    assert text == "Hello World"


def test_insert_makes_string_grow():
    text = String("The ...")
    text.insert("quick brown fox jumped over the fence.", 4)
    assert text == "The quick brown fox jumped over the fence."


def test_insert_past_end_raises():
    with pytest.raises(IndexError):
        String("abc").insert("x", 4)


def test_resize():
    text = String()
    for size in range(100):
        assert text.resize(size) == size
        assert len(text) == size
    for size in range(99, 0, -1):
        text.resize(size)
        assert len(text) == size


def test_append_chain():
    text = String()
    text += "str"
    assert text == "str"
    text += " a"
    assert text == "str a"
    text += " b"
    assert text == "str a b"


def test_construct_string_from_byte_buffer():
    buffer = bytearray(LOREM_IPSUM.encode())
    text = String(buffer)
    assert text == StringView(LOREM_IPSUM)


def test_ends_with():
    assert String("line\n").ends_with("\n") is True
    assert String("line").ends_with("\n") is False
    assert String("").ends_with("a") is False


def test_setitem_and_getitem():
    text = String("abc")
    text[0] = "x"
    text[2] = ord("z")
    assert text == "xbz"
    assert text[1] == ord("b")


###############################################################################
# Find


@pytest.mark.parametrize(
    ("text", "pattern", "expected"),
    [
        ("Hello World", "World", 6),
        ("Hello World", "Hello", 0),
        ("Hello World", "Python", None),
        ("Hello World", "", None),
        ("", "Hello", None),
        ("Hi", "Hello World", None),
        ("abcabcabc", "abc", 0),
        ("Hello World", "W", 6),
        ("Hello World", "Hello World", 0),
        ("The quick brown fox jumps over the lazy dog", "fox", 16),
        ("aaaaa", "aa", 0),
    ],
)
def test_find(text, pattern, expected):
    assert String(text).find(pattern) == expected
    assert StringView(text).find(pattern) == expected


def test_find_with_utf8_characters():
    text = String(utf8.encode(FIRE))
    text += "abc"
    text.append(utf8.encode(FIRE))
    pattern = String(utf8.encode(FIRE))
    pattern += "abc"
    assert text.find(pattern.view()) == 0


def test_find_utf8_pattern_in_middle():
    text = String("Hello ")
    text.append(utf8.encode(FIRE))
    text += " World"
    assert text.find(String(utf8.encode(FIRE)).view()) == 6


def test_find_pattern_not_in_utf8_string():
    text = String(utf8.encode(FIRE))
    text += "abc"
    assert text.find(String(utf8.encode(OMEGA)).view()) is None


@pytest.mark.parametrize(
    ("text", "pattern", "offset", "expected"),
    [
        ("Hello World Hello World", "World", 10, 18),
        ("Hello World", "Hello", 5, None),
        ("Hello World", "World", 20, None),
        ("Hello World", "World", 0, 6),
        ("abcabcabc", "abc", 3, 3),
        ("Hello World", "World", 6, 6),
    ],
)
def test_find_with_offset(text, pattern, offset, expected):
    assert String(text).find(pattern, offset) == expected
    assert StringView(text).find(pattern, offset) == expected


@pytest.mark.parametrize(
    ("text", "byte", "offset", "expected"),
    [
        ("Hello World", "W", 0, 6),
        ("Hello World", "z", 0, None),
        ("Hello World", "o", 5, 7),
        ("Hello World", "H", 1, None),
        ("Hello World", "H", 20, None),
        ("aaa", "a", 0, 0),
        ("aaa", "a", 1, 1),
        ("", "a", 0, None),
    ],
)
def test_find_byte(text, byte, offset, expected):
    assert String(text).find_byte(byte, offset) == expected
    assert StringView(text).find_byte(byte, offset) == expected


def test_find_byte_rejects_multi_byte_value():
    with pytest.raises(ValueError):
        String("abc").find_byte("ab")


###############################################################################
# Growth


def test_resize_preserves_content():
    text = String("small")
    text.resize(500)
    assert len(text) == 500
    assert bytes(text).startswith(b"small")


def test_resize_to_100_preserves_content():
    text = String("preserve")
    text.resize(100)
    assert len(text) == 100
    assert text.substring(0, 8) == "preserve"


def test_append_long_text():
    text = String("start")
    text += " and this is a very long string that will cause reallocation to happen"
    assert text == (
        "start and this is a very long string that will cause reallocation to happen"
    )


def test_insert_long_text():
    text = String("beginning end")
    text.insert("middle middle middle middle middle middle middle ", 9)
    assert text == "beginningmiddle middle middle middle middle middle middle "


def test_resize_multiple_times():
    text = String("base")
    for _ in range(10):
        previous = len(text)
        text.resize(previous + 100)
        assert len(text) == previous + 100
    assert text.substring(0, 4) == "base"


def test_resize_with_utf8_characters():
    text = String()
    for cp in (FIRE, ord(" "), OMEGA):
        text.append(utf8.encode(cp))
    assert len(text) == 8
    assert text.length() == 3

    text.resize(1000)
    assert len(text) == 1000
    assert utf8.decode(bytes(text), 0) == (FIRE, 4)
    assert utf8.decode(bytes(text), 5) == (OMEGA, 3)


def test_resize_after_assignment():
    text = String("short")
    text.assign("")
    assert text.is_empty()
    text.resize(200)
    assert len(text) == 200