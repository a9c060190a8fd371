from __future__ import annotations
from typing import Iterable, Tuple, Union

# Full stop and its IDNA equivalents (RFC 3490 section 3.1)
LABEL_SEPARATORS = "\u002e\u3002\uff0e\uff61"

WHITESPACE = " \t\n\v\f\r\ufeff\u200b\u200c\u200d\u00a0\u1680\u0085\u0000"

END_OF_HOST_WITH_PORT_DELIMITERS = "/\\?#"
END_OF_HOST_DELIMITERS = END_OF_HOST_WITH_PORT_DELIMITERS + ":"
INVALID_USERINFO_CHARS = END_OF_HOST_WITH_PORT_DELIMITERS + "[]"

SCHEME_FIRST_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
SCHEME_REMAINING_CHARS = SCHEME_FIRST_CHARS + "1234567890+-."


class ByteSet:
    """
    Immutable set of ASCII characters stored as eight 32-bit words.

    Only the lower four words are ever populated, so every code point >= 128
    tests false. Input is not validated: passing non-ASCII characters to the
    constructor is a programming error.
    """
    __slots__ = ("_words",)

    def __init__(self, chars: str):
        words = [0] * 8
        for c in chars:
            cp = ord(c)
            words[cp >> 5] |= 1 << (cp & 31)
        self._words: Tuple[int, ...] = tuple(words)

    def contains(self, c: Union[int, str]) -> bool:
        cp = c if isinstance(c, int) else ord(c)
        if cp < 0 or cp >= 128:
            return False
        return (self._words[cp >> 5] >> (cp & 31)) & 1 == 1

    __contains__ = contains

    def __repr__(self) -> str:
        members = "".join(chr(i) for i in range(128) if self.contains(i))
        return f"ByteSet({members!r})"


class SortedCodePoints:
    """Ascending tuple of distinct code points, searched with binary search."""
    __slots__ = ("points",)

    def __init__(self, chars: Iterable[str]):
        self.points: Tuple[int, ...] = tuple(sorted({ord(c) for c in chars}))

    def __len__(self) -> int:
        return len(self.points)

    def __contains__(self, c: str) -> bool:
        return code_point_binary_search(ord(c), self.points)


def code_point_binary_search(target: int, sorted_points: Tuple[int, ...]) -> bool:
    """True if target is in sorted_points (which must be ascending)."""
    low, high = 0, len(sorted_points) - 1
    while low <= high:
        median = (low + high) // 2
        if sorted_points[median] < target:
            low = median + 1
        else:
            high = median - 1
    return low != len(sorted_points) and sorted_points[low] == target


def index_any_ascii(s: str, chars: ByteSet) -> int:
    """Index of the first character of s found in chars, or -1."""
    for i, c in enumerate(s):
        if chars.contains(c):
            return i
    return -1


def index_any(s: str, chars: SortedCodePoints) -> int:
    """Index of the first code point of s found in chars, or -1."""
    points = chars.points
    for i, c in enumerate(s):
        if code_point_binary_search(ord(c), points):
            return i
    return -1


def last_index_any(s: str, chars: str) -> int:
    """Index of the last code point of s found in chars, or -1."""
    for i in range(len(s) - 1, -1, -1):
        if s[i] in chars:
            return i
    return -1


def index_last_byte_before(s: str, b: str, not_after: ByteSet) -> int:
    """
    Index of the last b in s that comes before every character of not_after.
    Returns -1 when there is none.
    """
    bound = index_any_ascii(s, not_after)
    if bound != -1:
        return s.rfind(b, 0, bound)
    return s.rfind(b)


def trim(s: str, chars: SortedCodePoints) -> str:
    """Strip leading and trailing members of chars from s."""
    start, end = 0, len(s)
    while start < end and s[start] in chars:
        start += 1
    while end > start and s[end - 1] in chars:
        end -= 1
    return s[start:end]


sorted_label_separators = SortedCodePoints(LABEL_SEPARATORS)
sorted_whitespace = SortedCodePoints(WHITESPACE)

end_of_host_with_port_delimiters_set = ByteSet(END_OF_HOST_WITH_PORT_DELIMITERS)
end_of_host_delimiters_set = ByteSet(END_OF_HOST_DELIMITERS)
invalid_userinfo_chars_set = ByteSet(INVALID_USERINFO_CHARS)
scheme_first_char_set = ByteSet(SCHEME_FIRST_CHARS)
scheme_remaining_char_set = ByteSet(SCHEME_REMAINING_CHARS)
