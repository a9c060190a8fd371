from __future__ import annotations
from .charsets import scheme_first_char_set, scheme_remaining_char_set

_SLASHES = ("/", "\\")


def scheme_end_index(s: str) -> int:
    """
    Return the index just past a leading URL scheme in s, or -1 if s does not
    start with one.

    Accepted shapes are `name:` followed by two or more slashes, or two or more
    slashes on their own ("//host"). Backslashes count as slashes.
    """
    colon = False
    slash_count = 0

    for i, c in enumerate(s):
        if i == 0:
            if scheme_first_char_set.contains(c):
                continue
            if c in _SLASHES:
                slash_count += 1
                continue
            return -1
        # still reading the scheme name (or the colon after it)
        if slash_count == 0:
            if not colon:
                if scheme_remaining_char_set.contains(c):
                    continue
                if c == ":":
                    colon = True
                    continue
            if c in _SLASHES:
                slash_count += 1
                continue
            return -1
        # only slashes from here on
        if c in _SLASHES:
            slash_count += 1
            continue
        if slash_count < 2:
            return -1
        return i

    if slash_count >= 2:
        return len(s)
    return -1


def scheme_name(prefix: str) -> str:
    """'HTTPS://' -> 'https'; '//' -> ''."""
    return prefix.rstrip("/\\").rstrip(":").lower()
