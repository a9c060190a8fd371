from __future__ import annotations
import ipaddress
import logging
import idna
from .charsets import LABEL_SEPARATORS, index_any, sorted_label_separators, sorted_whitespace, trim

log = logging.getLogger(__name__)

_SEPARATOR_TABLE = str.maketrans({c: "." for c in LABEL_SEPARATORS if c != "."})


def replace_label_separators(s: str) -> str:
    """Replace the internationalised full stops with '.'."""
    return s.translate(_SEPARATOR_TABLE)


def trim_whitespace(s: str) -> str:
    return trim(s, sorted_whitespace)


def to_punycode(label: str) -> str:
    """
    Convert a single label to its ASCII-compatible form.

    ASCII labels are returned untouched. Returns "" if the label cannot be
    encoded; the error is logged, not raised.
    """
    if not label or label.isascii():
        return label
    try:
        return idna.encode(label, uts46=True).decode("ascii")
    except (idna.IDNAError, UnicodeError) as e:
        log.warning("Cannot convert label to punycode: %s", str(e).split(" at position", 1)[0])
        return ""


def to_punycode_host(host: str) -> str:
    """Convert every label of host; "" if any label fails."""
    out = []
    for label in replace_label_separators(host).split("."):
        converted = to_punycode(label)
        if label and not converted:
            return ""
        out.append(converted)
    return ".".join(out)


def split_label_spans(host: str) -> list[tuple[int, int]]:
    """(start, end) of every label in host, split on any label separator."""
    spans = []
    start = 0
    while True:
        i = index_any(host[start:], sorted_label_separators)
        if i == -1:
            spans.append((start, len(host)))
            return spans
        spans.append((start, start + i))
        start += i + 1


def looks_like_ipv4(host: str) -> bool:
    """Four dot-separated decimal fields, each 0-255."""
    parts = replace_label_separators(host).split(".")
    if len(parts) != 4:
        return False
    for part in parts:
        if not (1 <= len(part) <= 3) or not (part.isascii() and part.isdigit()):
            return False
        if int(part) > 255:
            return False
    return True


def looks_like_ipv6(host: str) -> bool:
    try:
        ipaddress.IPv6Address(host)
    except ValueError:
        return False
    return True
