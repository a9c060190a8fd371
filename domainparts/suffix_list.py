from __future__ import annotations
import logging
import requests
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence
from .errors import SuffixListDownloadError, SuffixListError

log = logging.getLogger(__name__)

PUBLIC_SUFFIX_LIST_URLS = (
    "https://publicsuffix.org/list/public_suffix_list.dat",
    "https://raw.githubusercontent.com/publicsuffix/list/master/public_suffix_list.dat",
)

DEFAULT_CACHE_FILE = Path.home() / ".cache" / "domainparts" / "public_suffix_list.dat"

BEGIN_ICANN = "===BEGIN ICANN DOMAINS==="
END_ICANN = "===END ICANN DOMAINS==="
BEGIN_PRIVATE = "===BEGIN PRIVATE DOMAINS==="
END_PRIVATE = "===END PRIVATE DOMAINS==="

# marker -> section entered (None leaves the current section)
SECTION_MARKERS = {
    BEGIN_ICANN: "icann",
    END_ICANN: None,
    BEGIN_PRIVATE: "private",
    END_PRIVATE: None,
}


@dataclass
class SuffixLists:
    icann: List[str] = field(default_factory=list)
    private: List[str] = field(default_factory=list)
    all: List[str] = field(default_factory=list)


def _section_marker(comment: str) -> Optional[str]:
    for marker in SECTION_MARKERS:
        if marker in comment:
            return marker
    return None


def parse_suffix_lists(text: str) -> SuffixLists:
    """
    Split public suffix list text into ICANN, private and combined rule lists.

    Both the ICANN and PRIVATE DOMAINS markers are recognized. Rules outside
    any section count as ICANN rules, so a list without markers is entirely
    ICANN.
    """
    lists = SuffixLists()
    section = None
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        if line.startswith("//"):
            marker = _section_marker(line)
            if marker:
                section = SECTION_MARKERS[marker]
            continue
        rule = line.split()[0]
        (lists.private if section == "private" else lists.icann).append(rule)
        lists.all.append(rule)
    log.debug("Parsed suffix list: icann=%d private=%d", len(lists.icann), len(lists.private))
    return lists


def download_file(url: str, timeout: int = 30) -> bytes:
    """GET url and return the body; b"" on any request failure or non-2xx status."""
    log.debug("Downloading %s (timeout=%ss)", url, timeout)
    try:
        resp = requests.get(url, timeout=timeout)
        log.debug("Download response: url=%s status=%s", url, resp.status_code)
        resp.raise_for_status()
    except Exception as e:
        log.warning("Download failed for %s: %s", url, e)
        return b""
    return resp.content


def download_suffix_list(urls: Sequence[str] = PUBLIC_SUFFIX_LIST_URLS, timeout: int = 30) -> str:
    """Return the text of the first URL that answers with a non-empty body."""
    for url in urls:
        body = download_file(url, timeout)
        if body:
            log.info("Fetched public suffix list from %s (bytes=%d)", url, len(body))
            return body.decode("utf-8", errors="replace")
    log.error("Public suffix list unavailable from all mirrors: %s", ", ".join(urls))
    raise SuffixListDownloadError(f"public suffix list unavailable from {list(urls)}")


def read_cache(path: str | Path) -> Optional[str]:
    """
    Return the list text stored at path, or None when the file does not exist.

    An unreadable or non UTF-8 file raises SuffixListError.
    """
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except FileNotFoundError:
        log.debug("Suffix list cache not found: %s", p)
        return None
    except (OSError, UnicodeDecodeError) as e:
        log.exception("Failed to read suffix list file %s", p)
        raise SuffixListError(f"cannot read suffix list file {p}: {e}") from e


def write_cache(path: str | Path, text: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")
    tmp.write_text(text, encoding="utf-8")
    tmp.replace(p)
    log.info("Saved public suffix list cache: %s (bytes=%s)", p, p.stat().st_size)
