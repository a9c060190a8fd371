from __future__ import annotations
import logging
import threading
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Sequence, Union
from .charsets import (
    end_of_host_delimiters_set,
    end_of_host_with_port_delimiters_set,
    index_any_ascii,
    index_last_byte_before,
    invalid_userinfo_chars_set,
    sorted_label_separators,
)
from .config import Config
from .errors import SuffixListConfigError, SuffixListError
from .normalize import (
    looks_like_ipv4,
    looks_like_ipv6,
    split_label_spans,
    to_punycode_host,
    trim_whitespace,
)
from .scheme import scheme_end_index, scheme_name
from .suffix_list import (
    DEFAULT_CACHE_FILE,
    PUBLIC_SUFFIX_LIST_URLS,
    download_suffix_list,
    read_cache,
    write_cache,
)
from .trie import SuffixTrie

log = logging.getLogger(__name__)


@dataclass
class ExtractResult:
    """Components of a URL or host. Any field may be empty."""
    scheme: str = ""
    userinfo: str = ""
    subdomain: str = ""
    domain: str = ""
    suffix: str = ""
    registered_domain: str = ""
    port: str = ""
    path: str = ""
    host: str = ""
    is_ipv4: bool = False
    is_ipv6: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


class DomainExtractor:
    """
    Splits URLs into scheme, userinfo, subdomain, domain, suffix, port and path
    using the Public Suffix List.

    The list comes from one of three places:

    * ``suffix_list_text``: rules given directly, never refreshed;
    * ``custom_file``: a local list file, never refreshed;
    * otherwise the cache file, downloaded from ``urls`` when missing and
      refreshed by :meth:`update`.
    """

    def __init__(self,
                 cache_file: Union[str, Path, None] = None,
                 include_private: bool = True,
                 *,
                 custom_file: Union[str, Path, None] = None,
                 suffix_list_text: Optional[str] = None,
                 urls: Sequence[str] = PUBLIC_SUFFIX_LIST_URLS,
                 timeout: int = 30,
                 detect_ipv4: bool = True,
                 parse_ports: bool = True):
        self.include_private = include_private
        self.detect_ipv4 = detect_ipv4
        self.parse_ports = parse_ports
        self.urls = tuple(urls)
        self.timeout = timeout
        self.cache_file = Path(cache_file) if cache_file else DEFAULT_CACHE_FILE
        self.custom_file = Path(custom_file) if custom_file else None
        self.updatable = suffix_list_text is None and self.custom_file is None
        self._update_lock = threading.Lock()

        if suffix_list_text is not None:
            text = suffix_list_text
        elif self.custom_file is not None:
            text = read_cache(self.custom_file)
            if text is None:
                raise SuffixListError(f"suffix list file not found: {self.custom_file}")
        else:
            try:
                text = read_cache(self.cache_file)
            except SuffixListError as e:
                log.warning("Ignoring unusable suffix list cache %s: %s", self.cache_file, e)
                text = None
            if text is None:
                log.info("No cached suffix list at %s, downloading", self.cache_file)
                text = download_suffix_list(self.urls, self.timeout)
                self._save_cache(text)

        self._trie = SuffixTrie.from_text(text, include_private=include_private)
        if not len(self._trie):
            raise SuffixListError("suffix list contains no rules")

    @classmethod
    def from_config(cls, cfg: Config) -> "DomainExtractor":
        sl = cfg.suffix_list
        ex = cfg.extract
        return cls(
            cache_file=cfg.cache_file,
            include_private=bool(sl.get("include_private", True)),
            custom_file=cfg.custom_file,
            urls=sl.get("urls") or PUBLIC_SUFFIX_LIST_URLS,
            timeout=int(sl.get("timeout_seconds", 30)),
            detect_ipv4=bool(ex.get("detect_ipv4", True)),
            parse_ports=bool(ex.get("parse_ports", True)),
        )

    @property
    def trie(self) -> SuffixTrie:
        return self._trie

    def update(self) -> None:
        """Download the suffix list again and swap in a freshly built trie."""
        if not self.updatable:
            raise SuffixListConfigError("only a downloaded public suffix list can be updated")
        with self._update_lock:
            text = download_suffix_list(self.urls, self.timeout)
            trie = SuffixTrie.from_text(text, include_private=self.include_private)
            if not len(trie):
                raise SuffixListError("downloaded suffix list contains no rules")
            self._trie = trie
            log.info("Public suffix list updated (%d rules)", len(trie))
            self._save_cache(text)

    def _save_cache(self, text: str) -> None:
        try:
            write_cache(self.cache_file, text)
        except OSError:
            log.exception("Failed to save suffix list cache %s", self.cache_file)

    def extract(self, url: Union[str, bytes], *,
                ignore_subdomains: bool = False,
                convert_to_punycode: bool = False) -> ExtractResult:
        trie = self._trie
        res = ExtractResult()
        if isinstance(url, bytes):
            url = url.decode("utf-8", errors="surrogateescape")

        netloc = trim_whitespace(url)

        end = scheme_end_index(netloc)
        if end != -1:
            res.scheme = scheme_name(netloc[:end])
            netloc = netloc[end:]

        at = index_last_byte_before(netloc, "@", end_of_host_with_port_delimiters_set)
        if at != -1 and index_any_ascii(netloc[:at], invalid_userinfo_chars_set) == -1:
            res.userinfo = netloc[:at]
            netloc = netloc[at + 1:]

        bracketed = False
        if netloc.startswith("["):
            close = netloc.find("]")
            stop = index_any_ascii(netloc, end_of_host_with_port_delimiters_set)
            if close == -1 or (stop != -1 and stop < close):
                log.debug("Unterminated IPv6 literal in %r", url)
                return res
            host, rest = netloc[1:close], netloc[close + 1:]
            bracketed = True
        else:
            host_end = index_any_ascii(netloc, end_of_host_delimiters_set)
            if host_end == -1:
                host_end = len(netloc)
            host, rest = netloc[:host_end], netloc[host_end:]

        if rest.startswith(":"):
            port_end = index_any_ascii(rest, end_of_host_with_port_delimiters_set)
            if port_end == -1:
                port_end = len(rest)
            if self.parse_ports:
                res.port = rest[1:port_end]
            rest = rest[port_end:]
        res.path = rest

        if bracketed:
            res.host = host
            res.is_ipv6 = looks_like_ipv6(host)
            return res

        if self.detect_ipv4 and looks_like_ipv4(host):
            res.host = host
            res.is_ipv4 = True
            return res

        if convert_to_punycode:
            host = to_punycode_host(host)
        if host and host[-1] in sorted_label_separators:
            host = host[:-1]
        res.host = host
        if not host:
            return res

        spans = split_label_spans(host)
        labels = [host[s:e].lower() for s, e in spans]
        matched = trie.match(labels)

        if matched:
            suffix_start = spans[len(spans) - matched][0]
            res.suffix = host[suffix_start:]
            if matched == len(spans):
                return res
            domain_span = spans[len(spans) - matched - 1]
        else:
            domain_span = spans[-1]
        res.domain = host[domain_span[0]:domain_span[1]]
        if domain_span[0] > 0 and not ignore_subdomains:
            res.subdomain = host[:domain_span[0] - 1]
        if res.domain and res.suffix:
            res.registered_domain = f"{res.domain}.{res.suffix}"
        return res

    __call__ = extract
