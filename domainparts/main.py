from __future__ import annotations
import argparse
import json
import logging
import sys
from .config import Config
from .errors import DomainPartsError
from .extractor import DomainExtractor, ExtractResult
from .logging_setup import setup_logging

FIELDS = ("scheme", "userinfo", "subdomain", "domain", "suffix", "port", "path")


def format_result(res: ExtractResult, as_json: bool = False) -> str:
    """
    One output line per result. Undecodable input bytes, carried as surrogate
    escapes, are printed as \\u escapes in both modes.
    """
    if as_json:
        return json.dumps(res.to_dict())
    parts = [f"{name}={getattr(res, name)}" for name in FIELDS if getattr(res, name)]
    if res.is_ipv4:
        parts.append(f"ipv4={res.host}")
    if res.is_ipv6:
        parts.append(f"ipv6={res.host}")
    line = " ".join(parts)
    return line.encode("utf-8", errors="backslashreplace").decode("utf-8")


def _read_urls(stream):
    # raw bytes when available, so invalid UTF-8 reaches extract() as bytes
    stream = getattr(stream, "buffer", stream)
    return [line.strip() for line in stream if line.strip()]


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog="domainparts",
                                 description="Split URLs into subdomain, domain and public suffix")
    ap.add_argument("urls", nargs="*", help="URLs or hostnames (read from stdin when omitted)")
    ap.add_argument("--config", help="Path to config.yaml")
    ap.add_argument("--update", action="store_true", help="Refresh the cached public suffix list first")
    ap.add_argument("--json", action="store_true", help="Print one JSON object per URL")
    ap.add_argument("--ignore-subdomains", action="store_true")
    ap.add_argument("--punycode", action="store_true", help="Convert internationalised hosts to punycode")
    args = ap.parse_args(argv)

    cfg = Config.load(args.config) if args.config else Config({"logging": {"level": "WARNING"}})
    setup_logging(cfg.data)
    log = logging.getLogger(__name__)

    try:
        ex_cfg = cfg.extract
        extractor = DomainExtractor.from_config(cfg)
        if args.update:
            extractor.update()
    except DomainPartsError as e:
        log.error("Cannot load public suffix list: %s", e)
        return 1

    urls = args.urls or _read_urls(sys.stdin)
    for url in urls:
        res = extractor.extract(
            url,
            ignore_subdomains=args.ignore_subdomains or bool(ex_cfg.get("ignore_subdomains", False)),
            convert_to_punycode=args.punycode or bool(ex_cfg.get("punycode", False)),
        )
        print(format_result(res, args.json))
    return 0


if __name__ == "__main__":
    sys.exit(main())
