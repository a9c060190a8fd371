# tests/conftest.py
from __future__ import annotations
from pathlib import Path
import types
import json
import pytest

from domainparts.config import Config
from domainparts.extractor import DomainExtractor

PSL_URL = "https://psl.example.test/public_suffix_list.dat"

MINI_PSL = """\
// This Source Code Form is subject to the terms of the Mozilla Public
// License, v. 2.0.

// ===BEGIN ICANN DOMAINS===

// ac : https://en.wikipedia.org/wiki/.ac
ac
com.ac
edu.ac
gov.ac
net.ac
mil.ac
org.ac

// ck : https://en.wikipedia.org/wiki/.ck
*.ck
!www.ck

com
net
uk
co.uk
org.uk

// jp
jp
kawasaki.jp
*.kawasaki.jp
!city.kawasaki.jp

// cn
cn
公司.cn

// ===END ICANN DOMAINS===
// ===BEGIN PRIVATE DOMAINS===

// Google, Inc.
blogspot.com
appspot.com

// ===END PRIVATE DOMAINS===
"""

MINI_PSL_NO_MARKERS = """\
ac
com.ac
edu.ac
gov.ac
net.ac
mil.ac
org.ac
*.ck
!www.ck
"""


@pytest.fixture
def psl_text() -> str:
    return MINI_PSL


@pytest.fixture
def psl_text_no_markers() -> str:
    return MINI_PSL_NO_MARKERS


@pytest.fixture
def psl_file(tmp_path) -> Path:
    p = tmp_path / "mini_public_suffix_list.dat"
    p.write_text(MINI_PSL, encoding="utf-8")
    return p


@pytest.fixture
def tmp_config(tmp_path, psl_file) -> Config:
    cfg = {
        "suffix_list": {
            "cache_file": str(tmp_path / "cache" / "public_suffix_list.dat"),
            "custom_file": str(psl_file),
            "urls": [PSL_URL],
            "timeout_seconds": 5,
            "include_private": True,
        },
        "extract": {
            "detect_ipv4": True,
            "parse_ports": True,
            "ignore_subdomains": False,
            "punycode": False,
        },
        "logging": {"level": "DEBUG", "console": True},
        "web": {
            "host": "127.0.0.1",
            "port": 8091,
            "basic_auth": {"enabled": False},
        },
    }
    return Config(cfg)


@pytest.fixture
def extractor(psl_text) -> DomainExtractor:
    return DomainExtractor(suffix_list_text=psl_text)


# --- Simple fake response object for requests.get ---
class FakeResp:
    def __init__(self, status=200, text="", content=b"", headers=None, json_data=None):
        self.status_code = status
        self.text = text
        self.content = content if content else text.encode("utf-8")
        self.headers = headers or {}
        self._json = json_data

    def raise_for_status(self):
        if not (200 <= self.status_code < 300):
            raise RuntimeError(f"HTTP {self.status_code}")

    def json(self):
        if self._json is not None:
            return self._json
        return json.loads(self.text)

    def __enter__(self): return self
    def __exit__(self, *exc): return False


@pytest.fixture
def fake_requests(monkeypatch):
    """
    Registry-based stub for requests.get. Unregistered URLs answer 404.
    """
    registry_get = {}
    calls = []

    def _get(url, *args, **kwargs):
        calls.append(url)
        return registry_get.get(url, FakeResp(404, "not found"))

    def register_get(url, resp: FakeResp):
        registry_get[url] = resp

    monkeypatch.setattr("requests.get", _get)
    ns = types.SimpleNamespace(register_get=register_get, calls=calls, FakeResp=FakeResp)
    return ns
