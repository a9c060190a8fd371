from __future__ import annotations
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import SuffixListConfigError


@dataclass
class Config:
    """YAML settings: ``suffix_list``, ``extract``, ``logging`` and ``web`` sections."""
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: str) -> "Config":
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if data is not None and not isinstance(data, dict):
            raise SuffixListConfigError(f"config {path} must be a mapping, got {type(data).__name__}")
        return cls(data=data or {})

    def __getitem__(self, item):
        return self.data[item]

    def get(self, key, default=None):
        return self.data.get(key, default)

    def section(self, name: str) -> Dict[str, Any]:
        value = self.data.get(name) or {}
        if not isinstance(value, dict):
            raise SuffixListConfigError(f"config section '{name}' must be a mapping")
        return value

    @property
    def suffix_list(self) -> Dict[str, Any]:
        return self.section("suffix_list")

    @property
    def extract(self) -> Dict[str, Any]:
        return self.section("extract")

    @property
    def cache_file(self) -> Optional[Path]:
        value = self.suffix_list.get("cache_file")
        return Path(value).expanduser() if value else None

    @property
    def custom_file(self) -> Optional[Path]:
        value = self.suffix_list.get("custom_file")
        return Path(value).expanduser() if value else None
