"""Key/value configuration files: one KEY=VALUE per line, '#' for comments."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Config:
    """Properties read from a configuration file."""

    properties: dict[str, str] = field(default_factory=dict)
    path: str | None = None

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Read a configuration file; a missing file raises FileNotFoundError."""
        config = cls.parse(Path(path).read_text(encoding="utf-8"))
        config.path = str(path)
        return config

    @classmethod
    def parse(cls, text: str) -> "Config":
        """Build a configuration from the text of a file."""
        properties: dict[str, str] = {}
        for line in text.splitlines():
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            properties[key] = value
        return cls(properties)

    def has(self, key: str) -> bool:
        """Tell whether the key is defined."""
        return key in self.properties

    def get_string(self, key: str) -> str | None:
        """Return the value of a key, or None when it is not defined."""
        return self.properties.get(key)

    def get_int(self, key: str) -> int:
        """Return the value of a key as an integer."""
        value = self.get_string(key)
        if value is None:
            raise KeyError(key)
        return int(value)