"""Key-value configuration sources used to resolve connection settings."""

import os
from typing import Mapping, Optional


class ConfigProvider:
    """Read-only lookup of named configuration values."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._lookup(key)
        if value is None or value == "":
            return default
        return value

    def _lookup(self, key: str) -> Optional[str]:
        raise NotImplementedError


class EnvironmentConfigProvider(ConfigProvider):
    """Reads values from the process environment."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self.environ = os.environ if environ is None else environ

    def _lookup(self, key: str) -> Optional[str]:
        return self.environ.get(key)


class InMemoryConfigProvider(ConfigProvider):
    """Mapping backed provider, useful for embedding and tests."""

    def __init__(self, values: Optional[Mapping[str, str]] = None):
        self.values = dict(values or {})

    def _lookup(self, key: str) -> Optional[str]:
        return self.values.get(key)
