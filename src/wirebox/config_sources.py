"""Configuration sources for container settings.

Provides the flat (key-value) sources :class:`EnvSource` and
:class:`FlatDictSource`, and the tree sources :class:`DictSource`,
:class:`JsonTreeSource` and :class:`YamlTreeSource`.
"""

import json
import os
from typing import Any, Mapping, Optional

from .exceptions import ConfigurationError


class FlatSource:
    """Base class for key-value sources returning strings."""

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError


class EnvSource(FlatSource):
    """Flat source backed by OS environment variables.

    Args:
        prefix: Prepended to every key, upper-cased
            (``EnvSource()`` reads ``exclude`` from ``WIREBOX_EXCLUDE``).
    """

    def __init__(self, prefix: str = "WIREBOX_") -> None:
        self.prefix = prefix

    def get(self, key: str) -> Optional[str]:
        return os.environ.get((self.prefix + key).upper())


class FlatDictSource(FlatSource):
    """Flat source backed by an in-memory dictionary.

    Args:
        data: The key-value mapping.
        prefix: Optional prefix prepended to every key lookup.
    """

    def __init__(self, data: Mapping[str, Any], prefix: str = "") -> None:
        self._data = {str(k): v for k, v in dict(data).items()}
        self._prefix = prefix

    def get(self, key: str) -> Optional[str]:
        v = self._data.get(f"{self._prefix}{key}")
        if v is None:
            return None
        if isinstance(v, (str, int, float, bool)):
            return str(v)
        return None


class TreeSource:
    """A source holding settings as one nested mapping."""

    def get_tree(self) -> Mapping[str, Any]:
        raise NotImplementedError


class DictSource(TreeSource):
    def __init__(self, data: Mapping[str, Any]):
        self._data = data

    def get_tree(self) -> Mapping[str, Any]:
        return self._data


class _FileTreeSource(TreeSource):
    """Reads the whole settings file on every call; ``kind`` names it in errors."""

    kind = "file"

    def __init__(self, path: str):
        self._path = path

    def _parse(self, stream) -> Any:
        raise NotImplementedError

    def get_tree(self) -> Mapping[str, Any]:
        try:
            with open(self._path, encoding="utf-8") as f:
                return self._parse(f) or {}
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Failed to load {self.kind} config {self._path}: {e}")


class JsonTreeSource(_FileTreeSource):
    kind = "JSON"

    def _parse(self, stream) -> Any:
        return json.load(stream)


class YamlTreeSource(_FileTreeSource):
    """YAML settings file; needs the ``yaml`` extra (PyYAML)."""

    kind = "YAML"

    def _parse(self, stream) -> Any:
        try:
            import yaml
        except ImportError:
            raise ConfigurationError("PyYAML not installed; install wirebox[yaml]")
        return yaml.safe_load(stream)
