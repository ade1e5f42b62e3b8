"""In-memory implementation of ConfigurationSource."""

import copy
import threading
from collections.abc import Mapping
from typing import Any

from domainconf.source.base import PATH_SEPARATOR, ConfigurationSource, to_config_string


class InMemoryConfigurationSource(ConfigurationSource):
    """Configuration source backed by a nested mapping.

    The tree is copied on construction. `set_value` and `replace` mutate the
    live tree under a lock so readers never observe a half-applied change.
    """

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        """Initialize from a nested mapping (as produced by json/tomllib)."""
        self._lock = threading.RLock()
        self._data: dict[str, Any] = copy.deepcopy(dict(data or {}))

    def _find(self, path: str) -> tuple[bool, Any]:
        """Walk the tree, returning (found, node)."""
        node: Any = self._data
        if not path:
            return True, node

        for segment in path.split(PATH_SEPARATOR):
            if isinstance(node, Mapping):
                if segment not in node:
                    return False, None
                node = node[segment]
            elif isinstance(node, list):
                if not segment.isdigit() or int(segment) >= len(node):
                    return False, None
                node = node[int(segment)]
            else:
                return False, None
        return True, node

    def get_value(self, path: str) -> str | None:
        with self._lock:
            found, node = self._find(path)
        return to_config_string(node) if found else None

    def exists(self, path: str) -> bool:
        with self._lock:
            found, node = self._find(path)
        # A null value is an absent key
        return found and node is not None

    def child_keys(self, path: str) -> list[str]:
        with self._lock:
            found, node = self._find(path)
            if not found:
                return []
            if isinstance(node, Mapping):
                return [str(key) for key, value in node.items() if value is not None]
            if isinstance(node, list):
                return [str(index) for index in range(len(node))]
        return []

    def set_value(self, path: str, value: Any) -> None:
        """Set a value, creating intermediate sections as needed."""
        segments = path.split(PATH_SEPARATOR)
        with self._lock:
            node = self._data
            for segment in segments[:-1]:
                child = node.get(segment)
                if not isinstance(child, dict):
                    child = {}
                    node[segment] = child
                node = child
            node[segments[-1]] = copy.deepcopy(value)

    def remove(self, path: str) -> None:
        """Remove a key and its subtree if present."""
        parent_path, _, key = path.rpartition(PATH_SEPARATOR)
        with self._lock:
            found, parent = self._find(parent_path)
            if found and isinstance(parent, dict):
                parent.pop(key, None)

    def replace(self, data: Mapping[str, Any]) -> None:
        """Swap the whole tree."""
        new_data = copy.deepcopy(dict(data))
        with self._lock:
            self._data = new_data

    def to_dict(self) -> dict[str, Any]:
        """Deep copy of the current tree."""
        with self._lock:
            return copy.deepcopy(self._data)
