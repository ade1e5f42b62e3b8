"""Hierarchical configuration source interface.

A configuration source is a tree of string values addressed by
colon-separated paths ("EmailSettings:SmtpServer"). Lists appear as children
keyed by their index ("Serilog:WriteTo:0:Name").
"""

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from pydantic import BaseModel

PATH_SEPARATOR = ":"

ModelT = TypeVar("ModelT", bound=BaseModel)


def combine_path(*segments: str) -> str:
    """Join path segments, skipping empty ones."""
    return PATH_SEPARATOR.join(segment for segment in segments if segment)


def to_config_string(value: Any) -> str | None:
    """Render a scalar tree value the way a string-valued backend exposes it.

    Booleans become "true"/"false"; containers and None have no value.
    """
    if value is None or isinstance(value, dict | list):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ConfigurationSource(ABC):
    """Abstract read access to a hierarchical configuration tree."""

    @abstractmethod
    def get_value(self, path: str) -> str | None:
        """Get the scalar value at path, or None if absent or not a scalar."""
        pass

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Whether path holds a non-null value (empty sections included)."""
        pass

    @abstractmethod
    def child_keys(self, path: str) -> list[str]:
        """Immediate non-null child keys under path, in source order."""
        pass

    def get_section(self, path: str) -> "ConfigurationSection":
        """Get a view of the subtree at path. Never None, may not exist."""
        return ConfigurationSection(self, path)


class ConfigurationSection:
    """A lazily evaluated view of one node of a configuration source."""

    def __init__(self, source: ConfigurationSource, path: str) -> None:
        self._source = source
        self.path = path

    @property
    def key(self) -> str:
        """Last segment of the path."""
        return self.path.rsplit(PATH_SEPARATOR, 1)[-1]

    @property
    def value(self) -> str | None:
        """Scalar value of this node."""
        return self._source.get_value(self.path)

    def exists(self) -> bool:
        """Whether this node is present in the source."""
        return self._source.exists(self.path)

    def get_children(self) -> list["ConfigurationSection"]:
        """Immediate child sections."""
        return [
            ConfigurationSection(self._source, combine_path(self.path, key))
            for key in self._source.child_keys(self.path)
        ]

    def get_section(self, path: str) -> "ConfigurationSection":
        """Get a descendant section relative to this one."""
        return ConfigurationSection(self._source, combine_path(self.path, path))

    def get_value(self, path: str) -> str | None:
        """Get a descendant scalar value relative to this one."""
        return self._source.get_value(combine_path(self.path, path))

    def __getitem__(self, path: str) -> str | None:
        return self.get_value(path)

    def bind(self, model_type: type[ModelT]) -> ModelT:
        """Bind this subtree onto a settings model (see binding.bind_section)."""
        from domainconf.source.binding import bind_section

        return bind_section(self, model_type)

    def __repr__(self) -> str:
        return f"ConfigurationSection(path={self.path!r})"
