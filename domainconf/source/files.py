"""File-backed configuration source.

Loads JSON and TOML files into one tree, later files overriding earlier ones,
then overlays environment variables. There is no file watching: call
`reload()` to pick up changes.
"""

import json
import os
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from domainconf.exceptions import ConfigurationFileError
from domainconf.observability.logging import get_logger
from domainconf.source.memory import InMemoryConfigurationSource

logger = get_logger(__name__)

ENV_SECTION_DELIMITER = "__"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override onto base without mutating either.

    Objects merge key by key; any other value, lists included, replaces what
    it overrides.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_configuration_file(path: Path) -> dict[str, Any]:
    """Load a JSON or TOML configuration file (chosen by suffix).

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationFileError: If the file cannot be read or parsed, or its
            top level is not an object
    """
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        if path.suffix.lower() == ".toml":
            with path.open("rb") as f:
                data = tomllib.load(f)
        else:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
    except (OSError, ValueError) as e:
        # json.JSONDecodeError and tomllib.TOMLDecodeError are ValueErrors
        raise ConfigurationFileError(
            f"Cannot load configuration file {path}: {e}", path=str(path)
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationFileError(
            f"Configuration file must contain an object at the top level: {path}",
            path=str(path),
        )
    return data


def overlay_environment(
    data: dict[str, Any],
    prefix: str,
    environ: Mapping[str, str],
) -> dict[str, Any]:
    """Apply `{prefix}Section__Key=value` variables onto the tree.

    Returns a new dictionary; keys are case-sensitive.
    """
    overlay: dict[str, Any] = {}
    for name, value in environ.items():
        if not name.startswith(prefix) or len(name) == len(prefix):
            continue

        segments = name[len(prefix):].split(ENV_SECTION_DELIMITER)
        node = overlay
        for segment in segments[:-1]:
            node = node.setdefault(segment, {})
            if not isinstance(node, dict):
                break
        else:
            node[segments[-1]] = value

    return deep_merge(data, overlay)


class FileConfigurationSource(InMemoryConfigurationSource):
    """Configuration source loaded from files and environment variables."""

    def __init__(
        self,
        paths: Sequence[str | Path],
        optional_paths: Sequence[str | Path] = (),
        env_prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize and load the tree.

        Args:
            paths: Files that must exist, merged in order
            optional_paths: Files merged after `paths` when present
            env_prefix: Prefix of environment variables to overlay (None disables)
            environ: Environment mapping (defaults to os.environ at load time)
        """
        super().__init__()
        self._paths = [Path(p) for p in paths]
        self._optional_paths = [Path(p) for p in optional_paths]
        self._env_prefix = env_prefix
        self._environ = environ
        self.reload()

    @property
    def loaded_files(self) -> list[Path]:
        """Files that contributed to the current tree."""
        return list(self._loaded_files)

    def reload(self) -> None:
        """Re-read every file and the environment, then swap the tree."""
        data: dict[str, Any] = {}
        loaded: list[Path] = []

        for path in self._paths:
            data = deep_merge(data, load_configuration_file(path))
            loaded.append(path)

        for path in self._optional_paths:
            if not path.exists():
                logger.debug("configuration_file_skipped", path=str(path))
                continue
            data = deep_merge(data, load_configuration_file(path))
            loaded.append(path)

        if self._env_prefix:
            environ = self._environ if self._environ is not None else os.environ
            data = overlay_environment(data, self._env_prefix, environ)

        self.replace(data)
        self._loaded_files = loaded
        logger.info(
            "configuration_source_loaded",
            files=[str(p) for p in loaded],
            sections=len(data),
        )
