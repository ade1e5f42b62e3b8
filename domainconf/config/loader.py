"""Locate and merge the TOML layers that configure domainconf itself.

Layers, later ones winning:

    {config_dir}/default.toml
    {config_dir}/{environment}.toml

Every layer is optional; whatever is missing leaves the model defaults in
place. The directory is DOMAINCONF_CONFIG_DIR when set, otherwise ./config
relative to the host application's working directory.
"""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from domainconf.exceptions import ConfigurationFileError
from domainconf.source.files import deep_merge, load_configuration_file

CONFIG_DIR_VAR = "DOMAINCONF_CONFIG_DIR"
ENVIRONMENT_VAR = "DOMAINCONF_ENV"
DEFAULT_ENVIRONMENT = "development"
BASE_LAYER = "default"


def get_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    """Directory holding the library's TOML layers.

    Raises:
        ConfigurationFileError: If DOMAINCONF_CONFIG_DIR names no directory
    """
    environ = os.environ if environ is None else environ
    configured = environ.get(CONFIG_DIR_VAR)
    if not configured:
        return Path("config")

    path = Path(configured)
    if not path.is_dir():
        raise ConfigurationFileError(
            f"{CONFIG_DIR_VAR} is not a directory: {configured}", path=configured
        )
    return path


def get_environment(environ: Mapping[str, str] | None = None) -> str:
    """Deployment environment name from DOMAINCONF_ENV."""
    environ = os.environ if environ is None else environ
    return environ.get(ENVIRONMENT_VAR) or DEFAULT_ENVIRONMENT


def config_layers(config_dir: Path, environment: str) -> list[Path]:
    """Layer files in merge order, present or not."""
    layers = [config_dir / f"{BASE_LAYER}.toml"]
    if environment != BASE_LAYER:
        layers.append(config_dir / f"{environment}.toml")
    return layers


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Merge the layers that exist.

    Args:
        config_dir: Layer directory (default: get_config_dir())
        environment: Environment layer name (default: get_environment())

    Raises:
        ConfigurationFileError: If a present layer cannot be parsed
    """
    config_dir = config_dir if config_dir is not None else get_config_dir()
    environment = environment or get_environment()

    config: dict[str, Any] = {}
    for path in config_layers(config_dir, environment):
        if path.is_file():
            config = deep_merge(config, load_configuration_file(path))
    return config
