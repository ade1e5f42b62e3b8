"""Hierarchical configuration sources and section binding.

    from domainconf.source import InMemoryConfigurationSource, bind_section

    source = InMemoryConfigurationSource({"EmailSettings": {"SmtpServer": "smtp"}})
    email = bind_section(source.get_section("EmailSettings"), EmailSettings)
"""

from domainconf.source.base import (
    PATH_SEPARATOR,
    ConfigurationSection,
    ConfigurationSource,
    combine_path,
)
from domainconf.source.binding import Binder, bind_section
from domainconf.source.files import (
    FileConfigurationSource,
    deep_merge,
    load_configuration_file,
)
from domainconf.source.memory import InMemoryConfigurationSource

__all__ = [
    "PATH_SEPARATOR",
    "Binder",
    "ConfigurationSection",
    "ConfigurationSource",
    "FileConfigurationSource",
    "InMemoryConfigurationSource",
    "bind_section",
    "combine_path",
    "deep_merge",
    "load_configuration_file",
]
