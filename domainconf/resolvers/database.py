"""Per-domain database connection strings.

Connection strings are flat values under one section:

    DomainConnectionStrings:{domain} = "<connection string>"

There is no global fallback; a domain without a value has no database.
"""

from domainconf.observability.logging import get_logger
from domainconf.resolvers.domain import is_domain_key
from domainconf.source.base import ConfigurationSource, combine_path

logger = get_logger(__name__)

DEFAULT_SECTION = "DomainConnectionStrings"


class DatabaseConnectionResolver:
    """Looks up connection strings by domain."""

    def __init__(self, source: ConfigurationSource, section: str = DEFAULT_SECTION) -> None:
        if source is None:
            raise ValueError("source is required")
        self._source = source
        self._section = section

    def get_connection_string(self, domain: str) -> str | None:
        """Get the connection string for a domain, or None if not configured."""
        if not domain:
            logger.warning("connection_string_requested_without_domain")
            return None
        if not is_domain_key(domain):
            logger.warning("connection_string_invalid_domain", domain=domain)
            return None

        connection_string = self._source.get_value(combine_path(self._section, domain))
        if not connection_string:
            logger.warning("connection_string_not_configured", domain=domain)
            return None

        return connection_string

    def has_connection_string(self, domain: str) -> bool:
        """Whether a non-empty connection string is configured for a domain."""
        if not is_domain_key(domain):
            return False
        return bool(self._source.get_value(combine_path(self._section, domain)))

    def get_configured_domains(self) -> list[str]:
        """Domains listed under the connection string section."""
        section = self._source.get_section(self._section)
        return [child.key for child in section.get_children()]
