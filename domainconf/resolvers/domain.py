"""Domain-aware settings resolution with fallback to global settings.

A resolver binds one settings type from two places in the configuration tree:

    {global_section}                   e.g. EmailSettings
    {domain_section}:{domain}          e.g. DomainEmailSettings:acme

Domain sections are bound on their own, not merged over the global section:
a field missing from a domain section takes the model default, not the global
value.

Cache keys are (settings type, domain), keyed on the class itself so two
classes with the same name never collide. The global entry is keyed with
domain None, which no domain string can equal, so several resolvers can share
one cache.

A domain containing the path separator never names a domain section; it is
treated as unconfigured and resolves to the global settings.
"""

from collections.abc import Hashable
from typing import Generic, TypeVar

from pydantic import BaseModel

from domainconf.caching.cache import ConfigCache
from domainconf.observability.logging import get_logger
from domainconf.observability.metrics import (
    CONFIG_CACHE_HITS,
    CONFIG_CACHE_MISSES,
    CONFIG_FALLBACKS,
    CONFIG_REFRESHES,
)
from domainconf.source.base import PATH_SEPARATOR, ConfigurationSource, combine_path
from domainconf.source.binding import Binder, bind_section

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


def is_domain_key(domain: str) -> bool:
    """Whether domain can address a single child section."""
    return bool(domain) and PATH_SEPARATOR not in domain


class DomainConfigResolver(Generic[T]):
    """Resolves settings of one type per domain, falling back to global settings."""

    def __init__(
        self,
        source: ConfigurationSource,
        settings_type: type[T],
        global_section: str,
        domain_section: str,
        cache: ConfigCache[T] | None = None,
        binder: Binder[T] | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            source: Configuration tree to read
            settings_type: Settings model; every field must have a default
            global_section: Path of the global settings section
            domain_section: Path under which each child is a domain section
            cache: Optional cache (may be shared with other resolvers)
            binder: Binds a section onto settings_type (default: bind_section)

        Raises:
            ValueError: If a required argument is missing
        """
        if source is None:
            raise ValueError("source is required")
        if settings_type is None:
            raise ValueError("settings_type is required")
        if not global_section:
            raise ValueError("global_section is required")
        if not domain_section:
            raise ValueError("domain_section is required")

        self._source = source
        self._settings_type = settings_type
        self._global_section = global_section
        self._domain_section = domain_section
        self._cache = cache
        self._binder: Binder[T] = binder or bind_section
        self._namespace = settings_type.__name__

    @property
    def settings_type(self) -> type[T]:
        return self._settings_type

    @property
    def global_section(self) -> str:
        return self._global_section

    @property
    def domain_section(self) -> str:
        return self._domain_section

    def _cache_key(self, domain: str | None) -> tuple[type[T], str | None]:
        return (self._settings_type, domain)

    def _owns(self, key: Hashable) -> bool:
        return isinstance(key, tuple) and len(key) == 2 and key[0] is self._settings_type

    def get_settings(self, domain: str) -> T:
        """Get settings for a domain, falling back to the global settings.

        Whichever value is produced is cached under the domain's own key, so a
        domain that fell back keeps the global value it saw until its entry
        expires or is refreshed.

        Args:
            domain: Domain identifier

        Returns:
            Domain settings if configured, otherwise global settings. Never None.
        """
        if not domain:
            logger.warning(
                "settings_requested_without_domain",
                settings_type=self._namespace,
            )
            return self.get_global_settings()

        key = self._cache_key(domain)

        if self._cache is not None:
            found, cached = self._cache.try_get(key)
            if found and cached is not None:
                CONFIG_CACHE_HITS.labels(settings_type=self._namespace).inc()
                return cached
            CONFIG_CACHE_MISSES.labels(settings_type=self._namespace).inc()

        domain_settings = self.get_domain_settings(domain)
        if domain_settings is not None:
            if self._cache is not None:
                self._cache.set(key, domain_settings)
            return domain_settings

        global_settings = self.get_global_settings()
        CONFIG_FALLBACKS.labels(settings_type=self._namespace).inc()
        logger.debug(
            "settings_global_fallback",
            settings_type=self._namespace,
            domain=domain,
        )

        if self._cache is not None:
            self._cache.set(key, global_settings)
        return global_settings

    def get_domain_settings(self, domain: str) -> T | None:
        """Bind only the domain-specific section.

        Returns:
            Bound settings, or None if the domain has no section. A present
            but empty section binds to defaults.
        """
        if not is_domain_key(domain):
            return None

        section = self._source.get_section(combine_path(self._domain_section, domain))
        if not section.exists():
            return None

        settings = self._binder(section, self._settings_type)
        logger.debug(
            "domain_settings_loaded",
            settings_type=self._namespace,
            domain=domain,
        )
        return settings

    def get_global_settings(self) -> T:
        """Bind the global section (defaults when absent), cached."""
        key = self._cache_key(None)

        if self._cache is not None:
            found, cached = self._cache.try_get(key)
            if found and cached is not None:
                CONFIG_CACHE_HITS.labels(settings_type=self._namespace).inc()
                return cached
            CONFIG_CACHE_MISSES.labels(settings_type=self._namespace).inc()

        settings = self._binder(
            self._source.get_section(self._global_section), self._settings_type
        )

        if self._cache is not None:
            self._cache.set(key, settings)
        return settings

    def get_configured_domains(self) -> list[str]:
        """Domains that have a section under the domain prefix.

        Descriptive only: any other domain still resolves through fallback.
        """
        section = self._source.get_section(self._domain_section)
        return [child.key for child in section.get_children()]

    def refresh(self, domain: str | None = None) -> None:
        """Drop cached settings.

        Args:
            domain: Drop only this domain's entry. When None, drop every
                entry this resolver owns, global entry included.
        """
        if self._cache is None:
            return

        if domain is None:
            for key in self._cache.keys():
                if self._owns(key):
                    self._cache.remove(key)
            CONFIG_REFRESHES.labels(settings_type=self._namespace, scope="all").inc()
            logger.info("settings_cache_refreshed", settings_type=self._namespace)
            return

        self._cache.remove(self._cache_key(domain))
        CONFIG_REFRESHES.labels(settings_type=self._namespace, scope="domain").inc()
        logger.info(
            "settings_cache_refreshed",
            settings_type=self._namespace,
            domain=domain,
        )
