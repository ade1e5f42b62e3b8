"""Configuration loading for domainconf itself.

These settings describe how the configuration layer runs (where the tenant
configuration tree lives, cache lifetime, startup validation policy, bootstrap
logging). Tenant settings are resolved through domainconf.resolvers.

Usage:
    from domainconf.config import get_settings

    settings = get_settings()
    ttl = settings.caching.ttl_seconds
"""

from functools import lru_cache

from domainconf.config.loader import load_config
from domainconf.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{DOMAINCONF_ENV}.toml (environment overrides)
    4. DOMAINCONF_* environment variables (runtime overrides)

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    config_dict = load_config()
    set_toml_config(config_dict)

    # pydantic-settings applies env vars with higher priority
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
