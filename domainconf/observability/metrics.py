"""Prometheus metrics for domainconf.

Counts cache effectiveness, fallbacks and policy file activity so operators
can see how often tenants run on global defaults.
"""

from prometheus_client import Counter

# Resolver cache metrics
CONFIG_CACHE_HITS = Counter(
    "domainconf_config_cache_hits_total",
    "Resolved settings served from cache",
    labelnames=["settings_type"],
)

CONFIG_CACHE_MISSES = Counter(
    "domainconf_config_cache_misses_total",
    "Resolved settings that had to be bound from the configuration source",
    labelnames=["settings_type"],
)

CONFIG_FALLBACKS = Counter(
    "domainconf_config_fallbacks_total",
    "Domain lookups that fell back to global settings",
    labelnames=["settings_type"],
)

CONFIG_REFRESHES = Counter(
    "domainconf_config_refreshes_total",
    "Explicit cache refreshes",
    labelnames=["settings_type", "scope"],
)

# Security policy metrics
SECURITY_POLICY_LOADS = Counter(
    "domainconf_security_policy_loads_total",
    "Security policies resolved on a cache miss, by the source that produced them",
    labelnames=["source"],
)

SECURITY_POLICY_ERRORS = Counter(
    "domainconf_security_policy_errors_total",
    "Security policy file failures",
    labelnames=["operation"],
)

# Startup validation metrics
VALIDATION_ISSUES = Counter(
    "domainconf_validation_issues_total",
    "Configuration validation errors and warnings found at startup",
    labelnames=["configuration_name", "severity"],
)
