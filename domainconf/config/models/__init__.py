"""Configuration model exports.

    from domainconf.config.models import CachingConfig, ValidationConfig
"""

from domainconf.config.models.observability import (
    LoggingConfig,
    ObservabilityConfig,
)
from domainconf.config.models.options import (
    CachingConfig,
    SecurityPolicyStoreConfig,
    SourcesConfig,
    ValidationConfig,
)

__all__ = [
    # Options
    "CachingConfig",
    "SecurityPolicyStoreConfig",
    "SourcesConfig",
    "ValidationConfig",
    # Observability
    "LoggingConfig",
    "ObservabilityConfig",
]
