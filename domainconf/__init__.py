"""domainconf: domain-aware configuration access for multi-tenant backends.

Resolves per-domain settings with fallback to global defaults, caches the
resolved values, stores security policies per domain on disk and wires
structured logging from configuration.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
