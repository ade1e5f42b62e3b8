"""Security policy store implementations."""

from domainconf.security.store import SecurityPolicyStore
from domainconf.security.stores.file import FileSecurityPolicyStore

__all__ = [
    "SecurityPolicyStore",
    "FileSecurityPolicyStore",
]
