"""Per-domain security policies."""

from domainconf.security.store import SecurityPolicyStore
from domainconf.security.stores.file import (
    POLICY_FILE_NAME,
    FileSecurityPolicyStore,
    is_valid_domain,
)

__all__ = [
    "POLICY_FILE_NAME",
    "FileSecurityPolicyStore",
    "SecurityPolicyStore",
    "is_valid_domain",
]
