"""SecurityPolicyStore abstract interface."""

from abc import ABC, abstractmethod

from domainconf.models.security_policy import SecurityPolicy


class SecurityPolicyStore(ABC):
    """Abstract interface for per-domain security policy storage.

    Reads are synchronous and cached; updates are asynchronous and invalidate
    the cached entry for the domain they write.
    """

    @abstractmethod
    def get_policy(self, domain: str) -> SecurityPolicy:
        """Get the policy for a domain. Never None."""
        pass

    @abstractmethod
    async def update_policy(self, domain: str, policy: SecurityPolicy) -> bool:
        """Persist a domain's policy, returning whether the write succeeded."""
        pass

    @abstractmethod
    def invalidate_cache(self, domain: str) -> None:
        """Drop the cached policy for a domain."""
        pass

    @abstractmethod
    def invalidate_all_caches(self) -> None:
        """Drop every cached policy."""
        pass

    @abstractmethod
    def get_configured_domains(self) -> list[str]:
        """Domains that have their own stored policy."""
        pass
