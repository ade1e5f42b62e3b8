"""File-backed implementation of SecurityPolicyStore.

Layout under the base directory:

    {base}/{domain}/security-policy.json
    {base}/default/security-policy.json

A policy is resolved from the domain's file, then the default file (attributed
to the requested domain), then the built-in default. Whatever is produced is
cached until invalidated.
"""

import asyncio
import json
import os
import tempfile
import threading
from pathlib import Path

from domainconf.models.security_policy import SecurityPolicy, default_security_policy
from domainconf.observability.logging import get_logger
from domainconf.observability.metrics import SECURITY_POLICY_ERRORS, SECURITY_POLICY_LOADS
from domainconf.security.store import SecurityPolicyStore
from domainconf.source.binding import normalize_keys, validate_tolerant

logger = get_logger(__name__)

POLICY_FILE_NAME = "security-policy.json"
DEFAULT_POLICY_DIRECTORY = "default"
UNKNOWN_DOMAIN = "unknown"

_FORBIDDEN_CHARACTERS = ("/", "\\", "\0")


def is_valid_domain(domain: str) -> bool:
    """Whether a domain can safely name a directory under the base path."""
    if not domain or domain in (".", ".."):
        return False
    return not any(character in domain for character in _FORBIDDEN_CHARACTERS)


class FileSecurityPolicyStore(SecurityPolicyStore):
    """Security policies stored as one JSON document per domain directory."""

    def __init__(self, base_path: str | Path = "Configuration") -> None:
        """Initialize store.

        Args:
            base_path: Directory holding one subdirectory per domain
        """
        self._base_path = Path(base_path)
        self._cache: dict[str, SecurityPolicy] = {}
        # Bumped on invalidation; a load only caches if its snapshot is unchanged
        self._generations: dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _policy_path(self, directory: str) -> Path:
        return self._base_path / directory / POLICY_FILE_NAME

    def get_policy(self, domain: str) -> SecurityPolicy:
        """Get the policy for a domain, resolving and caching it on a miss."""
        if not domain:
            logger.warning("security_policy_requested_without_domain")
            return default_security_policy(UNKNOWN_DOMAIN)

        if not is_valid_domain(domain):
            logger.warning("security_policy_invalid_domain", domain=domain)
            return default_security_policy(domain)

        with self._lock:
            cached = self._cache.get(domain)
            generation = self._generation(domain)
        if cached is not None:
            return cached

        policy = self._load_policy(domain)
        with self._lock:
            if self._generation(domain) == generation:
                self._cache[domain] = policy
            else:
                logger.debug("security_policy_load_superseded", domain=domain)
        return policy

    def _generation(self, domain: str) -> tuple[int, int]:
        return self._epoch, self._generations.get(domain, 0)

    def _load_policy(self, domain: str) -> SecurityPolicy:
        domain_path = self._policy_path(domain)
        if domain_path.exists():
            policy = self._read_policy(domain_path, domain)
            if policy is not None:
                SECURITY_POLICY_LOADS.labels(source="domain").inc()
                return policy

        default_path = self._policy_path(DEFAULT_POLICY_DIRECTORY)
        if default_path.exists():
            policy = self._read_policy(default_path, domain)
            if policy is not None:
                SECURITY_POLICY_LOADS.labels(source="default").inc()
                logger.warning("security_policy_default_used", domain=domain)
                return policy

        SECURITY_POLICY_LOADS.labels(source="builtin").inc()
        logger.warning("security_policy_builtin_used", domain=domain)
        return default_security_policy(domain)

    def _read_policy(self, path: Path, domain: str) -> SecurityPolicy | None:
        """Read a policy file attributed to domain; None if it is unusable."""
        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            SECURITY_POLICY_ERRORS.labels(operation="read").inc()
            logger.error(
                "security_policy_read_failed",
                path=str(path),
                domain=domain,
                error=str(e),
            )
            return None

        if not isinstance(data, dict):
            SECURITY_POLICY_ERRORS.labels(operation="read").inc()
            logger.error(
                "security_policy_not_an_object",
                path=str(path),
                domain=domain,
            )
            return None

        policy = validate_tolerant(
            SecurityPolicy, normalize_keys(data, SecurityPolicy), str(path)
        )
        logger.info("security_policy_loaded", domain=domain, path=str(path))
        return policy.for_domain(domain)

    async def update_policy(self, domain: str, policy: SecurityPolicy) -> bool:
        """Write a domain's policy atomically and invalidate its cache entry.

        Returns:
            True on success. False for an empty or unsafe domain, or when the
            write fails; the cached entry is then left as it was.
        """
        if not domain or not is_valid_domain(domain):
            logger.error("security_policy_update_invalid_domain", domain=domain)
            return False

        path = self._policy_path(domain)
        document = json.dumps(
            policy.for_domain(domain).model_dump(mode="json", by_alias=True),
            indent=2,
        )

        try:
            await asyncio.to_thread(self._write_atomic, path, document)
        except OSError as e:
            SECURITY_POLICY_ERRORS.labels(operation="write").inc()
            logger.error(
                "security_policy_update_failed",
                domain=domain,
                path=str(path),
                error=str(e),
            )
            return False

        self.invalidate_cache(domain)
        logger.info("security_policy_updated", domain=domain, path=str(path))
        return True

    @staticmethod
    def _write_atomic(path: Path, document: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document)
            os.replace(temp_name, path)
        except OSError:
            Path(temp_name).unlink(missing_ok=True)
            raise

    def invalidate_cache(self, domain: str) -> None:
        with self._lock:
            self._cache.pop(domain, None)
            self._generations[domain] = self._generations.get(domain, 0) + 1
        logger.debug("security_policy_cache_invalidated", domain=domain)

    def invalidate_all_caches(self) -> None:
        with self._lock:
            self._cache.clear()
            self._generations.clear()
            self._epoch += 1
        logger.info("security_policy_caches_invalidated")

    def get_configured_domains(self) -> list[str]:
        """Sorted names of subdirectories that hold a policy file."""
        if not self._base_path.is_dir():
            return []

        return sorted(
            entry.name
            for entry in self._base_path.iterdir()
            if entry.is_dir() and (entry / POLICY_FILE_NAME).is_file()
        )
