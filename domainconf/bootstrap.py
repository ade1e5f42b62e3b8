"""Wire the configuration layer together.

    from domainconf.bootstrap import bootstrap

    services = bootstrap()
    email = services.email.get_settings("acme")
    policy = services.security_policies.get_policy("acme")
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel

from domainconf.caching.cache import ConfigCache, InMemoryConfigCache
from domainconf.config import get_settings
from domainconf.config.settings import Settings
from domainconf.exceptions import StartupValidationError
from domainconf.models.confirmation import (
    EmailConfirmationSettings,
    MobileConfirmationSettings,
    MockServiceSettings,
    OtpSettings,
)
from domainconf.observability.logging import get_logger, setup_logging
from domainconf.observability.sinks import configure_logging
from domainconf.resolvers.database import DatabaseConnectionResolver
from domainconf.resolvers.logging import LoggingConfigResolver
from domainconf.resolvers.settings import (
    EmailConfigResolver,
    JwtConfigResolver,
    PasswordPolicyResolver,
    PasswordResetConfigResolver,
    SmsConfigResolver,
)
from domainconf.security.store import SecurityPolicyStore
from domainconf.security.stores.file import FileSecurityPolicyStore
from domainconf.source.base import ConfigurationSource
from domainconf.source.files import FileConfigurationSource
from domainconf.validation.base import ConfigurationValidator
from domainconf.validation.runner import ConfigurationValidationRunner, ValidationReport
from domainconf.validation.validators import default_validators

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

SECURITY_POLICY_BASE_PATH_KEY = "DomainConfiguration:SecurityPolicyBasePath"


@dataclass
class ConfigurationServices:
    """Resolvers, stores and fixed sections built from one configuration source."""

    source: ConfigurationSource
    settings: Settings
    email: EmailConfigResolver
    sms: SmsConfigResolver
    jwt: JwtConfigResolver
    password_policy: PasswordPolicyResolver
    password_reset: PasswordResetConfigResolver
    database: DatabaseConnectionResolver
    security_policies: SecurityPolicyStore
    logging: LoggingConfigResolver
    otp: OtpSettings
    mock_services: MockServiceSettings
    email_confirmation: EmailConfirmationSettings
    mobile_confirmation: MobileConfirmationSettings
    validation_report: ValidationReport | None = None

    def refresh_all(self) -> None:
        """Drop every cached value and rebind the fixed sections."""
        for resolver in (
            self.email,
            self.sms,
            self.jwt,
            self.password_policy,
            self.password_reset,
        ):
            resolver.refresh()
        self.logging.refresh()
        self.security_policies.invalidate_all_caches()

        self.otp = _bind(self.source, "OtpSettings", OtpSettings)
        self.mock_services = _bind(self.source, "MockServices", MockServiceSettings)
        self.email_confirmation = _bind(
            self.source, "EmailConfirmationSettings", EmailConfirmationSettings
        )
        self.mobile_confirmation = _bind(
            self.source, "MobileConfirmationSettings", MobileConfirmationSettings
        )


def _bind(source: ConfigurationSource, path: str, model_type: type[M]) -> M:
    return source.get_section(path).bind(model_type)


def _make_cache(settings: Settings) -> ConfigCache | None:
    if not settings.caching.enabled:
        return None
    return InMemoryConfigCache(default_ttl=timedelta(seconds=settings.caching.ttl_seconds))


def resolve_security_policy_base_path(source: ConfigurationSource, settings: Settings) -> Path:
    """Policy directory from the source, else the library setting."""
    return Path(source.get_value(SECURITY_POLICY_BASE_PATH_KEY) or settings.security_policy.base_path)


def create_configuration_services(
    source: ConfigurationSource,
    settings: Settings | None = None,
    validators: Sequence[ConfigurationValidator] | None = None,
) -> ConfigurationServices:
    """Build every resolver over a configuration source.

    Each settings type gets its own cache when caching is enabled. Startup
    validation runs when enabled.

    Args:
        source: Tenant configuration tree
        settings: Library settings (default: get_settings())
        validators: Validators to run (default: the built-in set)

    Returns:
        The wired services

    Raises:
        ValueError: If source is None
        StartupValidationError: If validation found errors and errors are fatal
    """
    if source is None:
        raise ValueError("source is required")
    settings = settings or get_settings()

    services = ConfigurationServices(
        source=source,
        settings=settings,
        email=EmailConfigResolver(source, _make_cache(settings)),
        sms=SmsConfigResolver(source, _make_cache(settings)),
        jwt=JwtConfigResolver(source, _make_cache(settings)),
        password_policy=PasswordPolicyResolver(source, _make_cache(settings)),
        password_reset=PasswordResetConfigResolver(source, _make_cache(settings)),
        database=DatabaseConnectionResolver(source),
        security_policies=FileSecurityPolicyStore(
            resolve_security_policy_base_path(source, settings)
        ),
        logging=LoggingConfigResolver(source),
        otp=_bind(source, "OtpSettings", OtpSettings),
        mock_services=_bind(source, "MockServices", MockServiceSettings),
        email_confirmation=_bind(source, "EmailConfirmationSettings", EmailConfirmationSettings),
        mobile_confirmation=_bind(
            source, "MobileConfirmationSettings", MobileConfirmationSettings
        ),
    )

    if settings.validation.validate_on_startup:
        runner = ConfigurationValidationRunner(
            validators if validators is not None else default_validators(),
            fail_on_errors=settings.validation.fail_on_validation_errors,
        )
        report = runner.run(source)
        services.validation_report = report
        if report.aborted:
            raise StartupValidationError(
                f"Configuration validation failed with {len(report.errors)} error(s)",
                report,
            )

    logger.info(
        "configuration_services_created",
        caching=settings.caching.enabled,
        validated=services.validation_report is not None,
    )
    return services


def bootstrap(settings: Settings | None = None) -> ConfigurationServices:
    """Load the configured files and build the services.

    Sets up the bootstrap logger first, then hands logging over to the
    Serilog section of the loaded tree when configure_from_source is on.
    """
    settings = settings or get_settings()
    log_config = settings.observability.logging

    setup_logging(
        level=log_config.level,
        format=log_config.format,
        redact_pii=log_config.redact_pii,
    )

    source = FileConfigurationSource(
        settings.sources.files,
        optional_paths=settings.sources.optional_files,
        env_prefix=settings.sources.env_prefix or None,
    )
    services = create_configuration_services(source, settings)

    if log_config.configure_from_source:
        configure_logging(
            services.logging.get_serilog_settings(),
            format=log_config.format,
            redact_pii=log_config.redact_pii,
            environment=settings.environment,
        )

    return services
