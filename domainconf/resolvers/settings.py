"""Domain-aware resolvers for each settings type.

Each resolver fixes the section names its settings live under:

    EmailSettings           / DomainEmailSettings:{domain}
    SmsSettings             / DomainSmsSettings:{domain}
    JwtSettings             / DomainJwtSettings:{domain}
    PasswordPolicy          / DomainPasswordPolicy:{domain}
    PasswordResetSettings   / DomainPasswordResetSettings:{domain}
"""

from domainconf.caching.cache import ConfigCache
from domainconf.models.email import EmailSettings
from domainconf.models.jwt import JwtSettings
from domainconf.models.password import PasswordPolicySettings, PasswordResetSettings
from domainconf.models.sms import SmsSettings
from domainconf.resolvers.domain import DomainConfigResolver
from domainconf.source.base import ConfigurationSource
from domainconf.source.binding import Binder


class EmailConfigResolver(DomainConfigResolver[EmailSettings]):
    """Email/SMTP settings per domain."""

    def __init__(
        self,
        source: ConfigurationSource,
        cache: ConfigCache[EmailSettings] | None = None,
        binder: Binder[EmailSettings] | None = None,
    ) -> None:
        super().__init__(
            source, EmailSettings, "EmailSettings", "DomainEmailSettings", cache, binder
        )


class SmsConfigResolver(DomainConfigResolver[SmsSettings]):
    """SMS settings per domain."""

    def __init__(
        self,
        source: ConfigurationSource,
        cache: ConfigCache[SmsSettings] | None = None,
        binder: Binder[SmsSettings] | None = None,
    ) -> None:
        super().__init__(source, SmsSettings, "SmsSettings", "DomainSmsSettings", cache, binder)


class JwtConfigResolver(DomainConfigResolver[JwtSettings]):
    """JWT settings per domain."""

    def __init__(
        self,
        source: ConfigurationSource,
        cache: ConfigCache[JwtSettings] | None = None,
        binder: Binder[JwtSettings] | None = None,
    ) -> None:
        super().__init__(source, JwtSettings, "JwtSettings", "DomainJwtSettings", cache, binder)


class PasswordPolicyResolver(DomainConfigResolver[PasswordPolicySettings]):
    """Password policy per domain."""

    def __init__(
        self,
        source: ConfigurationSource,
        cache: ConfigCache[PasswordPolicySettings] | None = None,
        binder: Binder[PasswordPolicySettings] | None = None,
    ) -> None:
        super().__init__(
            source,
            PasswordPolicySettings,
            "PasswordPolicy",
            "DomainPasswordPolicy",
            cache,
            binder,
        )


class PasswordResetConfigResolver(DomainConfigResolver[PasswordResetSettings]):
    """Password reset settings per domain."""

    def __init__(
        self,
        source: ConfigurationSource,
        cache: ConfigCache[PasswordResetSettings] | None = None,
        binder: Binder[PasswordResetSettings] | None = None,
    ) -> None:
        super().__init__(
            source,
            PasswordResetSettings,
            "PasswordResetSettings",
            "DomainPasswordResetSettings",
            cache,
            binder,
        )
