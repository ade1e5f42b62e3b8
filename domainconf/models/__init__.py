"""Settings records resolved by domainconf.

    from domainconf.models import EmailSettings, SecurityPolicy
"""

from domainconf.models.base import PolicyModel, SettingsModel
from domainconf.models.confirmation import (
    EmailConfirmationSettings,
    MobileConfirmationSettings,
    MockServiceSettings,
    OtpSettings,
)
from domainconf.models.email import EmailSettings
from domainconf.models.jwt import JwtSettings
from domainconf.models.logging import (
    ConsoleSinkSettings,
    FileSinkSettings,
    LoggingSettings,
    MinimumLevelSettings,
    SerilogSettings,
    StandardLoggingSettings,
)
from domainconf.models.password import PasswordPolicySettings, PasswordResetSettings
from domainconf.models.security_policy import (
    EmailConfirmationPolicySettings,
    LoginSecuritySettings,
    MfaPolicySettings,
    MobileConfirmationPolicySettings,
    PolicyPasswordSettings,
    SecurityPolicy,
    SessionManagementSettings,
    default_security_policy,
)
from domainconf.models.sms import SmsSettings

__all__ = [
    # Base
    "PolicyModel",
    "SettingsModel",
    # Domain-resolved settings
    "EmailSettings",
    "JwtSettings",
    "PasswordPolicySettings",
    "PasswordResetSettings",
    "SmsSettings",
    # Fixed sections
    "EmailConfirmationSettings",
    "MobileConfirmationSettings",
    "MockServiceSettings",
    "OtpSettings",
    # Security policy
    "EmailConfirmationPolicySettings",
    "LoginSecuritySettings",
    "MfaPolicySettings",
    "MobileConfirmationPolicySettings",
    "PolicyPasswordSettings",
    "SecurityPolicy",
    "SessionManagementSettings",
    "default_security_policy",
    # Logging
    "ConsoleSinkSettings",
    "FileSinkSettings",
    "LoggingSettings",
    "MinimumLevelSettings",
    "SerilogSettings",
    "StandardLoggingSettings",
]
