"""Security policy records.

One policy document per domain, persisted as camelCase JSON. The password
section reuses PasswordPolicySettings so a domain's stored policy and its
configured password policy share one shape.
"""

from pydantic import ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domainconf.models.base import PolicyModel
from domainconf.models.password import PasswordPolicySettings


class LoginSecuritySettings(PolicyModel):
    """Lockout and device tracking rules."""

    max_failed_attempts: int = Field(default=5, description="Failed logins before lockout")
    lockout_duration_minutes: int = Field(default=15, description="Lockout duration")
    reset_failed_attempts_after_minutes: int = Field(
        default=30,
        description="Inactivity after which the failure count resets",
    )
    enable_device_tracking: bool = Field(default=True, description="Track login devices")
    notify_on_new_device: bool = Field(default=True, description="Notify on new device logins")
    require_mfa_for_new_device: bool = Field(default=False, description="MFA for unknown devices")
    block_new_device_without_mfa: bool = Field(
        default=False,
        description="Block new devices when the user has no MFA",
    )


class EmailConfirmationPolicySettings(PolicyModel):
    """Email confirmation requirements."""

    required: bool = Field(default=False, description="Require email confirmation")
    token_expiration_hours: int = Field(default=24, description="Token lifetime")
    max_emails_per_hour: int = Field(default=3, description="Confirmation emails per hour")
    max_emails_per_day: int = Field(default=10, description="Confirmation emails per day")


class MobileConfirmationPolicySettings(PolicyModel):
    """Mobile confirmation requirements."""

    required: bool = Field(default=False, description="Require mobile confirmation")
    code_expiration_minutes: int = Field(default=10, description="Code lifetime")
    max_sms_per_hour: int = Field(default=3, description="SMS per hour")
    max_sms_per_day: int = Field(default=10, description="SMS per day")
    code_length: int = Field(default=6, description="Number of digits")


class SessionManagementSettings(PolicyModel):
    """Session and token lifetime rules."""

    access_token_lifetime_minutes: int = Field(default=15, description="Access token lifetime")
    refresh_token_lifetime_days: int = Field(default=7, description="Refresh token lifetime")
    allow_concurrent_sessions: bool = Field(default=True, description="Allow concurrent sessions")
    max_concurrent_sessions: int = Field(default=0, description="Session cap (0 = unlimited)")
    rotate_refresh_token: bool = Field(default=False, description="Rotate refresh tokens on use")
    invalidate_sessions_on_password_change: bool = Field(
        default=True,
        description="Sign out everywhere after a password change",
    )


class MfaPolicySettings(PolicyModel):
    """Multi-factor authentication rules."""

    required: bool = Field(default=False, description="Require MFA for all users")
    allowed_methods: list[str] = Field(
        default_factory=lambda: ["totp", "sms", "email"],
        description="Allowed MFA methods",
    )
    preferred_method: str = Field(default="totp", description="Preferred MFA method")
    allow_backup_method: bool = Field(default=True, description="Allow a backup method")
    grace_period_days: int = Field(default=0, description="Days to enrol (0 = immediately)")
    remember_device_days: int = Field(default=30, description="Trusted device lifetime")


class PolicyPasswordSettings(PasswordPolicySettings):
    """PasswordPolicySettings with camelCase keys, for policy documents."""

    model_config = ConfigDict(alias_generator=to_camel)


class SecurityPolicy(PolicyModel):
    """Complete security policy for a domain."""

    domain: str = Field(default="", description="Domain the policy applies to")
    description: str = Field(default="", description="Free-text description")
    login_security: LoginSecuritySettings = Field(default_factory=LoginSecuritySettings)
    password_policy: PolicyPasswordSettings = Field(default_factory=PolicyPasswordSettings)
    email_confirmation: EmailConfirmationPolicySettings = Field(
        default_factory=EmailConfirmationPolicySettings
    )
    mobile_confirmation: MobileConfirmationPolicySettings = Field(
        default_factory=MobileConfirmationPolicySettings
    )
    session_management: SessionManagementSettings = Field(
        default_factory=SessionManagementSettings
    )
    mfa_policy: MfaPolicySettings = Field(default_factory=MfaPolicySettings)

    @field_validator("password_policy", mode="before")
    @classmethod
    def _accept_password_policy_settings(cls, value: object) -> object:
        # Accept the configuration-bound shape as well
        if isinstance(value, PasswordPolicySettings) and not isinstance(
            value, PolicyPasswordSettings
        ):
            return value.model_dump()
        return value

    def for_domain(self, domain: str) -> "SecurityPolicy":
        """Copy of this policy attributed to another domain."""
        return self.model_copy(update={"domain": domain})


def default_security_policy(domain: str) -> SecurityPolicy:
    """The built-in policy used when no policy file applies."""
    return SecurityPolicy(domain=domain, description="Default security policy")
