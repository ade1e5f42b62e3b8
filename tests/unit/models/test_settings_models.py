"""Tests for settings and policy records."""

import pytest
from pydantic import ValidationError

from domainconf.models import (
    EmailSettings,
    JwtSettings,
    PasswordPolicySettings,
    PolicyPasswordSettings,
    SecurityPolicy,
    default_security_policy,
)


class TestSettingsModels:
    """Tests for configuration-bound settings."""

    def test_defaults(self) -> None:
        """Every field has a default."""
        assert EmailSettings().smtp_port == 587
        assert JwtSettings().key_type == "hmac"
        assert PasswordPolicySettings().minimum_length == 8

    def test_pascal_case_aliases(self) -> None:
        """Settings dump with PascalCase keys."""
        dumped = EmailSettings(smtp_server="smtp.test").model_dump(by_alias=True)
        assert dumped["SmtpServer"] == "smtp.test"
        assert "EnableSsl" in dumped

    def test_frozen(self) -> None:
        """Settings cannot be mutated."""
        with pytest.raises(ValidationError):
            JwtSettings().issuer = "other"  # type: ignore[misc]


class TestSecurityPolicy:
    """Tests for SecurityPolicy."""

    def test_default_policy(self) -> None:
        """The built-in policy is attributed to its domain."""
        policy = default_security_policy("acme")
        assert policy.domain == "acme"
        assert policy.description == "Default security policy"
        assert policy.login_security.max_failed_attempts == 5
        assert policy.login_security.lockout_duration_minutes == 15
        assert policy.mfa_policy.allowed_methods == ["totp", "sms", "email"]

    def test_for_domain_copies(self) -> None:
        """for_domain returns a copy with the new domain."""
        original = default_security_policy("acme")
        copy = original.for_domain("globex")
        assert copy.domain == "globex"
        assert original.domain == "acme"
        assert copy.login_security == original.login_security

    def test_camel_case_round_trip(self) -> None:
        """Policies dump and load with camelCase keys."""
        policy = default_security_policy("acme")
        dumped = policy.model_dump(by_alias=True)
        assert dumped["passwordPolicy"]["requireUppercase"] is True
        assert dumped["sessionManagement"]["accessTokenLifetimeMinutes"] == 15
        assert SecurityPolicy.model_validate(dumped) == policy

    def test_accepts_configured_password_policy(self) -> None:
        """A configuration-bound password policy can be embedded."""
        policy = SecurityPolicy(password_policy=PasswordPolicySettings(minimum_length=16))
        assert isinstance(policy.password_policy, PolicyPasswordSettings)
        assert policy.password_policy.minimum_length == 16
