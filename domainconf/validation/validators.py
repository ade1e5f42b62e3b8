"""Startup validators for the settings every deployment depends on."""

from pathlib import Path

from domainconf.source.base import ConfigurationSection, ConfigurationSource
from domainconf.source.binding import canonical_key
from domainconf.validation.base import ConfigurationValidator, ValidationResult

MIN_HMAC_SECRET_LENGTH = 32
ACCESS_TOKEN_MINUTES_RANGE = (1, 1440)
REFRESH_TOKEN_DAYS_RANGE = (1, 365)


def _parse_int(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _field(section: ConfigurationSection, name: str) -> str | None:
    """Value of a child key, matched the way binding matches field names."""
    wanted = canonical_key(name)
    for child in section.get_children():
        if canonical_key(child.key) == wanted:
            return child.value
    return None


def _looks_like_email(value: str) -> bool:
    return "@" in value and "." in value


class EmailSettingsValidator(ConfigurationValidator):
    """SMTP server and sender must be configured."""

    @property
    def configuration_name(self) -> str:
        return "EmailSettings"

    def validate(self, source: ConfigurationSource) -> ValidationResult:
        result = ValidationResult()
        section = source.get_section("EmailSettings")

        if not section.exists():
            result.add_warning("EmailSettings section not found - email functionality may not work")
            return result

        if not _field(section, "SmtpServer"):
            result.add_error("EmailSettings:SmtpServer is required")

        sender_email = _field(section, "SenderEmail")
        if not sender_email:
            result.add_error("EmailSettings:SenderEmail is required")
        elif not _looks_like_email(sender_email):
            result.add_error(
                f"EmailSettings:SenderEmail '{sender_email}' is not a valid email address"
            )

        port = _field(section, "SmtpPort")
        if port and _parse_int(port) is None:
            result.add_error(f"EmailSettings:SmtpPort '{port}' is not a valid port number")

        return result


class SmsSettingsValidator(ConfigurationValidator):
    """Twilio credentials should be present; gaps are warnings only."""

    @property
    def configuration_name(self) -> str:
        return "SmsSettings"

    def validate(self, source: ConfigurationSource) -> ValidationResult:
        result = ValidationResult()
        section = source.get_section("SmsSettings")

        if not section.exists():
            result.add_warning("SmsSettings section not found - SMS functionality may not work")
            return result

        provider = (_field(section, "Provider") or "twilio").lower()
        if provider != "twilio":
            return result

        account_sid = _field(section, "TwilioAccountSid")
        if not account_sid:
            result.add_warning(
                "SmsSettings:TwilioAccountSid is not configured - SMS sending will fail"
            )
        elif not account_sid.startswith("AC"):
            result.add_warning("SmsSettings:TwilioAccountSid should start with 'AC'")

        if not _field(section, "TwilioAuthToken"):
            result.add_warning(
                "SmsSettings:TwilioAuthToken is not configured - SMS sending will fail"
            )

        if not _field(section, "TwilioPhoneNumber"):
            result.add_warning(
                "SmsSettings:TwilioPhoneNumber is not configured - SMS sending will fail"
            )

        return result


class JwtSettingsValidator(ConfigurationValidator):
    """Signing key material must match the key type; expiries should be sane."""

    @property
    def configuration_name(self) -> str:
        return "JwtSettings"

    def validate(self, source: ConfigurationSource) -> ValidationResult:
        result = ValidationResult()
        section = source.get_section("JwtSettings")

        if not section.exists():
            return ValidationResult.failure("JwtSettings section is required for authentication")

        key_type = (_field(section, "KeyType") or "hmac").lower()

        if key_type == "hmac":
            secret_key = _field(section, "SecretKey")
            if not secret_key:
                result.add_error("JwtSettings:SecretKey is required for HMAC signing")
            elif len(secret_key) < MIN_HMAC_SECRET_LENGTH:
                result.add_error(
                    f"JwtSettings:SecretKey must be at least {MIN_HMAC_SECRET_LENGTH} "
                    "characters for security"
                )
        elif key_type == "rsa":
            key_path = _field(section, "RsaPrivateKeyPath")
            key_pem = _field(section, "RsaPrivateKeyPem")
            if not key_path and not key_pem:
                result.add_error(
                    "JwtSettings:RsaPrivateKeyPath or RsaPrivateKeyPem is required for RSA signing"
                )
            elif key_path and not Path(key_path).is_file():
                result.add_error(f"JwtSettings:RsaPrivateKeyPath file not found: {key_path}")
        else:
            result.add_error(f"JwtSettings:KeyType '{key_type}' is not valid. Use 'hmac' or 'rsa'")

        access_minutes = _parse_int(_field(section, "AccessTokenExpirationMinutes"))
        low, high = ACCESS_TOKEN_MINUTES_RANGE
        if access_minutes is not None and not low <= access_minutes <= high:
            result.add_warning(
                "JwtSettings:AccessTokenExpirationMinutes should be between 1 and 1440 (24 hours)"
            )

        refresh_days = _parse_int(_field(section, "RefreshTokenExpirationDays"))
        low, high = REFRESH_TOKEN_DAYS_RANGE
        if refresh_days is not None and not low <= refresh_days <= high:
            result.add_warning("JwtSettings:RefreshTokenExpirationDays should be between 1 and 365")

        return result


class DatabaseSettingsValidator(ConfigurationValidator):
    """At least one domain connection string, none of them empty."""

    def __init__(self, section: str = "DomainConnectionStrings") -> None:
        self._section = section

    @property
    def configuration_name(self) -> str:
        return self._section

    def validate(self, source: ConfigurationSource) -> ValidationResult:
        section = source.get_section(self._section)

        if not section.exists():
            return ValidationResult.failure(
                f"{self._section} section is required for database connectivity"
            )

        domains = section.get_children()
        if not domains:
            return ValidationResult.failure(f"{self._section} has no domains configured")

        result = ValidationResult()
        for domain in domains:
            if not domain.value:
                result.add_error(f"{self._section}:{domain.key} has no connection string")
        return result


def default_validators() -> list[ConfigurationValidator]:
    """The validators run at startup unless others are supplied."""
    return [
        EmailSettingsValidator(),
        SmsSettingsValidator(),
        JwtSettingsValidator(),
        DatabaseSettingsValidator(),
    ]
