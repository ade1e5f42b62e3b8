"""Startup validation of critical configuration."""

from domainconf.validation.base import ConfigurationValidator, ValidationResult
from domainconf.validation.runner import ConfigurationValidationRunner, ValidationReport
from domainconf.validation.validators import (
    DatabaseSettingsValidator,
    EmailSettingsValidator,
    JwtSettingsValidator,
    SmsSettingsValidator,
    default_validators,
)

__all__ = [
    "ConfigurationValidationRunner",
    "ConfigurationValidator",
    "DatabaseSettingsValidator",
    "EmailSettingsValidator",
    "JwtSettingsValidator",
    "SmsSettingsValidator",
    "ValidationReport",
    "ValidationResult",
    "default_validators",
]
