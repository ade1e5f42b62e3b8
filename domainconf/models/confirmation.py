"""Account confirmation and one-time code settings.

These are bound once from fixed sections; they have no per-domain variants.
"""

from pydantic import Field

from domainconf.models.base import SettingsModel


class EmailConfirmationSettings(SettingsModel):
    """Email confirmation link configuration."""

    expiration_hours: int = Field(default=24, description="Confirmation token lifetime")
    confirmation_link_url: str = Field(default="", description="Base URL of the confirmation link")


class MobileConfirmationSettings(SettingsModel):
    """Mobile confirmation code configuration."""

    expiration_minutes: int = Field(default=10, description="Code lifetime")
    code_length: int = Field(default=6, description="Number of digits")


class OtpSettings(SettingsModel):
    """One-time verification code configuration."""

    expiration_minutes: int = Field(default=10, description="Code lifetime")
    code_length: int = Field(default=6, description="Number of digits")


class MockServiceSettings(SettingsModel):
    """Mock email/SMS delivery for test environments."""

    enabled: bool = Field(default=False, description="Use mock delivery services")
    log_to_console: bool = Field(default=True, description="Echo mock messages to the console")
    log_to_file: bool = Field(default=True, description="Append mock messages to files")
    mock_email_log_path: str = Field(default="Logs/mock-emails.log", description="Mock email log")
    mock_sms_log_path: str = Field(default="Logs/mock-sms.log", description="Mock SMS log")
