"""Password policy and password reset settings."""

from pydantic import Field

from domainconf.models.base import SettingsModel


class PasswordPolicySettings(SettingsModel):
    """Password strength, history and expiry rules."""

    prevent_password_reuse: bool = Field(default=True, description="Reject previously used passwords")
    password_history_limit: int = Field(default=5, description="Previous passwords remembered")
    minimum_length: int = Field(default=8, description="Minimum password length")
    maximum_length: int = Field(default=128, description="Maximum password length")
    require_uppercase: bool = Field(default=True, description="Require an uppercase letter")
    require_lowercase: bool = Field(default=True, description="Require a lowercase letter")
    require_digit: bool = Field(default=True, description="Require a digit")
    require_special_character: bool = Field(default=True, description="Require a special character")
    special_characters: str = Field(
        default="!@#$%^&*()_+-=[]{}|;:,.<>?",
        description="Characters counted as special",
    )
    password_expiration_days: int = Field(default=90, description="Expiry in days (0 = never)")
    password_expiration_warning_days: int = Field(
        default=14,
        description="Days before expiry to warn the user",
    )


class PasswordResetSettings(SettingsModel):
    """Password reset link configuration."""

    expiration_minutes: int = Field(default=60, description="Reset link lifetime")
    reset_link_url: str = Field(default="", description="Base URL of the reset link")
