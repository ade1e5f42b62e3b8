"""SMS settings."""

from pydantic import Field

from domainconf.models.base import SettingsModel


class SmsSettings(SettingsModel):
    """SMS provider configuration."""

    provider: str = Field(default="Twilio", description="SMS provider name")
    twilio_account_sid: str = Field(default="", description="Twilio account SID")
    twilio_auth_token: str = Field(default="", description="Twilio auth token")
    twilio_phone_number: str = Field(default="", description="Twilio sender number")

    company_name: str | None = Field(default=None, description="Company name for branding")
    support_email: str | None = Field(default=None, description="Support address shown in messages")
    template_folder: str | None = Field(default=None, description="Domain template folder name")
