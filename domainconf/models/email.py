"""Email/SMTP settings."""

from pydantic import Field

from domainconf.models.base import SettingsModel


class EmailSettings(SettingsModel):
    """Email/SMTP configuration with per-domain branding."""

    smtp_server: str = Field(default="", description="SMTP server hostname")
    smtp_port: int = Field(default=587, description="SMTP port (587 for STARTTLS)")
    sender_email: str = Field(default="", description="Sender email address")
    sender_name: str = Field(default="", description="Sender display name")
    username: str = Field(default="", description="SMTP authentication username")
    password: str = Field(default="", description="SMTP authentication password")
    enable_ssl: bool = Field(default=True, description="Use SSL/TLS for SMTP")

    # Branding, typically domain-specific
    company_name: str | None = Field(default=None, description="Company name for branding")
    logo_url: str | None = Field(default=None, description="Logo URL for templates")
    support_email: str | None = Field(default=None, description="Support address shown in emails")
    website_url: str | None = Field(default=None, description="Company website URL")
    template_folder: str | None = Field(default=None, description="Domain template folder name")
    ethereal_web_url: str | None = Field(
        default=None,
        description="Test mailbox web URL (development only)",
    )
