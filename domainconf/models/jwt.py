"""JWT settings."""

from pydantic import Field

from domainconf.models.base import SettingsModel


class JwtSettings(SettingsModel):
    """JWT signing and token lifetime configuration."""

    key_type: str = Field(default="hmac", description='Signing key type: "hmac" or "rsa"')
    secret_key: str = Field(default="", description="HMAC secret (at least 32 characters)")
    rsa_private_key_path: str | None = Field(default=None, description="RSA private key file")
    rsa_private_key_pem: str | None = Field(default=None, description="RSA private key in PEM")
    issuer: str = Field(default="AuthenticationApi", description="Issuer claim")
    audience: str = Field(default="AuthenticationApiClient", description="Audience claim")
    access_token_expiration_minutes: int = Field(default=15, description="Access token lifetime")
    refresh_token_expiration_days: int = Field(default=7, description="Refresh token lifetime")
    anonymous_token_expiration_minutes: int = Field(
        default=10,
        description="Anonymous token lifetime",
    )
    rotate_refresh_token: bool = Field(default=False, description="Rotate refresh tokens on use")
