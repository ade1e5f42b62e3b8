"""Configuration models for the resolvers, cache and startup validation."""

from pydantic import BaseModel, Field


class SourcesConfig(BaseModel):
    """Where the tenant configuration tree is loaded from."""

    files: list[str] = Field(
        default_factory=lambda: ["appsettings.json"],
        description="Configuration files (JSON or TOML), later files override earlier ones",
    )
    optional_files: list[str] = Field(
        default_factory=list,
        description="Files that are merged when present and skipped otherwise",
    )
    env_prefix: str = Field(
        default="DOMAINCONF_APP_",
        description="Prefix of environment variables overlaid on the tree",
    )


class CachingConfig(BaseModel):
    """Resolved settings cache configuration."""

    enabled: bool = Field(default=True, description="Cache resolved settings")
    ttl_seconds: float = Field(
        default=300.0,  # 5 minutes
        gt=0,
        description="Default time-to-live of cached settings (seconds)",
    )


class ValidationConfig(BaseModel):
    """Startup validation configuration."""

    validate_on_startup: bool = Field(
        default=True,
        description="Run configuration validators during bootstrap",
    )
    fail_on_validation_errors: bool = Field(
        default=False,
        description="Abort startup on validation errors instead of logging them",
    )


class SecurityPolicyStoreConfig(BaseModel):
    """Security policy file store configuration."""

    base_path: str = Field(
        default="Configuration",
        description="Directory holding {domain}/security-policy.json files",
    )
