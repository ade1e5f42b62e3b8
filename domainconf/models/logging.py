"""Logging settings tree built from the Serilog and Logging sections."""

from pydantic import Field

from domainconf.models.base import SettingsModel


class MinimumLevelSettings(SettingsModel):
    """Default minimum level plus per-category overrides."""

    default: str = Field(default="Information", description="Default minimum level")
    override: dict[str, str] = Field(
        default_factory=lambda: {"asyncio": "Warning", "urllib3": "Warning"},
        description="Minimum level per logger-name prefix",
    )


class ConsoleSinkSettings(SettingsModel):
    """Console sink configuration."""

    enabled: bool = Field(default=True, description="Whether the sink is enabled")
    output_template: str | None = Field(default=None, description="Output template")
    theme: str | None = Field(default=None, description="Console theme name")
    restricted_to_minimum_level: str | None = Field(
        default=None,
        description="Minimum level for this sink (overrides the default)",
    )


class FileSinkSettings(SettingsModel):
    """Rolling file sink configuration."""

    enabled: bool = Field(default=True, description="Whether the sink is enabled")
    path: str = Field(default="Logs/app-.log", description="Log file path")
    rolling_interval: str = Field(default="Day", description="Infinite, Year, Month, Day, Hour, Minute")
    file_size_limit_bytes: int | None = Field(default=10_485_760, description="Roll size (10MB)")
    retained_file_count_limit: int | None = Field(default=31, description="Files kept")
    output_template: str | None = Field(default=None, description="Output template")
    buffered: bool = Field(default=False, description="Buffer writes")
    shared: bool = Field(default=False, description="Allow several processes to share the file")
    restricted_to_minimum_level: str | None = Field(
        default=None,
        description="Minimum level for this sink (overrides the default)",
    )
    roll_on_file_size_limit: bool = Field(default=True, description="Roll when the size limit is hit")


class SerilogSettings(SettingsModel):
    """Structured logging settings (Serilog section layout)."""

    minimum_level: MinimumLevelSettings = Field(default_factory=MinimumLevelSettings)
    console: ConsoleSinkSettings | None = Field(default=None, description="Console sink")
    file: FileSinkSettings | None = Field(default=None, description="File sink")
    properties: dict[str, str] = Field(default_factory=dict, description="Static event properties")
    using: list[str] = Field(default_factory=list, description="Sink packages in use")
    enrich: list[str] = Field(default_factory=list, description="Enrichers to apply")


class StandardLoggingSettings(SettingsModel):
    """Plain category -> level map (Logging:LogLevel)."""

    log_level: dict[str, str] = Field(
        default_factory=lambda: {"Default": "Information"},
        description="Level per category",
    )


class LoggingSettings(SettingsModel):
    """Complete logging settings tree."""

    serilog: SerilogSettings = Field(default_factory=SerilogSettings)
    logging: StandardLoggingSettings = Field(default_factory=StandardLoggingSettings)
