"""Logging configuration resolved from the Serilog and Logging sections.

The settings tree is built once, on first use, and then read without locking
until `refresh()` drops it. Level names follow the Serilog vocabulary
(Verbose, Debug, Information, Warning, Error, Fatal) plus Trace and None.
"""

import threading

from domainconf.models.logging import (
    ConsoleSinkSettings,
    FileSinkSettings,
    LoggingSettings,
    MinimumLevelSettings,
    SerilogSettings,
    StandardLoggingSettings,
)
from domainconf.observability.logging import get_logger
from domainconf.source.base import ConfigurationSection, ConfigurationSource

logger = get_logger(__name__)

LOG_LEVEL_RANKS: dict[str, int] = {
    "verbose": 0,
    "trace": 0,
    "debug": 1,
    "information": 2,
    "warning": 3,
    "error": 4,
    "fatal": 5,
    "none": 6,
}

DEFAULT_LEVEL = "Information"
_DEFAULT_RANK = LOG_LEVEL_RANKS["information"]


def level_rank(level: str | None) -> int:
    """Rank of a level name; unknown names rank as Information."""
    if not level:
        return _DEFAULT_RANK
    return LOG_LEVEL_RANKS.get(level.strip().lower(), _DEFAULT_RANK)


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return default


def _parse_int(value: str | None, default: int | None) -> int | None:
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _args(sink: ConfigurationSection) -> dict[str, str | None]:
    """Sink arguments keyed by lower-cased name."""
    return {child.key.lower(): child.value for child in sink.get_section("Args").get_children()}


class LoggingConfigResolver:
    """Builds and caches the logging settings tree."""

    def __init__(self, source: ConfigurationSource) -> None:
        if source is None:
            raise ValueError("source is required")
        self._source = source
        self._settings: LoggingSettings | None = None
        self._lock = threading.Lock()

    def get_settings(self) -> LoggingSettings:
        """Get the full logging settings tree, building it on first use."""
        settings = self._settings
        if settings is not None:
            return settings

        with self._lock:
            if self._settings is None:
                self._settings = self._build_settings()
            return self._settings

    def get_serilog_settings(self) -> SerilogSettings:
        return self.get_settings().serilog

    def get_standard_logging_settings(self) -> StandardLoggingSettings:
        return self.get_settings().logging

    def get_log_level_for_category(self, category: str) -> str:
        """Minimum level for a logger category.

        An exact override wins; otherwise the longest override key that is a
        case-insensitive prefix of the category; otherwise the default level.
        """
        minimum_level = self.get_serilog_settings().minimum_level
        overrides = minimum_level.override

        if category in overrides:
            return overrides[category]

        lowered = category.lower()
        matches = [key for key in overrides if lowered.startswith(key.lower())]
        if matches:
            return overrides[max(matches, key=len)]

        return minimum_level.default

    def is_enabled(self, category: str, requested_level: str) -> bool:
        """Whether an event at requested_level passes the category's minimum."""
        return level_rank(requested_level) >= level_rank(self.get_log_level_for_category(category))

    def refresh(self) -> None:
        """Drop the built tree; the next read rebuilds it from the source."""
        with self._lock:
            self._settings = None
        logger.info("logging_settings_refreshed")

    def _build_settings(self) -> LoggingSettings:
        serilog = self._build_serilog(self._source.get_section("Serilog"))

        standard = StandardLoggingSettings()
        log_level_section = self._source.get_section("Logging:LogLevel")
        if log_level_section.exists():
            standard = StandardLoggingSettings(
                log_level={
                    child.key: child.value or DEFAULT_LEVEL
                    for child in log_level_section.get_children()
                }
            )

        logger.debug(
            "logging_settings_built",
            default_level=serilog.minimum_level.default,
            overrides=len(serilog.minimum_level.override),
            console=serilog.console is not None,
            file=serilog.file is not None,
        )
        return LoggingSettings(serilog=serilog, logging=standard)

    def _build_serilog(self, section: ConfigurationSection) -> SerilogSettings:
        if not section.exists():
            return SerilogSettings()

        minimum_level = self._build_minimum_level(section.get_section("MinimumLevel"))

        console: ConsoleSinkSettings | None = None
        file: FileSinkSettings | None = None
        for sink in section.get_section("WriteTo").get_children():
            name = (sink.get_value("Name") or "").lower()
            if name == "console":
                console = self._build_console(sink)
            elif name == "file":
                file = self._build_file(sink)
            elif name:
                logger.debug("logging_sink_ignored", sink=sink.get_value("Name"))

        return SerilogSettings(
            minimum_level=minimum_level,
            console=console,
            file=file,
            properties={
                child.key: child.value or ""
                for child in section.get_section("Properties").get_children()
            },
            using=[c.value for c in section.get_section("Using").get_children() if c.value],
            enrich=[c.value for c in section.get_section("Enrich").get_children() if c.value],
        )

    def _build_minimum_level(self, section: ConfigurationSection) -> MinimumLevelSettings:
        defaults = MinimumLevelSettings()
        if not section.exists():
            return defaults

        # "MinimumLevel": "Debug" is shorthand for the default level alone
        if section.value:
            return MinimumLevelSettings(default=section.value, override=defaults.override)

        override = defaults.override
        override_section = section.get_section("Override")
        if override_section.exists():
            override = {
                child.key: child.value or DEFAULT_LEVEL
                for child in override_section.get_children()
            }

        return MinimumLevelSettings(
            default=section.get_value("Default") or DEFAULT_LEVEL,
            override=override,
        )

    def _build_console(self, sink: ConfigurationSection) -> ConsoleSinkSettings:
        args = _args(sink)
        return ConsoleSinkSettings(
            output_template=args.get("outputtemplate"),
            theme=args.get("theme"),
            restricted_to_minimum_level=args.get("restrictedtominimumlevel"),
        )

    def _build_file(self, sink: ConfigurationSection) -> FileSinkSettings:
        args = _args(sink)
        defaults = FileSinkSettings()
        return FileSinkSettings(
            path=args.get("path") or defaults.path,
            rolling_interval=args.get("rollinginterval") or defaults.rolling_interval,
            file_size_limit_bytes=_parse_int(
                args.get("filesizelimitbytes"), defaults.file_size_limit_bytes
            ),
            retained_file_count_limit=_parse_int(
                args.get("retainedfilecountlimit"), defaults.retained_file_count_limit
            ),
            output_template=args.get("outputtemplate"),
            buffered=_parse_bool(args.get("buffered"), defaults.buffered),
            shared=_parse_bool(args.get("shared"), defaults.shared),
            restricted_to_minimum_level=args.get("restrictedtominimumlevel"),
            roll_on_file_size_limit=_parse_bool(
                args.get("rollonfilesizelimit"), defaults.roll_on_file_size_limit
            ),
        )
