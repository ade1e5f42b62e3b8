"""Wire structlog through stdlib logging from Serilog-style settings.

configure_logging replaces the bootstrap logger set up by setup_logging:

- the default minimum level goes on the root logger, overrides on the
  named loggers
- a console handler and/or a rolling file handler are attached to root
- enrichers and static properties are added to every event

Serilog output templates have no stdlib equivalent and are not applied;
events are rendered as JSON (files always, console when format is "json")
or by the structlog console renderer.
"""

import logging
import logging.handlers
import os
import socket
import sys
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from domainconf.config.loader import get_environment
from domainconf.models.logging import ConsoleSinkSettings, FileSinkSettings, SerilogSettings
from domainconf.observability.logging import PIIRedactor

# Serilog level names onto stdlib levels
LEVEL_NUMBERS: dict[str, int] = {
    "verbose": 5,
    "trace": 5,
    "debug": logging.DEBUG,
    "information": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "none": logging.CRITICAL + 10,
}

# rolling interval -> (TimedRotatingFileHandler when, interval)
ROLLING_INTERVALS: dict[str, tuple[str, int]] = {
    "minute": ("M", 1),
    "hour": ("H", 1),
    "day": ("midnight", 1),
    "month": ("D", 30),
    "year": ("D", 365),
}

BUFFER_CAPACITY = 1000

_HANDLER_MARKER = "_domainconf_handler"


def parse_level(name: str | None, default: int = logging.INFO) -> int:
    """Stdlib level number for a Serilog level name."""
    if not name:
        return default
    return LEVEL_NUMBERS.get(name.strip().lower(), default)


class StaticPropertiesEnricher:
    """Adds fixed key/value pairs to every event without overwriting."""

    def __init__(self, properties: Mapping[str, Any]) -> None:
        self._properties = dict(properties)

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        for key, value in self._properties.items():
            event_dict.setdefault(key, value)
        return event_dict


def add_thread_id(_logger: WrappedLogger, _method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("thread_id", threading.get_ident())
    return event_dict


def build_enrichers(settings: SerilogSettings, environment: str | None = None) -> list[Processor]:
    """Processors for the configured enrichers and static properties.

    FromLogContext is always on (contextvars are merged by the shared chain).
    """
    enrich = {name.lower() for name in settings.enrich}
    static: dict[str, Any] = {}

    if "withmachinename" in enrich:
        static["machine_name"] = socket.gethostname()
    if "withenvironmentname" in enrich:
        static["environment"] = environment or get_environment()
    static.update(settings.properties)

    processors: list[Processor] = []
    if static:
        processors.append(StaticPropertiesEnricher(static))
    if "withthreadid" in enrich:
        processors.append(add_thread_id)
    return processors


def _shared_processors(
    settings: SerilogSettings,
    redact_pii: bool,
    environment: str | None,
) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    processors.extend(build_enrichers(settings, environment))
    if redact_pii:
        processors.append(PIIRedactor())
    return processors


def _formatter(shared: list[Processor], renderer: Processor) -> structlog.stdlib.ProcessorFormatter:
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def build_console_handler(sink: ConsoleSinkSettings, default_level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(parse_level(sink.restricted_to_minimum_level, default_level))
    return handler


def build_file_handler(sink: FileSinkSettings, default_level: int) -> logging.Handler:
    """Rolling file handler, wrapped in a MemoryHandler when buffered.

    An Infinite interval rolls by size only; any other interval rolls by time
    and ignores the size limit.
    """
    path = Path(sink.path)
    path.parent.mkdir(parents=True, exist_ok=True)
    backup_count = sink.retained_file_count_limit or 0

    file_handler: logging.Handler
    interval_name = sink.rolling_interval.strip().lower()
    if interval_name in ROLLING_INTERVALS:
        when, interval = ROLLING_INTERVALS[interval_name]
        file_handler = logging.handlers.TimedRotatingFileHandler(
            path,
            when=when,
            interval=interval,
            backupCount=backup_count,
            encoding="utf-8",
        )
    else:
        max_bytes = (sink.file_size_limit_bytes or 0) if sink.roll_on_file_size_limit else 0
        file_handler = logging.handlers.RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )

    level = parse_level(sink.restricted_to_minimum_level, default_level)
    file_handler.setLevel(level)

    if not sink.buffered:
        return file_handler

    buffered = logging.handlers.MemoryHandler(
        capacity=BUFFER_CAPACITY,
        flushLevel=logging.ERROR,
        target=file_handler,
    )
    buffered.setLevel(level)
    return buffered


def _remove_installed_handlers(root: logging.Logger) -> None:
    for handler in list(root.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root.removeHandler(handler)
            target = getattr(handler, "target", None)
            handler.close()
            if target is not None:
                target.close()


def configure_logging(
    settings: SerilogSettings,
    format: str = "json",
    redact_pii: bool = True,
    environment: str | None = None,
) -> list[logging.Handler]:
    """Route structlog through stdlib logging as the settings describe.

    Handlers installed by an earlier call are removed first, so this can be
    called again after the logging configuration is refreshed.

    Args:
        settings: Serilog section settings
        format: Console rendering - "json" or "console"
        redact_pii: Whether to redact secrets and PII
        environment: Value for the WithEnvironmentName enricher

    Returns:
        The handlers attached to the root logger
    """
    default_level = parse_level(settings.minimum_level.default)
    shared = _shared_processors(settings, redact_pii, environment)

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    _remove_installed_handlers(root)
    root.setLevel(default_level)

    for category, level in settings.minimum_level.override.items():
        logging.getLogger(category).setLevel(parse_level(level, default_level))

    json_formatter = _formatter(shared, structlog.processors.JSONRenderer())
    handlers: list[logging.Handler] = []

    if settings.console is not None and settings.console.enabled:
        console = build_console_handler(settings.console, default_level)
        if format == "json":
            console.setFormatter(json_formatter)
        else:
            console.setFormatter(_formatter(shared, structlog.dev.ConsoleRenderer(colors=False)))
        handlers.append(console)

    if settings.file is not None and settings.file.enabled:
        file_handler = build_file_handler(settings.file, default_level)
        target = getattr(file_handler, "target", None) or file_handler
        target.setFormatter(json_formatter)
        handlers.append(file_handler)

    for handler in handlers:
        setattr(handler, _HANDLER_MARKER, True)
        root.addHandler(handler)

    structlog.get_logger(__name__).info(
        "logging_configured",
        level=logging.getLevelName(default_level),
        handlers=[type(handler).__name__ for handler in handlers],
        pid=os.getpid(),
    )
    return handlers
