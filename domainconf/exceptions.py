"""Exception hierarchy for domainconf.

Ordinary absence of configuration never raises. These exceptions cover
startup failures only: unreadable configuration files and validation errors
when the fail-on-errors switch is on.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from domainconf.validation.runner import ValidationReport


class DomainConfigError(Exception):
    """Base exception for all domainconf errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationFileError(DomainConfigError):
    """Raised when a configuration file exists but cannot be read or parsed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class StartupValidationError(DomainConfigError):
    """Raised when startup validation fails and failing is enabled."""

    def __init__(self, message: str, report: "ValidationReport") -> None:
        super().__init__(message)
        self.report = report
