"""Configuration validator interface and result model."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from domainconf.source.base import ConfigurationSource


class ValidationResult(BaseModel):
    """Outcome of validating one configuration area.

    Errors are fatal when the runner is told to fail on errors; warnings
    never are.
    """

    is_valid: bool = Field(default=True, description="False when any error was found")
    errors: list[str] = Field(default_factory=list, description="Fatal issues")
    warnings: list[str] = Field(default_factory=list, description="Non-fatal issues")

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, errors=[error])

    def add_error(self, error: str) -> None:
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)


class ConfigurationValidator(ABC):
    """Checks one area of the configuration tree at startup."""

    @property
    @abstractmethod
    def configuration_name(self) -> str:
        """Name of the configuration area, used in reports and logs."""
        pass

    @abstractmethod
    def validate(self, source: ConfigurationSource) -> ValidationResult:
        """Validate the area. Must not raise for bad configuration."""
        pass
