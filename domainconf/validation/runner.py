"""Runs configuration validators and reports the outcome."""

from collections.abc import Sequence

from pydantic import BaseModel, Field

from domainconf.observability.logging import get_logger
from domainconf.observability.metrics import VALIDATION_ISSUES
from domainconf.source.base import ConfigurationSource
from domainconf.validation.base import ConfigurationValidator, ValidationResult

logger = get_logger(__name__)


class ValidationReport(BaseModel):
    """Aggregated validation results."""

    results: dict[str, ValidationResult] = Field(
        default_factory=dict,
        description="Result per configuration name",
    )
    fail_on_errors: bool = Field(default=False, description="Whether errors abort startup")

    @property
    def is_valid(self) -> bool:
        return all(result.is_valid for result in self.results.values())

    @property
    def errors(self) -> list[str]:
        return [error for result in self.results.values() for error in result.errors]

    @property
    def warnings(self) -> list[str]:
        return [warning for result in self.results.values() for warning in result.warnings]

    @property
    def aborted(self) -> bool:
        """True when errors were found and errors are fatal."""
        return self.fail_on_errors and not self.is_valid


class ConfigurationValidationRunner:
    """Runs a fixed set of validators against a configuration source."""

    def __init__(
        self,
        validators: Sequence[ConfigurationValidator],
        fail_on_errors: bool = False,
    ) -> None:
        self._validators = list(validators)
        self._fail_on_errors = fail_on_errors

    @property
    def validators(self) -> list[ConfigurationValidator]:
        return list(self._validators)

    def run(self, source: ConfigurationSource) -> ValidationReport:
        """Validate every area and log the findings. Never raises."""
        report = ValidationReport(fail_on_errors=self._fail_on_errors)

        for validator in self._validators:
            name = validator.configuration_name
            result = validator.validate(source)
            report.results[name] = result

            for warning in result.warnings:
                VALIDATION_ISSUES.labels(configuration_name=name, severity="warning").inc()
                logger.warning("configuration_validation_warning", configuration=name, message=warning)

            for error in result.errors:
                VALIDATION_ISSUES.labels(configuration_name=name, severity="error").inc()
                if self._fail_on_errors:
                    logger.error("configuration_validation_error", configuration=name, message=error)
                else:
                    logger.warning(
                        "configuration_validation_error_non_fatal",
                        configuration=name,
                        message=error,
                    )

        if report.aborted:
            logger.critical("configuration_validation_failed", errors=len(report.errors))
        elif report.is_valid and not report.warnings:
            logger.info("configuration_validation_passed")
        else:
            logger.warning(
                "configuration_validation_completed_with_issues",
                errors=len(report.errors),
                warnings=len(report.warnings),
            )

        return report
