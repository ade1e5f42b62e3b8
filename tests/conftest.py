"""Shared test fixtures for the domainconf test suite."""

import json
import os
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from domainconf.source.memory import InMemoryConfigurationSource


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "app_name = 'test'",
                "development.toml": "[caching]\\nenabled = false",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            toml_file = test_config_dir / filename
            toml_file.write_text(content)

    return _create_toml_files


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Factory fixture writing JSON documents under tmp_path.

    Usage:
        path = write_json("appsettings.json", {"EmailSettings": {...}})
    """

    def _write(relative_path: str, data: Any) -> Path:
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data))
        return path

    return _write


class EnvOverrideContext:
    """Context manager for temporarily setting environment variables."""

    def __init__(self, overrides: dict[str, str]) -> None:
        self.overrides = overrides
        self.original_env: dict[str, str | None] = {}

    def __enter__(self) -> None:
        for key, value in self.overrides.items():
            self.original_env[key] = os.environ.get(key)
            os.environ[key] = value

    def __exit__(self, *args: Any) -> None:
        for key in self.overrides:
            if self.original_env[key] is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = self.original_env[key]


@pytest.fixture
def env_override() -> Generator[Callable[[dict[str, str]], EnvOverrideContext], None, None]:
    """Context manager for temporarily setting environment variables.

    Usage:
        def test_something(env_override):
            with env_override({"DOMAINCONF_CACHING__ENABLED": "false"}):
                # test code here
    """

    def _env_override(overrides: dict[str, str]) -> EnvOverrideContext:
        return EnvOverrideContext(overrides)

    yield _env_override


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from domainconf.config import get_settings
    from domainconf.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture
def tenant_config() -> dict[str, Any]:
    """A configuration tree with global settings and two domains."""
    return {
        "EmailSettings": {
            "SmtpServer": "smtp.global.test",
            "SmtpPort": 587,
            "SenderEmail": "no-reply@global.test",
            "SenderName": "Global",
        },
        "DomainEmailSettings": {
            "acme": {
                "SmtpServer": "smtp.acme.test",
                "SmtpPort": 2525,
                "SenderEmail": "hello@acme.test",
            },
            "empty": {},
        },
        "SmsSettings": {
            "Provider": "Twilio",
            "TwilioAccountSid": "AC123",
            "TwilioAuthToken": "token",
            "TwilioPhoneNumber": "+15550000000",
        },
        "JwtSettings": {
            "SecretKey": "x" * 40,
            "AccessTokenExpirationMinutes": 30,
        },
        "DomainJwtSettings": {
            "acme": {"SecretKey": "y" * 40, "Issuer": "acme"},
        },
        "PasswordPolicy": {"MinimumLength": 10},
        "DomainConnectionStrings": {
            "acme": "Host=db;Database=acme;Password=secret",
            "globex": "Host=db;Database=globex",
        },
    }


@pytest.fixture
def source(tenant_config: dict[str, Any]) -> InMemoryConfigurationSource:
    """In-memory configuration source over tenant_config."""
    return InMemoryConfigurationSource(tenant_config)
