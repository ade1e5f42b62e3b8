"""Tests for file-backed configuration sources."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from domainconf.exceptions import ConfigurationFileError
from domainconf.source.files import (
    FileConfigurationSource,
    deep_merge,
    load_configuration_file,
    overlay_environment,
)


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_objects_merge_recursively(self) -> None:
        """Nested objects keep keys the override does not mention."""
        base = {"EmailSettings": {"SmtpServer": "a", "SmtpPort": 25}, "Other": 3}
        override = {"EmailSettings": {"SmtpPort": 587, "EnableSsl": True}}
        assert deep_merge(base, override) == {
            "EmailSettings": {"SmtpServer": "a", "SmtpPort": 587, "EnableSsl": True},
            "Other": 3,
        }

    def test_scalars_and_lists_replace(self) -> None:
        """Non-object values replace, lists are not concatenated."""
        base = {"Enrich": ["A", "B"], "Serilog": {"MinimumLevel": "Debug"}}
        override = {"Enrich": ["C"], "Serilog": "off"}
        assert deep_merge(base, override) == {"Enrich": ["C"], "Serilog": "off"}

    def test_inputs_unmodified(self) -> None:
        """Neither argument is mutated."""
        base = {"A": {"x": 1}}
        override = {"A": {"y": 2}}
        deep_merge(base, override)
        assert base == {"A": {"x": 1}}
        assert override == {"A": {"y": 2}}


class TestLoadConfigurationFile:
    """Tests for load_configuration_file."""

    def test_loads_json(self, write_json: Callable[[str, Any], Path]) -> None:
        """JSON files load into dictionaries."""
        path = write_json("appsettings.json", {"EmailSettings": {"SmtpServer": "a"}})
        assert load_configuration_file(path) == {"EmailSettings": {"SmtpServer": "a"}}

    def test_loads_toml(self, tmp_path: Path) -> None:
        """TOML files are chosen by suffix."""
        path = tmp_path / "settings.toml"
        path.write_text('[EmailSettings]\nSmtpServer = "a"\n')
        assert load_configuration_file(path) == {"EmailSettings": {"SmtpServer": "a"}}

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_configuration_file(tmp_path / "missing.json")

    def test_malformed_json_raises(self, tmp_path: Path) -> None:
        """Unparsable files raise ConfigurationFileError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationFileError) as exc_info:
            load_configuration_file(path)
        assert exc_info.value.path == str(path)

    def test_top_level_must_be_object(self, tmp_path: Path) -> None:
        """A top-level list is rejected."""
        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2]))
        with pytest.raises(ConfigurationFileError):
            load_configuration_file(path)


class TestOverlayEnvironment:
    """Tests for overlay_environment."""

    def test_nested_override(self) -> None:
        """Double underscores address nested keys."""
        data = {"EmailSettings": {"SmtpServer": "a", "SmtpPort": 25}}
        result = overlay_environment(
            data,
            "APP_",
            {"APP_EmailSettings__SmtpServer": "b", "OTHER": "x"},
        )
        assert result == {"EmailSettings": {"SmtpServer": "b", "SmtpPort": 25}}
        assert data["EmailSettings"]["SmtpServer"] == "a"

    def test_creates_sections(self) -> None:
        """Variables can add new sections."""
        result = overlay_environment({}, "APP_", {"APP_DomainConnectionStrings__acme": "Host=db"})
        assert result == {"DomainConnectionStrings": {"acme": "Host=db"}}

    def test_bare_prefix_ignored(self) -> None:
        """A variable named exactly the prefix is ignored."""
        assert overlay_environment({}, "APP_", {"APP_": "x"}) == {}


class TestFileConfigurationSource:
    """Tests for FileConfigurationSource."""

    def test_later_files_override(self, write_json: Callable[[str, Any], Path]) -> None:
        """Later files are deep-merged over earlier ones."""
        base = write_json(
            "appsettings.json",
            {"EmailSettings": {"SmtpServer": "base", "SmtpPort": 25}},
        )
        override = write_json(
            "appsettings.Production.json",
            {"EmailSettings": {"SmtpServer": "prod"}},
        )

        source = FileConfigurationSource([base, override])

        assert source.get_value("EmailSettings:SmtpServer") == "prod"
        assert source.get_value("EmailSettings:SmtpPort") == "25"
        assert source.loaded_files == [base, override]

    def test_optional_files_skipped_when_missing(
        self, tmp_path: Path, write_json: Callable[[str, Any], Path]
    ) -> None:
        """Missing optional files are skipped."""
        base = write_json("appsettings.json", {"A": "1"})
        source = FileConfigurationSource([base], optional_paths=[tmp_path / "missing.json"])
        assert source.loaded_files == [base]

    def test_required_file_missing_raises(self, tmp_path: Path) -> None:
        """A missing required file raises."""
        with pytest.raises(FileNotFoundError):
            FileConfigurationSource([tmp_path / "appsettings.json"])

    def test_environment_overlay(self, write_json: Callable[[str, Any], Path]) -> None:
        """Prefixed environment variables override file values."""
        base = write_json("appsettings.json", {"JwtSettings": {"Issuer": "file"}})
        source = FileConfigurationSource(
            [base],
            env_prefix="APP_",
            environ={"APP_JwtSettings__Issuer": "env"},
        )
        assert source.get_value("JwtSettings:Issuer") == "env"

    def test_reload_picks_up_changes(self, write_json: Callable[[str, Any], Path]) -> None:
        """reload re-reads files."""
        path = write_json("appsettings.json", {"A": "1"})
        source = FileConfigurationSource([path])

        write_json("appsettings.json", {"A": "2"})
        assert source.get_value("A") == "1"

        source.reload()
        assert source.get_value("A") == "2"
