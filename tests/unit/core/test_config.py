"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lakecatalog.config import Settings, get_settings, load_yaml_config, reset_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate tests from ambient configuration."""
    for name in (
        "LAKECATALOG_CATALOG_NAME",
        "LAKECATALOG_DEFAULT_DATABASE",
        "LAKECATALOG_METADATA_BACKEND",
        "LAKECATALOG_LOCAL_METADATA_PATH",
        "LAKECATALOG_LOG_LEVEL",
        "LAKECATALOG_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


class TestLoadYamlConfig:
    """Tests for YAML flattening."""

    def test_missing_file(self, tmp_path):
        assert load_yaml_config(tmp_path / "missing.yaml") == {}

    def test_flattens_sections(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text(
            "catalog:\n"
            "  name: prod\n"
            "  default_database: main\n"
            "storage:\n"
            "  backend: local\n"
            "  local_path: /data/catalog\n"
            "logging:\n"
            "  level: debug\n"
            "  format: json\n"
        )

        assert load_yaml_config(config) == {
            "catalog_name": "prod",
            "default_database": "main",
            "metadata_backend": "local",
            "local_metadata_path": "/data/catalog",
            "log_level": "debug",
            "log_format": "json",
        }

    def test_invalid_yaml_warns(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("catalog: [unclosed\n")

        with pytest.warns(UserWarning, match="Failed to load config"):
            assert load_yaml_config(config) == {}


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        settings = Settings()

        assert settings.catalog_name == "default_catalog"
        assert settings.default_database == "default"
        assert settings.metadata_backend == "memory"
        assert settings.backend_config == {}
        assert settings.local_metadata_path.is_absolute()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LAKECATALOG_CATALOG_NAME", "from-env")
        monkeypatch.setenv("LAKECATALOG_METADATA_BACKEND", "local")
        monkeypatch.setenv("LAKECATALOG_LOCAL_METADATA_PATH", str(tmp_path))

        settings = Settings()

        assert settings.catalog_name == "from-env"
        assert settings.backend_config == {"path": str(tmp_path)}

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            Settings(catalog_name="  ")

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(metadata_backend="s3")

    def test_relative_path_made_absolute(self):
        settings = Settings(local_metadata_path=Path("relative/dir"))

        assert settings.local_metadata_path.is_absolute()


class TestGetSettings:
    """Tests for the settings singleton."""

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_yaml_file(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("catalog:\n  name: yaml-catalog\n")

        settings = get_settings(config_path=config, reload=True)

        assert settings.catalog_name == "yaml-catalog"

    def test_environment_beats_yaml(self, tmp_path, monkeypatch):
        config = tmp_path / "config.yaml"
        config.write_text("catalog:\n  name: yaml-catalog\n")
        monkeypatch.setenv("LAKECATALOG_CATALOG_NAME", "env-catalog")

        assert get_settings(config_path=config, reload=True).catalog_name == "env-catalog"
