"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Any, Literal, Tuple, Type

import yaml
from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

DEFAULT_CONFIG_PATH = Path.home() / ".lakecatalog" / "config.yaml"


def load_yaml_config(config_path: Path | None = None) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Priority:
    1. Explicitly provided config_path
    2. ~/.lakecatalog/config.yaml (default location)
    3. Empty dict if no file exists

    Args:
        config_path: Optional path to config file

    Returns:
        Dictionary of configuration values (flattened from nested YAML)
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    try:
        with open(config_path) as f:
            yaml_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        import warnings

        warnings.warn(f"Failed to load config from {config_path}: {e}")
        return {}

    flattened: dict[str, Any] = {}

    if "catalog" in yaml_data:
        catalog = yaml_data["catalog"] or {}
        if "name" in catalog:
            flattened["catalog_name"] = catalog["name"]
        if "default_database" in catalog:
            flattened["default_database"] = catalog["default_database"]

    if "storage" in yaml_data:
        storage = yaml_data["storage"] or {}
        if "backend" in storage:
            flattened["metadata_backend"] = storage["backend"]
        if "local_path" in storage:
            flattened["local_metadata_path"] = storage["local_path"]

    if "logging" in yaml_data:
        logging = yaml_data["logging"] or {}
        if "level" in logging:
            flattened["log_level"] = logging["level"]
        if "format" in logging:
            flattened["log_format"] = logging["format"]

    return flattened


_config_path: Path | None = None


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Custom settings source that loads configuration from YAML file.

    This allows YAML config to be loaded with proper priority in the settings chain.
    """

    def get_field_value(self, field: Any, field_name: str) -> Tuple[Any, str, bool]:
        """Not used since we override __call__."""
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        return load_yaml_config(_config_path)


class Settings(BaseSettings):
    """
    lakecatalog configuration settings.

    Configuration priority (highest to lowest):
    1. Explicit keyword arguments
    2. Environment variables (e.g., LAKECATALOG_CATALOG_NAME=prod)
    3. YAML configuration file (~/.lakecatalog/config.yaml)
    4. .env file
    5. Default values defined in this class
    """

    model_config = SettingsConfigDict(
        env_prefix="LAKECATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    catalog_name: str = Field(default="default_catalog", description="Catalog name")
    default_database: str = Field(
        default="default", description="Database created when the catalog opens"
    )

    metadata_backend: Literal["memory", "local"] = Field(
        default="memory",
        description="Metadata backend",
    )
    local_metadata_path: Path = Field(
        default=Path("~/.lakecatalog/metadata"),
        description="Root directory of the local metadata backend",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text", description="Log format"
    )

    @field_validator("catalog_name", "default_database")
    @classmethod
    def validate_names(cls, v: str) -> str:
        """Names cannot be empty."""
        if not v or not v.strip():
            raise ValueError("Catalog and database names cannot be empty")
        return v

    @field_validator("local_metadata_path")
    @classmethod
    def validate_paths(cls, v: Path) -> Path:
        """Ensure paths are absolute."""
        if not v.is_absolute():
            v = v.expanduser().resolve()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @property
    def backend_config(self) -> dict[str, str]:
        """Configuration dictionary for the metadata backend factory."""
        if self.metadata_backend == "local":
            return {"path": str(self.local_metadata_path)}
        return {}

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Customize settings sources priority.

        Priority order (highest to lowest):
        1. Explicit kwargs (init_settings) - for testing and programmatic config
        2. Environment variables
        3. YAML configuration file
        4. .env file
        5. Field defaults
        """
        return (
            init_settings,
            env_settings,
            YamlSettingsSource(settings_cls),
            dotenv_settings,
        )


_settings: Settings | None = None


def get_settings(config_path: Path | None = None, reload: bool = False) -> Settings:
    """
    Get global settings instance.

    Args:
        config_path: Optional path to YAML config file (defaults to ~/.lakecatalog/config.yaml)
        reload: If True, force reload settings (useful for testing)

    Returns:
        Settings instance with merged configuration
    """
    global _settings, _config_path
    if _settings is None or reload:
        _config_path = config_path

        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings singleton (useful for testing)."""
    global _settings, _config_path
    _settings = None
    _config_path = None
