"""Application settings using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kbdiag.core.config.loader import ConfigLoader
from kbdiag.core.exceptions.errors import ConfigurationError

# Searched in order when no explicit config file is given
DEFAULT_CONFIG_PATHS = [
    Path("kbdiag.yaml"),
    Path("config") / "default.yaml",
    Path.home() / ".kbdiag" / "config.yaml",
]


class DiagnosticSettings(BaseSettings):
    """Build diagnostic engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="KBDIAG_DIAGNOSTIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    marker_path: Path = Field(
        default=Path("have_error"),
        description="Zero-byte marker written when at least one error is found",
    )
    build_log: Path = Field(
        default=Path("out") / "build.log",
        description="Build log location relative to the kernel directory",
    )
    separator_width: int = Field(
        default=56,
        ge=10,
        le=200,
        description="Width of report separator lines",
    )

    @field_validator("marker_path", "build_log", mode="before")
    @classmethod
    def validate_path(cls, v: str | Path) -> Path:
        """Reject empty paths and convert to Path."""
        if v is None or str(v).strip() == "":
            raise ValueError("Path must not be empty")
        return Path(v)


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    model_config = SettingsConfigDict(
        env_prefix="KBDIAG_LOGGING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        description="Log level",
    )
    format: str = Field(
        default="[%(name)s] %(message)s",
        description="Log format string",
    )
    file: Path | None = Field(
        default=None,
        description="Log file path",
    )
    use_rich: bool = Field(
        default=True,
        description="Use Rich console for output",
    )

    @field_validator("level", mode="before")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, v: str | None) -> Path | None:
        """Validate and convert file to Path."""
        if v is None or v == "":
            return None
        return Path(v)


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="KBDIAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    diagnostic: DiagnosticSettings = Field(default_factory=DiagnosticSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from YAML file.

        Keys present in the file win over ``KBDIAG_*`` environment
        variables. Keys the file omits still fall back to the environment.

        Args:
            path: Path to YAML configuration file.

        Returns:
            Settings instance with values from YAML.

        Raises:
            ConfigurationError: If the file is unreadable or a value is invalid.
        """
        loader = ConfigLoader(path)
        loader.load()

        sections = {}
        for name, model in (("diagnostic", DiagnosticSettings), ("logging", LoggingSettings)):
            try:
                sections[name] = model(**loader.get_section(name))
            except ValidationError as e:
                keys = [".".join([name, *map(str, err["loc"])]) for err in e.errors()]
                raise ConfigurationError(
                    f"Invalid configuration values in {path}: {', '.join(keys)}",
                    config_key=keys[0] if keys else name,
                    details={"errors": [err["msg"] for err in e.errors()]},
                ) from e

        return cls(**sections)

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        """Load settings from an explicit file or the default locations.

        Priority: YAML file > environment variables > .env > defaults

        Args:
            path: Optional YAML file. Default locations are searched if omitted.

        Returns:
            Settings instance.
        """
        if path is not None:
            return cls.from_yaml(Path(path))

        for default_path in DEFAULT_CONFIG_PATHS:
            if default_path.exists():
                return cls.from_yaml(default_path)

        # Environment variables and .env are automatically loaded by pydantic-settings
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings singleton.
    """
    return Settings.load()
