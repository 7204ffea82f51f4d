"""Configuration management for sysup."""

from typing import Annotated, Literal

from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

ColorSetting = Literal["auto", "always", "never"]


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="SYSUP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="WARNING", description="Log level")

    # Rendering Configuration
    color: ColorSetting = Field(default="auto", description="Color mode: auto, always or never")

    # Update Configuration
    skip_simulation: bool = Field(default=False, description="Skip the apt dry-run simulation steps")
    extra_ignore_prefixes: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Comma separated output prefixes to suppress in addition to the built-in ones",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper() or "WARNING"
        # Raises ValueError for names loguru does not know.
        logger.level(level)
        return level

    @field_validator("extra_ignore_prefixes", mode="before")
    @classmethod
    def _split_prefixes(cls, value: object) -> object:
        if isinstance(value, str):
            return [item for item in (part.strip() for part in value.split(",")) if item]
        return value


def load_settings() -> Settings:
    """Get application settings.

    Returns:
        Settings instance loaded from ``SYSUP_*`` environment variables and ``.env``
    """
    return Settings()
