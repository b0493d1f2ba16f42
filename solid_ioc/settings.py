"""
Pydantic Settings for the container.

Settings are read from IOC_* environment variables (or a .env file) and
validated on load.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings
from pydantic_settings import SettingsConfigDict

from solid_ioc.core.constants import SETTINGS_ENV_PREFIX
from solid_ioc.enums import Lifetime


class ContainerSettings(PydanticBaseSettings):
    """
    Container settings using Pydantic for validation and environment loading.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix=SETTINGS_ENV_PREFIX,
        validate_assignment=True,
        extra="ignore",
    )

    # Debug settings
    debug_logs_enabled: bool = Field(
        default=False, description="Enable debug logging output"
    )
    log_level: str = Field(
        default="INFO", description="Log level applied to container loggers"
    )

    # Registration settings
    allow_overrides: bool = Field(
        default=True,
        description=(
            "Allow a later registration to replace an existing binding. "
            "When disabled, re-registering a type raises DuplicateRegistrationError."
        ),
    )
    default_lifetime: Lifetime = Field(
        default=Lifetime.TRANSIENT,
        description="Lifetime used when register() is called without one",
    )

    @field_validator("debug_logs_enabled", "allow_overrides", mode="before")
    def parse_bool_flags(cls, v: any) -> bool:
        """Parse boolean flags from various string formats with strict validation"""
        if isinstance(v, str):
            lower_v = v.lower()
            if lower_v in ("true", "1", "yes", "on"):
                return True
            elif lower_v in ("false", "0", "no", "off"):
                return False
            else:
                raise ValueError(
                    f"Invalid boolean value: '{v}'. Must be one of: true, false, 1, "
                    "0, yes, no, on, off"
                )
        return bool(v)

    @field_validator("log_level", mode="before")
    def normalize_log_level(cls, v: any) -> str:
        level = str(v).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: '{v}'")
        return level


@lru_cache()
def get_settings() -> ContainerSettings:
    """
    Get the container settings instance (singleton pattern).

    Returns:
        ContainerSettings: The settings instance
    """
    return ContainerSettings()


def reload_settings():
    """
    Reload settings by clearing the cache.
    Useful for testing and dynamic configuration changes.
    """
    get_settings.cache_clear()
