"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables (and an optional .env file)
with validation, type coercion, and sensible defaults.
"""

from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Error types that mean a required variable was not provided
MISSING_VALUE_ERRORS = frozenset({"missing", "string_too_short", "value_error"})


class SharedLibraryStrategy(str, Enum):
    """How shared (family library) games are looked up."""

    FAMILY_GROUP = "family_group"
    LENDER_AGGREGATION = "lender_aggregation"
    NONE = "none"


class SteamAPIConfig(BaseSettings):
    """Steam API specific configuration."""

    model_config = SettingsConfigDict(env_prefix="STEAM_", env_file=".env", extra="ignore")

    api_key: SecretStr = Field(
        default=...,
        description="Steam Web API key from https://steamcommunity.com/dev/apikey",
    )
    profile_id: str = Field(
        default=...,
        min_length=1,
        description="SteamID64 of the account whose library is scripted",
    )
    base_url: str = Field(
        default="https://api.steampowered.com",
        description="Base URL for Steam Web API",
    )
    store_url: str = Field(
        default="https://store.steampowered.com",
        description="Base URL for Steam Store pages",
    )
    timeout_seconds: int = Field(
        default=30,
        ge=5,
        le=120,
        description="HTTP request timeout in seconds",
    )

    @field_validator("api_key", "profile_id", mode="before")
    @classmethod
    def reject_blank(cls, v: Any) -> Any:
        """Strip whitespace; a blank value counts as not set."""
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("Value must not be empty")
        return v


class FamilyGroupConfig(BaseSettings):
    """Steam Family group access for the shared library lookup."""

    model_config = SettingsConfigDict(env_prefix="STEAM_", env_file=".env", extra="ignore")

    api_token: SecretStr | None = Field(
        default=None,
        description="Store access token used by IFamilyGroupsService",
    )
    family_id: str | None = Field(
        default=None,
        description="Steam Family group ID",
    )

    @field_validator("api_token", "family_id", mode="before")
    @classmethod
    def empty_as_none(cls, v: Any) -> Any:
        """Treat empty variables as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_configured(self) -> bool:
        """Check if both token and family ID are present."""
        return self.api_token is not None and self.family_id is not None


class LenderConfig(BaseSettings):
    """Third-party shared library API keyed by lender accounts."""

    model_config = SettingsConfigDict(
        env_prefix="SHARED_LIBRARY_", env_file=".env", extra="ignore"
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="API key for the shared library aggregation service",
    )
    api_url: str = Field(
        default="https://api.steampowered.com/IFamilyGroupsService/GetSharedLibraryApps/v1/",
        description="Shared library apps endpoint of the aggregation service",
    )
    lender_ids: Annotated[list[str], NoDecode] = Field(
        default_factory=list,
        description="Comma-separated SteamID64s of lender accounts",
    )

    @field_validator("api_key", mode="before")
    @classmethod
    def empty_key_as_none(cls, v: Any) -> Any:
        """Treat an empty key as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("lender_ids", mode="before")
    @classmethod
    def split_lender_ids(cls, v: Any) -> Any:
        """Parse a comma-separated list of lender IDs."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @property
    def is_configured(self) -> bool:
        """Check if a key and at least one lender are present."""
        return self.api_key is not None and bool(self.lender_ids)


class OutputConfig(BaseSettings):
    """Script output configuration."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    skip_games: str = Field(
        default="",
        description="Comma-separated app IDs or exact titles to leave out",
    )
    output_file: str | None = Field(
        default=None,
        description="Script destination (standard output when unset)",
    )
    force_validate: bool = Field(
        default=False,
        description="Append -validate to every app_update command",
    )

    @field_validator("output_file", mode="before")
    @classmethod
    def empty_path_as_none(cls, v: Any) -> Any:
        """An empty path means standard output."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("force_validate", mode="before")
    @classmethod
    def parse_flag(cls, v: Any) -> Any:
        """Any non-empty value enables the flag."""
        if isinstance(v, str):
            return v != ""
        return v


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_", env_file=".env", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )
    include_timestamp: bool = Field(
        default=True,
        description="Include timestamp in log entries",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    Aggregates all configuration sections and provides
    a single entry point for configuration access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Sub-configurations
    steam: SteamAPIConfig = Field(default_factory=SteamAPIConfig)
    family: FamilyGroupConfig = Field(default_factory=FamilyGroupConfig)
    lender: LenderConfig = Field(default_factory=LenderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def shared_strategy(self) -> SharedLibraryStrategy:
        """Pick the shared library lookup from the variables present."""
        if self.family.is_configured:
            return SharedLibraryStrategy.FAMILY_GROUP
        if self.lender.is_configured:
            return SharedLibraryStrategy.LENDER_AGGREGATION
        return SharedLibraryStrategy.NONE

    def missing_shared_variables(self) -> list[str]:
        """Names of family group variables that are not set."""
        missing = []
        if self.family.api_token is None:
            missing.append("STEAM_API_TOKEN")
        if self.family.family_id is None:
            missing.append("STEAM_FAMILY_ID")
        return missing


# Guidance printed when a required variable is missing
REQUIRED_VARIABLE_HELP: dict[str, str] = {
    "api_key": (
        "The STEAM_API_KEY environment variable should contain your Steam API key.\n"
        "See: https://steamcommunity.com/dev/apikey"
    ),
    "profile_id": "The STEAM_PROFILE_ID environment variable is required.",
}


def configuration_guidance(errors: list[dict[str, Any]]) -> list[str]:
    """
    Turn settings validation errors into messages for the user.

    Args:
        errors: Output of ``pydantic.ValidationError.errors()``

    Returns:
        list[str]: One message per invalid or missing variable
    """
    messages = []
    for error in errors:
        field = str(error["loc"][-1]) if error.get("loc") else ""
        if error.get("type") in MISSING_VALUE_ERRORS and field in REQUIRED_VARIABLE_HELP:
            messages.append(REQUIRED_VARIABLE_HELP[field])
        else:
            messages.append(f"Invalid configuration for {field or 'settings'}: {error['msg']}")
    return messages


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once
    and reused across the application.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
