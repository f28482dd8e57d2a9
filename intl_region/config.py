import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_MAPPING_DIR = Path(__file__).resolve().parent / "data" / "mapping"

# Locale tried when the requested one has no name for a country
FALLBACK_LOCALE = "en"


class Settings(BaseSettings):
    """Library and CLI configuration loaded from environment variables."""

    default_locale: str = Field(default="en", alias="INTL_REGION_DEFAULT_LOCALE")
    mapping_dir: Path = Field(default=DEFAULT_MAPPING_DIR, alias="INTL_REGION_MAPPING_DIR")
    excluded_countries: Annotated[List[str], NoDecode] = Field(
        # TF (French Southern Territories) is filed under Africa by UN M49
        # but lies next to Antarctica
        default_factory=lambda: ["TF"],
        alias="INTL_REGION_EXCLUDED_COUNTRIES",
        description="Country codes left out of every listing",
    )
    log_level: str = Field(default="WARNING", alias="INTL_REGION_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    @field_validator("excluded_countries", mode="before")
    @classmethod
    def parse_excluded_countries(cls, v):
        """Parse INTL_REGION_EXCLUDED_COUNTRIES from comma-separated string or list"""
        if isinstance(v, str):
            v = v.split(",")
        return [code.strip().upper() for code in v or [] if code and code.strip()]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
