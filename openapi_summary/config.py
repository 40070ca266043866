from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseSettings):
    ALLOWED_EXTENSIONS: List[str] = [".json", ".yaml", ".yml"]
    ALLOWED_MEDIA_TYPES: List[str] = [
        "application/json",
        "application/x-yaml",
        "text/yaml",
        "text/x-yaml",
    ]
    SCRATCH_DIR: Path = Path("uploads")
    VALIDATOR_BACKEND: str = "openapi-spec-validator"
    REDACT_INTERNAL_ERRORS: bool = False
    CORS_ORIGINS: List[str] = ["*"]
    HOST: str = "0.0.0.0"
    PORT: int = 3006
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(env_file=".env", extra="ignore")

    @field_validator("ALLOWED_EXTENSIONS")
    @classmethod
    def normalize_extensions(cls, value: List[str]) -> List[str]:
        extensions = ["." + ext.strip().lower().lstrip(".") for ext in value if ext.strip()]
        if not extensions:
            raise ValueError("ALLOWED_EXTENSIONS must list at least one extension")
        return extensions

    @field_validator("ALLOWED_MEDIA_TYPES")
    @classmethod
    def normalize_media_types(cls, value: List[str]) -> List[str]:
        media_types = [mt.strip().lower() for mt in value if mt.strip()]
        if not media_types:
            raise ValueError("ALLOWED_MEDIA_TYPES must list at least one media type")
        return media_types

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown LOG_LEVEL {value!r}, expected one of {sorted(LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
