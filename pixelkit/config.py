"""
Configuration for pixelkit.

Settings are read from environment variables prefixed with PIXELKIT_
(nested sections use a double underscore, e.g. PIXELKIT_SYSTEM__LOG_LEVEL)
or from a .env file. The core operations never read settings; the service
layer passes configured defaults into them.
"""

from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pixelkit.core.constants import CodecConstants, ProcessingConstants, SystemConstants
from pixelkit.core.enums import Interpolation


class SystemSettings(BaseModel):
    """Logging and debug settings"""

    log_level: str = SystemConstants.LOG_LEVEL_DEFAULT
    debug: bool = False

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level


class CodecSettings(BaseModel):
    """Output encoding defaults"""

    default_format: str = CodecConstants.DEFAULT_FORMAT
    jpeg_quality: int = Field(CodecConstants.DEFAULT_JPEG_QUALITY, ge=1, le=100)


class ProcessingSettings(BaseModel):
    """Defaults for operation parameters a request leaves out"""

    color_median: int = Field(ProcessingConstants.DEFAULT_COLOR_MEDIAN, ge=0, le=255)
    feather_divisor: int = Field(ProcessingConstants.DEFAULT_FEATHER_DIVISOR, ge=1)
    trim_max_alpha: int = Field(ProcessingConstants.DEFAULT_TRIM_MAX_ALPHA, ge=0, le=255)
    superscript_legacy_size: bool = True
    interpolation: Interpolation = Interpolation.SMOOTH


class APISettings(BaseModel):
    """HTTP server settings"""

    host: str = SystemConstants.DEFAULT_HOST
    port: int = SystemConstants.DEFAULT_PORT
    cors_enabled: bool = True
    cors_origins: List[str] = ["*"]


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="PIXELKIT_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    environment: str = "development"
    system: SystemSettings = SystemSettings()
    codec: CodecSettings = CodecSettings()
    processing: ProcessingSettings = ProcessingSettings()
    api: APISettings = APISettings()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
