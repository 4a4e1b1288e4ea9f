"""
Settings — environment driven, LONJA_ prefix, optional .env file.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    api_base_url: str = "http://localhost:8080/api"
    request_timeout: float = Field(default=15.0, gt=0)
    low_stock_threshold_lb: Decimal = Decimal("5")
    log_level: str = "INFO"
    log_format: Literal["verbose", "json"] = "verbose"

    model_config = SettingsConfigDict(
        env_prefix="LONJA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


__all__ = ("Settings", "get_settings")
