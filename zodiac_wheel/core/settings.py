# zodiac_wheel/core/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Runtime settings. Every field can be overridden with a ZODIAC_* env var,
    e.g. ZODIAC_EPHEMERIS_FILE=de421.bsp
    """

    model_config = SettingsConfigDict(env_prefix="ZODIAC_", env_file=".env", extra="ignore")

    ephemeris_file: str = Field("de440s.bsp", description="JPL kernel loaded by skyfield")
    data_dir: str = Field(".", description="Where skyfield downloads/reads kernels")

    cache_ttl_sec: int = 6 * 60 * 60  # 6 hours

    default_ayanamsha: float = 24.1
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"
    warm_on_startup: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
