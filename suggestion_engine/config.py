"""
Engine configuration.

Values come from the environment (optionally a project-level .env file) and
fall back to the defaults the ranking feature has always shipped with.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


@dataclass(frozen=True)
class EngineConfig:
    smart_filter_cache_ttl_minutes: int = _env_int("SMART_FILTER_CACHE_TTL_MINUTES", 30)
    smart_filter_default_radius_m: int = _env_int("SMART_FILTER_DEFAULT_RADIUS_M", 3000)
    trending_window_hours: int = _env_int("TRENDING_WINDOW_HOURS", 24)
    weather_timeout_seconds: float = _env_float("WEATHER_TIMEOUT_SECONDS", 5.0)

    # Criteria bounds
    max_radius_m: int = 50000
    min_rating: float = 0.0
    max_rating: float = 5.0
    max_limit: int = 100

    @property
    def smart_filter_cache_ttl_seconds(self) -> float:
        return self.smart_filter_cache_ttl_minutes * 60.0


DEFAULT_CONFIG = EngineConfig()
