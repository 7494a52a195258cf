from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models import DayOfWeek, FilterCriteria, TimeOfDay
from ..providers import Cache, WeatherProvider
from .cache import make_key
from .weather import determine_weather_condition, is_indoor_recommended

logger = logging.getLogger(__name__)

POPULAR_FILTERS = [
    "restaurants_nearby",
    "outdoor_activities",
    "cultural_attractions",
    "family_friendly",
    "budget_friendly",
]


def time_of_day_for(hour: int) -> TimeOfDay:
    if 6 <= hour < 9:
        return TimeOfDay.early_morning
    if 9 <= hour < 12:
        return TimeOfDay.morning
    if 12 <= hour < 17:
        return TimeOfDay.afternoon
    if 17 <= hour < 20:
        return TimeOfDay.evening
    if 20 <= hour < 24:
        return TimeOfDay.night
    return TimeOfDay.late_night


class SmartFilterGenerator:
    """Build default criteria for a location from local time and weather.

    Results are cached per (lat, lng, user_hash). A weather failure only
    drops the weather-derived fields; any other failure returns criteria
    holding just the coordinates.
    """

    def __init__(
        self,
        weather_provider: WeatherProvider,
        cache: Cache,
        config: EngineConfig = DEFAULT_CONFIG,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._weather = weather_provider
        self._cache = cache
        self._config = config
        self._clock = clock

    async def generate(self, lat: float, lng: float, user_hash: str | None = None) -> FilterCriteria:
        try:
            key = make_key("smart_filters", lat, lng, user_hash)
            cached = self._cache.get(key)
            if isinstance(cached, FilterCriteria):
                return cached

            now = self._clock()
            fields: dict[str, Any] = {
                "latitude": lat,
                "longitude": lng,
                "radius": self._config.smart_filter_default_radius_m,
                "time_of_day": time_of_day_for(now.hour),
            }
            fields.update(await self._weather_fields(lat, lng))

            today = DayOfWeek.from_date(now)
            fields["preferred_days"] = [today]
            if today.is_weekend:
                fields["family_friendly"] = True
                fields["popular_with_locals"] = True

            criteria = FilterCriteria(**fields)
            self._cache.set(key, criteria, self._config.smart_filter_cache_ttl_seconds)
            return criteria
        except Exception:
            logger.error("Error generating smart filters for (%s, %s)", lat, lng, exc_info=True)
            return FilterCriteria(latitude=lat, longitude=lng)

    async def _weather_fields(self, lat: float, lng: float) -> dict[str, Any]:
        try:
            weather = await asyncio.wait_for(
                self._weather.current_weather(lat, lng),
                timeout=self._config.weather_timeout_seconds,
            )
        except Exception:
            logger.warning("Failed to get weather data for smart filters", exc_info=True)
            return {}

        if weather is None:
            return {}
        return {
            "weather_condition": determine_weather_condition(weather),
            "indoor_only": is_indoor_recommended(weather),
        }

    async def recommended(
        self,
        user_hash: str | None,
        lat: float | None = None,
        lng: float | None = None,
    ) -> FilterCriteria:
        if lat is not None and lng is not None:
            return await self.generate(lat, lng, user_hash)
        return FilterCriteria()

    def popular_filters(self, user_hash: str | None = None) -> list[str]:
        return list(POPULAR_FILTERS)
