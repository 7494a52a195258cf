"""Map raw weather snapshots onto filter hints."""
from __future__ import annotations

from ..models import WeatherCondition, WeatherSnapshot

_CONDITION_MAP: dict[str, WeatherCondition] = {
    "clear": WeatherCondition.sunny,
    "clouds": WeatherCondition.cloudy,
    "rain": WeatherCondition.rainy,
    "drizzle": WeatherCondition.rainy,
    "snow": WeatherCondition.snowy,
}

_INDOOR_CONDITIONS = frozenset({"rain", "snow", "thunderstorm"})

WINDY_THRESHOLD = 20.0
HOT_THRESHOLD_C = 30.0
COLD_THRESHOLD_C = 5.0

INDOOR_WIND_THRESHOLD = 25.0
INDOOR_FREEZING_C = 0.0
INDOOR_HEAT_C = 35.0


def determine_weather_condition(weather: WeatherSnapshot) -> WeatherCondition:
    mapped = _CONDITION_MAP.get(weather.condition.strip().lower())
    if mapped is not None:
        return mapped
    if weather.wind_speed > WINDY_THRESHOLD:
        return WeatherCondition.windy
    if weather.temperature > HOT_THRESHOLD_C:
        return WeatherCondition.hot
    if weather.temperature < COLD_THRESHOLD_C:
        return WeatherCondition.cold
    return WeatherCondition.sunny


def is_indoor_recommended(weather: WeatherSnapshot) -> bool:
    if weather.condition.strip().lower() in _INDOOR_CONDITIONS:
        return True
    if weather.temperature < INDOOR_FREEZING_C or weather.temperature > INDOOR_HEAT_C:
        return True
    return weather.wind_speed > INDOOR_WIND_THRESHOLD
