from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SortBy(str, Enum):
    relevance = "relevance"
    distance = "distance"
    rating = "rating"
    score = "score"
    popularity = "popularity"
    recent = "recent"
    name = "name"
    price_ascending = "price_ascending"
    price_descending = "price_descending"


class TimeOfDay(str, Enum):
    early_morning = "early_morning"  # 6-9
    morning = "morning"  # 9-12
    afternoon = "afternoon"  # 12-17
    evening = "evening"  # 17-20
    night = "night"  # 20-24
    late_night = "late_night"  # 0-6


class WeatherCondition(str, Enum):
    sunny = "sunny"
    rainy = "rainy"
    cloudy = "cloudy"
    snowy = "snowy"
    windy = "windy"
    hot = "hot"
    cold = "cold"


class PriceLevel(int, Enum):
    free = 0
    inexpensive = 1
    moderate = 2
    expensive = 3
    very_expensive = 4


class DayOfWeek(str, Enum):
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"
    sunday = "sunday"

    @classmethod
    def from_date(cls, value: datetime) -> DayOfWeek:
        return list(cls)[value.weekday()]

    @property
    def is_weekend(self) -> bool:
        return self in (DayOfWeek.saturday, DayOfWeek.sunday)


class Suggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    place_name: str
    latitude: float
    longitude: float
    category: str = ""
    source: str = ""
    reason: str = ""
    score: float = 0.0
    created_at: datetime
    user_hash: str | None = None
    is_sponsored: bool = False
    sponsored_until: datetime | None = None
    photo_reference: str | None = None
    photo_url: str | None = None
    rating: str | None = Field(
        default=None, description="Raw provider rating, e.g. '4.5'"
    )


class FilterCriteria(BaseModel):
    """Sparse filter set. ``None`` on any field means no constraint.

    Bounds are not enforced here; ``validate_criteria`` reports
    every violation at once instead of failing on the first.
    """

    model_config = ConfigDict(frozen=True)

    # Location
    latitude: float | None = None
    longitude: float | None = None
    radius: int | None = Field(default=None, description="Meters")

    # Category
    categories: list[str] | None = None
    exclude_categories: list[str] | None = None

    # Rating & score
    min_rating: float | None = None
    max_rating: float | None = None
    min_score: float | None = None

    # Time
    time_of_day: TimeOfDay | None = None
    preferred_days: list[DayOfWeek] | None = None
    open_now: bool | None = None

    # Weather
    weather_condition: WeatherCondition | None = None
    indoor_only: bool | None = None
    outdoor_only: bool | None = None

    # Budget
    max_price_level: PriceLevel | None = None
    free_only: bool | None = None

    # Accessibility
    wheelchair_accessible: bool | None = None
    pet_friendly: bool | None = None
    family_friendly: bool | None = None

    # Social
    popular_with_locals: bool | None = None
    trending_now: bool | None = None
    min_review_count: int | None = None

    # Personalization
    match_preferences: bool | None = None
    user_hash: str | None = None

    # Result controls
    limit: int | None = None
    sort_by: SortBy | None = None
    include_sponsored: bool | None = None

    # Advanced
    keywords: list[str] | None = None
    has_photos: bool | None = None
    created_after: datetime | None = None
    sources: list[str] | None = None

    @property
    def has_center(self) -> bool:
        return self.latitude is not None and self.longitude is not None


class WeatherSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    condition: str = Field(..., description="clear, clouds, rain, snow, drizzle, thunderstorm, ...")
    temperature: float = Field(..., description="Degrees Celsius")
    wind_speed: float = 0.0


class UserPreferenceProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    favorite_cuisines: list[str] = Field(default_factory=list)
    favorite_activity_types: list[str] = Field(default_factory=list)
    avoided_activity_types: list[str] = Field(default_factory=list)


class FilterOutcome(BaseModel):
    """Result of a pipeline run.

    The pipeline is fail-open: when ``fell_back`` is true, ``suggestions`` is
    the untouched input and ``failed_stage``/``error`` say what went wrong.
    """

    model_config = ConfigDict(frozen=True)

    suggestions: tuple[Suggestion, ...]
    fell_back: bool = False
    failed_stage: str | None = None
    error: str | None = None


class ValidationResult(BaseModel):
    valid: bool
    errors: list[str] = Field(default_factory=list)
