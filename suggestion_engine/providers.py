"""
Contracts for the collaborators this core consumes.

Only the call shapes live here; transport, persistence and the internal
logic of each provider belong to the caller.
"""
from __future__ import annotations

from typing import Any, Protocol

from .models import Suggestion, UserPreferenceProfile, WeatherSnapshot


class WeatherProvider(Protocol):
    async def current_weather(self, lat: float, lng: float) -> WeatherSnapshot | None:
        """Current conditions at a point. May raise or time out."""
        ...


class NoveltyEngine(Protocol):
    async def novelty_score(self, user_id: str, place: Suggestion) -> float:
        """How unfamiliar ``place`` is to the user, in [0, 1]."""
        ...


class AvoidanceTracker(Protocol):
    async def avoidance_score(self, user_id: str, place: Suggestion) -> float:
        """Recent-visit or poor-experience penalty for ``place``, in [0, 1]."""
        ...


class PreferenceProvider(Protocol):
    async def preferences(self, user_id: str) -> UserPreferenceProfile | None:
        ...


class Cache(Protocol):
    def get(self, key: str) -> Any | None:
        ...

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        ...
