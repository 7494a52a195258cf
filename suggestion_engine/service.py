"""
Single entry point for the request-handling layer.

Wires the pipeline, smart-filter generator, scorer, validator and
statistics behind one object so callers only inject collaborators once.
"""
from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from .analytics.aggregator import compute_statistics
from .config import DEFAULT_CONFIG, EngineConfig
from .filtering.pipeline import DEFAULT_STAGES, PipelineStages, apply_filters
from .filtering.validation import validate_criteria
from .models import FilterCriteria, Suggestion, UserPreferenceProfile, ValidationResult
from .personalization.scorer import PersonalizationScorer
from .providers import AvoidanceTracker, Cache, NoveltyEngine, PreferenceProvider, WeatherProvider
from .smart_filters.cache import TTLCache
from .smart_filters.generator import SmartFilterGenerator


class SuggestionFilterService:
    def __init__(
        self,
        weather_provider: WeatherProvider,
        novelty_engine: NoveltyEngine,
        avoidance_tracker: AvoidanceTracker,
        cache: Cache | None = None,
        config: EngineConfig = DEFAULT_CONFIG,
        stages: PipelineStages = DEFAULT_STAGES,
        preference_provider: PreferenceProvider | None = None,
    ) -> None:
        self.config = config
        self.stages = stages
        self.cache = cache if cache is not None else TTLCache()
        self.smart = SmartFilterGenerator(weather_provider, self.cache, config=config)
        self.scorer = PersonalizationScorer(novelty_engine, avoidance_tracker)
        self.preference_provider = preference_provider

    def apply_filters(
        self,
        suggestions: Iterable[Suggestion],
        criteria: FilterCriteria,
        now: datetime | None = None,
    ) -> list[Suggestion]:
        outcome = apply_filters(suggestions, criteria, now=now, stages=self.stages, config=self.config)
        return list(outcome.suggestions)

    async def smart_filters(self, lat: float, lng: float, user_hash: str | None = None) -> FilterCriteria:
        return await self.smart.generate(lat, lng, user_hash)

    def filter_statistics(self, suggestions: Iterable[Suggestion], now: datetime | None = None) -> dict[str, Any]:
        return compute_statistics(suggestions, now=now)

    def validate_filters(self, criteria: FilterCriteria) -> ValidationResult:
        return validate_criteria(criteria, self.config)

    def popular_filters(self, user_hash: str | None = None) -> list[str]:
        return self.smart.popular_filters(user_hash)

    async def recommended_filters(
        self,
        user_hash: str | None,
        lat: float | None = None,
        lng: float | None = None,
    ) -> FilterCriteria:
        return await self.smart.recommended(user_hash, lat, lng)

    async def personalized_scores(
        self,
        user_id: str,
        suggestions: Iterable[Suggestion],
        preferences: UserPreferenceProfile | None = None,
        cancel: asyncio.Event | None = None,
    ) -> dict[str, float]:
        if preferences is None and self.preference_provider is not None:
            preferences = await self.preference_provider.preferences(user_id)
        return await self.scorer.score_many(user_id, suggestions, preferences, cancel=cancel)
