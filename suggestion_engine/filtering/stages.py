"""
Individual pipeline stages.

Every stage has the same shape: it takes the current candidates, the criteria
and a StageContext, and returns a new tuple. Stages never mutate their input
and never catch exceptions; the pipeline owns the failure policy.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import numpy as np

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models import FilterCriteria, SortBy, Suggestion
from .geo import haversine_m_many

Candidates = tuple[Suggestion, ...]


@dataclass(frozen=True)
class StageContext:
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    config: EngineConfig = DEFAULT_CONFIG


Stage = Callable[[Candidates, FilterCriteria, StageContext], Candidates]

INDOOR_CATEGORIES = frozenset(
    {"museum", "shopping", "cafe", "restaurant", "mall", "cinema", "theater", "gallery"}
)
OUTDOOR_CATEGORIES = frozenset(
    {"park", "beach", "hiking", "sports", "garden", "playground", "zoo", "tourist_attraction"}
)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so naive and aware values compare."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _lowered(values: list[str] | None) -> set[str]:
    return {v.lower() for v in values or []}


def distances_from(lat: float, lng: float, candidates: Candidates) -> np.ndarray:
    return haversine_m_many(
        lat,
        lng,
        [s.latitude for s in candidates],
        [s.longitude for s in candidates],
    )


def is_indoor_activity(category: str) -> bool:
    return category.lower() in INDOOR_CATEGORIES


def is_outdoor_activity(category: str) -> bool:
    return category.lower() in OUTDOOR_CATEGORIES


# ── Narrowing stages ─────────────────────────────────────────────────────


def filter_by_radius(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if not criteria.has_center or criteria.radius is None or not candidates:
        return candidates
    distances = distances_from(criteria.latitude, criteria.longitude, candidates)
    return tuple(s for s, d in zip(candidates, distances) if d <= criteria.radius)


def filter_by_categories(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    wanted = _lowered(criteria.categories)
    if not wanted:
        return candidates
    return tuple(s for s in candidates if s.category.lower() in wanted)


def exclude_categories(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    excluded = _lowered(criteria.exclude_categories)
    if not excluded:
        return candidates
    return tuple(s for s in candidates if s.category.lower() not in excluded)


def filter_by_min_score(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if criteria.min_score is None:
        return candidates
    return tuple(s for s in candidates if s.score >= criteria.min_score)


def passthrough(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    return candidates


def filter_by_weather(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if criteria.indoor_only:
        return tuple(s for s in candidates if is_indoor_activity(s.category))
    if criteria.outdoor_only:
        return tuple(s for s in candidates if is_outdoor_activity(s.category))
    return candidates


def filter_trending(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if not criteria.trending_now:
        return candidates
    cutoff = as_utc(ctx.now) - timedelta(hours=ctx.config.trending_window_hours)
    return tuple(s for s in candidates if as_utc(s.created_at) >= cutoff)


def filter_by_keywords(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    keywords = [k.lower() for k in criteria.keywords or []]
    if not keywords:
        return candidates

    def matches(s: Suggestion) -> bool:
        haystacks = (s.place_name.lower(), s.category.lower(), s.reason.lower())
        return any(k in h for k in keywords for h in haystacks)

    return tuple(s for s in candidates if matches(s))


def filter_by_sources(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    allowed = _lowered(criteria.sources)
    if not allowed:
        return candidates
    return tuple(s for s in candidates if s.source.lower() in allowed)


def filter_by_photos(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if not criteria.has_photos:
        return candidates
    return tuple(s for s in candidates if s.photo_url)


def filter_by_created_after(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if criteria.created_after is None:
        return candidates
    threshold = as_utc(criteria.created_after)
    return tuple(s for s in candidates if as_utc(s.created_at) >= threshold)


# ── Sorting ──────────────────────────────────────────────────────────────
# Python's sort is stable, so ties keep their input order.


def _by_score(candidates: Candidates, criteria: FilterCriteria) -> Candidates:
    return tuple(sorted(candidates, key=lambda s: s.score, reverse=True))


def _by_distance(candidates: Candidates, criteria: FilterCriteria) -> Candidates:
    if not criteria.has_center:
        return _by_score(candidates, criteria)
    distances = distances_from(criteria.latitude, criteria.longitude, candidates)
    order = np.argsort(distances, kind="stable")
    return tuple(candidates[i] for i in order)


def _by_recent(candidates: Candidates, criteria: FilterCriteria) -> Candidates:
    return tuple(sorted(candidates, key=lambda s: as_utc(s.created_at), reverse=True))


def _by_name(candidates: Candidates, criteria: FilterCriteria) -> Candidates:
    return tuple(sorted(candidates, key=lambda s: s.place_name))


SORT_STRATEGIES: dict[SortBy, Callable[[Candidates, FilterCriteria], Candidates]] = {
    SortBy.distance: _by_distance,
    SortBy.score: _by_score,
    SortBy.recent: _by_recent,
    SortBy.name: _by_name,
    SortBy.relevance: _by_score,
}


def sort_suggestions(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    """Order candidates by ``criteria.sort_by``.

    Modes with no strategy of their own (rating, popularity, price) use the
    relevance ordering, which is score descending.
    """
    if not candidates:
        return candidates
    mode = criteria.sort_by or SortBy.relevance
    strategy = SORT_STRATEGIES.get(mode, _by_score)
    return strategy(candidates, criteria)


# ── Post-sort stages ─────────────────────────────────────────────────────


def filter_sponsored(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if criteria.include_sponsored is not False:
        return candidates
    return tuple(s for s in candidates if not s.is_sponsored)


def apply_limit(candidates: Candidates, criteria: FilterCriteria, ctx: StageContext) -> Candidates:
    if criteria.limit is None or criteria.limit <= 0:
        return candidates
    return candidates[: criteria.limit]
