from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable

from ..models import Suggestion, UserPreferenceProfile
from ..providers import AvoidanceTracker, NoveltyEngine

logger = logging.getLogger(__name__)

BASE_SCORE = 0.5
CUISINE_BOOST = 0.3
ACTIVITY_BOOST = 0.2
AVOIDED_PENALTY = 0.4
NOVELTY_WEIGHT = 0.2
AVOIDANCE_WEIGHT = 0.3
RATING_WEIGHT = 0.1


class ScoringCancelled(Exception):
    """Raised by ``score_many`` when its cancel event fires first."""


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(value, hi))


def _matches_any(category: str, labels: Iterable[str]) -> bool:
    lowered = category.lower()
    return any(label.lower() in lowered for label in labels)


def parse_rating(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def preference_adjustment(category: str, preferences: UserPreferenceProfile) -> float:
    """Category boosts and penalty. Each list contributes at most once."""
    adjustment = 0.0
    if not category:
        return adjustment
    if _matches_any(category, preferences.favorite_cuisines):
        adjustment += CUISINE_BOOST
    if _matches_any(category, preferences.favorite_activity_types):
        adjustment += ACTIVITY_BOOST
    if _matches_any(category, preferences.avoided_activity_types):
        adjustment -= AVOIDED_PENALTY
    return adjustment


class PersonalizationScorer:
    """Affinity of a user for a place, always in [0, 1].

    Novelty and avoidance come from external collaborators. Their failures
    are not absorbed here; the caller decides how to handle them.
    """

    def __init__(self, novelty_engine: NoveltyEngine, avoidance_tracker: AvoidanceTracker) -> None:
        self._novelty = novelty_engine
        self._avoidance = avoidance_tracker

    async def score(
        self,
        user_id: str,
        place: Suggestion,
        preferences: UserPreferenceProfile | None = None,
    ) -> float:
        if preferences is None:
            return BASE_SCORE

        score = BASE_SCORE + preference_adjustment(place.category, preferences)

        novelty = await self._novelty.novelty_score(user_id, place)
        score += _clamp(novelty) * NOVELTY_WEIGHT

        avoidance = await self._avoidance.avoidance_score(user_id, place)
        score -= _clamp(avoidance) * AVOIDANCE_WEIGHT

        rating = parse_rating(place.rating)
        if rating is not None:
            score += (rating / 5.0) * RATING_WEIGHT

        return _clamp(score)

    async def score_many(
        self,
        user_id: str,
        places: Iterable[Suggestion],
        preferences: UserPreferenceProfile | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> dict[str, float]:
        """Score every place concurrently, keyed by suggestion id.

        If ``cancel`` is set before all scores are in, outstanding calls are
        cancelled and ``ScoringCancelled`` is raised. The first failing call
        cancels the rest and its exception is re-raised. Cancelling the
        awaiting task cancels them as well.
        """
        places = list(places)
        if not places:
            return {}

        tasks = [asyncio.ensure_future(self.score(user_id, p, preferences)) for p in places]
        waiter = asyncio.ensure_future(cancel.wait()) if cancel is not None else None
        pending = set(tasks)
        try:
            while pending:
                watched = pending if waiter is None else pending | {waiter}
                done, _ = await asyncio.wait(watched, return_when=asyncio.FIRST_COMPLETED)
                if waiter is not None and waiter in done:
                    logger.info(
                        "Personalization pass for user %s cancelled with %d places pending", user_id, len(pending)
                    )
                    raise ScoringCancelled(f"scoring cancelled for user {user_id}")

                errors = [task.exception() for task in done]
                failure = next((exc for exc in errors if exc is not None), None)
                if failure is not None:
                    raise failure
                pending -= done
        finally:
            for task in tasks:
                task.cancel()
            if waiter is not None:
                waiter.cancel()

        return {p.id: task.result() for p, task in zip(places, tasks)}
