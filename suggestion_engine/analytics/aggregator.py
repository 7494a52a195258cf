from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Any

import pandas as pd

from ..filtering.stages import as_utc
from ..models import Suggestion

logger = logging.getLogger(__name__)


def _to_frame(suggestions: list[Suggestion]) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "category": [s.category for s in suggestions],
            "source": [s.source for s in suggestions],
            "score": [float(s.score) for s in suggestions],
            "has_photo": [bool(s.photo_url) for s in suggestions],
            "is_sponsored": [s.is_sponsored for s in suggestions],
            "created_at": pd.to_datetime([as_utc(s.created_at) for s in suggestions], utc=True),
        }
    )


def _counts(series: pd.Series) -> dict[str, int]:
    return {str(k): int(v) for k, v in series.value_counts(sort=False).items()}


def score_stats(scores: pd.Series) -> dict[str, float]:
    # "median" is the element at index n // 2 of the ascending order, so an
    # even-sized set reports the upper-middle value rather than an average.
    ordered = scores.sort_values(kind="stable").reset_index(drop=True)
    return {
        "min": float(ordered.iloc[0]),
        "max": float(ordered.iloc[-1]),
        "avg": float(ordered.mean()),
        "median": float(ordered.iloc[len(ordered) // 2]),
    }


def compute_statistics(
    suggestions: Iterable[Suggestion],
    now: datetime | None = None,
) -> dict[str, Any]:
    """Aggregate distributions, score stats and recency counts.

    ``created_today`` compares UTC calendar dates. A naive ``now`` (and any
    naive ``created_at``) is read as UTC, not local time, so callers holding
    local wall-clock times should pass aware datetimes. Returns ``{}`` for
    empty input or on any internal failure.
    """
    try:
        items = list(suggestions)
        if not items:
            return {}

        now_utc = as_utc(now or datetime.now(timezone.utc))
        df = _to_frame(items)
        created = df["created_at"]
        today = now_utc.date()
        week_ago = pd.Timestamp(now_utc - timedelta(days=7))

        with_photos = int(df["has_photo"].sum())
        sponsored = int(df["is_sponsored"].sum())

        return {
            "categories": _counts(df["category"]),
            "sources": _counts(df["source"]),
            "score_stats": score_stats(df["score"]),
            "with_photos": with_photos,
            "without_photos": len(df) - with_photos,
            "sponsored": sponsored,
            "organic": len(df) - sponsored,
            "created_today": int((created.dt.date == today).sum()),
            "created_this_week": int((created >= week_ago).sum()),
            "total_results": len(df),
        }
    except Exception:
        logger.error("Error calculating filter statistics", exc_info=True)
        return {}
