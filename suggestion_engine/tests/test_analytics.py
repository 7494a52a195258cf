from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from suggestion_engine.analytics.aggregator import compute_statistics
from suggestion_engine.models import Suggestion

NOW = datetime(2026, 10, 19, 15, 0, tzinfo=timezone.utc)


def _suggestion(sid: str, score: float, **overrides) -> Suggestion:
    data = {
        "id": sid,
        "place_name": f"Place {sid}",
        "latitude": 41.0,
        "longitude": 29.0,
        "category": "cafe",
        "source": "Google",
        "score": score,
        "created_at": NOW - timedelta(days=30),
    }
    data.update(overrides)
    return Suggestion(**data)


def test_empty_input_returns_empty_dict():
    assert compute_statistics([], now=NOW) == {}


def test_single_item_stats():
    stats = compute_statistics([_suggestion("a", 0.42)], now=NOW)
    assert stats["score_stats"] == {"min": 0.42, "max": 0.42, "avg": 0.42, "median": 0.42}
    assert stats["total_results"] == 1


def test_median_odd_count():
    items = [_suggestion(str(i), s) for i, s in enumerate([0.5, 0.1, 0.4, 0.2, 0.3])]
    stats = compute_statistics(items, now=NOW)["score_stats"]
    assert stats["median"] == 0.3
    assert stats["min"] == 0.1
    assert stats["max"] == 0.5
    assert stats["avg"] == pytest.approx(0.3)


def test_median_even_count_uses_upper_middle():
    items = [_suggestion(str(i), s) for i, s in enumerate([0.4, 0.1, 0.3, 0.2])]
    stats = compute_statistics(items, now=NOW)["score_stats"]
    assert stats["median"] == 0.3
    assert stats["avg"] == pytest.approx(0.25)


def test_distributions_and_splits():
    items = [
        _suggestion("a", 0.9, category="museum", source="Google", photo_url="https://x/p.jpg"),
        _suggestion("b", 0.5, category="museum", source="OpenTripMap", is_sponsored=True),
        _suggestion("c", 0.1, category="park", source="Google", photo_url=""),
    ]
    stats = compute_statistics(items, now=NOW)

    assert stats["categories"] == {"museum": 2, "park": 1}
    assert stats["sources"] == {"Google": 2, "OpenTripMap": 1}
    assert stats["with_photos"] == 1
    assert stats["without_photos"] == 2
    assert stats["sponsored"] == 1
    assert stats["organic"] == 2
    assert stats["total_results"] == 3


def test_recency_counts():
    items = [
        _suggestion("today", 0.5, created_at=NOW.replace(hour=1)),
        _suggestion("yesterday", 0.5, created_at=NOW - timedelta(days=1)),
        _suggestion("week", 0.5, created_at=NOW - timedelta(days=6, hours=23)),
        _suggestion("old", 0.5, created_at=NOW - timedelta(days=8)),
    ]
    stats = compute_statistics(items, now=NOW)
    assert stats["created_today"] == 1
    assert stats["created_this_week"] == 3


def test_today_uses_utc_calendar_date():
    # 01:00 on the 20th in UTC+3 is 22:00 on the 19th in UTC
    local_now = datetime(2026, 10, 20, 1, 0, tzinfo=timezone(timedelta(hours=3)))
    items = [
        _suggestion("on_19th", 0.5, created_at=datetime(2026, 10, 19, 20, 0, tzinfo=timezone.utc)),
        _suggestion("on_20th_a", 0.5, created_at=datetime(2026, 10, 20, 0, 10, tzinfo=timezone.utc)),
        _suggestion("on_20th_b", 0.5, created_at=datetime(2026, 10, 20, 0, 20, tzinfo=timezone.utc)),
    ]

    aware = compute_statistics(items, now=local_now)
    naive = compute_statistics(items, now=local_now.replace(tzinfo=None))

    assert aware["created_today"] == 1
    # the naive wall-clock value is read as 01:00 UTC on the 20th
    assert naive["created_today"] == 2


def test_values_are_plain_python_types():
    stats = compute_statistics([_suggestion("a", 0.5), _suggestion("b", 0.7)], now=NOW)
    assert type(stats["total_results"]) is int
    assert type(stats["with_photos"]) is int
    assert type(stats["score_stats"]["median"]) is float
    assert all(type(v) is int for v in stats["categories"].values())


@patch("suggestion_engine.analytics.aggregator._to_frame", side_effect=RuntimeError("boom"))
def test_internal_failure_returns_empty_dict(mock_frame):
    assert compute_statistics([_suggestion("a", 0.5)], now=NOW) == {}
