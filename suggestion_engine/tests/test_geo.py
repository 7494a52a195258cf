from __future__ import annotations

import math

import numpy as np
import pytest

from suggestion_engine.filtering.geo import EARTH_RADIUS_M, haversine_m, haversine_m_many

LONDON = (51.5074, -0.1278)
PARIS = (48.8566, 2.3522)
ISTANBUL = (41.0082, 28.9784)


def test_london_to_paris():
    d = haversine_m(*LONDON, *PARIS)
    assert d == pytest.approx(343_000, abs=2_000)


def test_distance_is_symmetric():
    assert haversine_m(*LONDON, *ISTANBUL) == pytest.approx(haversine_m(*ISTANBUL, *LONDON))


def test_distance_to_self_is_zero():
    assert haversine_m(*PARIS, *PARIS) == 0.0


def test_vectorised_matches_scalar():
    lats = [PARIS[0], ISTANBUL[0], LONDON[0]]
    lngs = [PARIS[1], ISTANBUL[1], LONDON[1]]
    many = haversine_m_many(*LONDON, lats, lngs)
    expected = [haversine_m(*LONDON, lat, lng) for lat, lng in zip(lats, lngs)]
    assert np.allclose(many, expected)
    assert many[2] == pytest.approx(0.0, abs=1e-6)


def test_vectorised_empty():
    assert haversine_m_many(*LONDON, [], []).shape == (0,)


# ── Antipodal edge ───────────────────────────────────────────────────────

NEAR_ANTIPODAL = [
    (69.5123, 86.5812),
    (0.0, 0.0),
    (45.0, 90.0),
    (-33.8688, 151.2093),
    (89.9999, -179.9999),
]


@pytest.mark.parametrize("lat, lng", NEAR_ANTIPODAL)
def test_antipodal_pair_is_half_circumference(lat, lng):
    other_lng = lng - 180 if lng > 0 else lng + 180
    d = haversine_m(lat, lng, -lat, other_lng)
    assert d == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-6)


def test_vectorised_antipodal_pairs():
    lats = [-lat for lat, _ in NEAR_ANTIPODAL]
    lngs = [lng - 180 if lng > 0 else lng + 180 for _, lng in NEAR_ANTIPODAL]
    for (lat, lng), other_lat, other_lng in zip(NEAR_ANTIPODAL, lats, lngs):
        d = haversine_m_many(lat, lng, [other_lat], [other_lng])
        assert not np.isnan(d).any()
        assert d[0] == pytest.approx(math.pi * EARTH_RADIUS_M, rel=1e-6)
