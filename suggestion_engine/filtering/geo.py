"""Geospatial helpers."""
from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

EARTH_RADIUS_M = 6_371_000.0


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def haversine_m_many(
    lat: float,
    lng: float,
    lats: Sequence[float] | np.ndarray,
    lngs: Sequence[float] | np.ndarray,
) -> np.ndarray:
    """Distances in meters from one point to many, same formula as ``haversine_m``."""
    lats_arr = np.asarray(lats, dtype=float)
    lngs_arr = np.asarray(lngs, dtype=float)
    if lats_arr.size == 0:
        return np.zeros(0, dtype=float)

    phi1 = np.radians(lat)
    phi2 = np.radians(lats_arr)
    dphi = np.radians(lats_arr - lat)
    dlambda = np.radians(lngs_arr - lng)

    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlambda / 2) ** 2
    # Float rounding can push a slightly above 1 near antipodal points
    a = np.clip(a, 0.0, 1.0)
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_M * c
