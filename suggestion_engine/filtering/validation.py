from __future__ import annotations

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models import FilterCriteria, ValidationResult


def validate_criteria(
    criteria: FilterCriteria,
    config: EngineConfig = DEFAULT_CONFIG,
) -> ValidationResult:
    """Check criteria bounds. Every rule runs, so all violations are reported."""
    errors: list[str] = []
    lo, hi = config.min_rating, config.max_rating

    if criteria.radius is not None and criteria.radius <= 0:
        errors.append("Radius must be greater than 0")

    if criteria.radius is not None and criteria.radius > config.max_radius_m:
        errors.append(f"Radius cannot exceed {config.max_radius_m // 1000}km")

    if criteria.min_rating is not None and not lo <= criteria.min_rating <= hi:
        errors.append(f"MinRating must be between {lo:g} and {hi:g}")

    if criteria.max_rating is not None and not lo <= criteria.max_rating <= hi:
        errors.append(f"MaxRating must be between {lo:g} and {hi:g}")

    if (
        criteria.min_rating is not None
        and criteria.max_rating is not None
        and criteria.min_rating > criteria.max_rating
    ):
        errors.append("MinRating cannot be greater than MaxRating")

    if criteria.limit is not None and criteria.limit <= 0:
        errors.append("Limit must be greater than 0")

    if criteria.limit is not None and criteria.limit > config.max_limit:
        errors.append(f"Limit cannot exceed {config.max_limit}")

    return ValidationResult(valid=not errors, errors=errors)
