"""
Ordered filter pipeline.

The stage order is fixed: narrowing filters first, then the sort, then the
sponsored filter, then the limit, so the limit always counts the final
visible set. Two stages are hooks (time of day and personalization) that
default to pass-through and can be swapped via ``PipelineStages``.

The run is fail-open. If any stage raises, the error is logged against that
stage and the outcome carries the original, unfiltered candidates.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone

from ..config import DEFAULT_CONFIG, EngineConfig
from ..models import FilterCriteria, FilterOutcome, Suggestion
from . import stages as st

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineStages:
    """Replaceable hook stages. Everything else in the pipeline is fixed."""

    time_of_day: st.Stage = st.passthrough
    personalization: st.Stage = st.passthrough


DEFAULT_STAGES = PipelineStages()


def _personalization_gate(hook: st.Stage) -> st.Stage:
    def stage(candidates: st.Candidates, criteria: FilterCriteria, ctx: st.StageContext) -> st.Candidates:
        if not criteria.user_hash or not criteria.match_preferences:
            return candidates
        return hook(candidates, criteria, ctx)

    return stage


def build_stages(hooks: PipelineStages = DEFAULT_STAGES) -> list[tuple[str, st.Stage]]:
    return [
        ("radius", st.filter_by_radius),
        ("categories", st.filter_by_categories),
        ("exclude_categories", st.exclude_categories),
        ("min_score", st.filter_by_min_score),
        ("time_of_day", hooks.time_of_day),
        ("weather", st.filter_by_weather),
        ("trending", st.filter_trending),
        ("personalization", _personalization_gate(hooks.personalization)),
        ("keywords", st.filter_by_keywords),
        ("sources", st.filter_by_sources),
        ("photos", st.filter_by_photos),
        ("created_after", st.filter_by_created_after),
        ("sort", st.sort_suggestions),
        ("sponsored", st.filter_sponsored),
        ("limit", st.apply_limit),
    ]


def apply_filters(
    candidates: Iterable[Suggestion],
    criteria: FilterCriteria,
    *,
    now: datetime | None = None,
    stages: PipelineStages = DEFAULT_STAGES,
    config: EngineConfig = DEFAULT_CONFIG,
) -> FilterOutcome:
    original = tuple(candidates)
    if not original:
        return FilterOutcome(suggestions=original)

    ctx = st.StageContext(now=now or datetime.now(timezone.utc), config=config)
    current = original
    stage_name = "setup"
    try:
        for stage_name, stage in build_stages(stages):
            current = stage(current, criteria, ctx)
    except Exception as exc:
        logger.error(
            "Filter stage %r failed, returning %d unfiltered suggestions",
            stage_name,
            len(original),
            exc_info=True,
        )
        return FilterOutcome(
            suggestions=original,
            fell_back=True,
            failed_stage=stage_name,
            error=f"{type(exc).__name__}: {exc}",
        )

    logger.debug("Filtered %d suggestions down to %d", len(original), len(current))
    return FilterOutcome(suggestions=current)
