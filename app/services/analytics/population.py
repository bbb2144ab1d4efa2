"""Population selection and rounding shared by the analytics reports."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, List, Optional, Set

from app.schemas.records import ApplicationRecord, PipelineStageRecord
from app.utils.time import ensure_utc

HirePredicate = Callable[[PipelineStageRecord], bool]


def is_terminal_hire_stage(stage: PipelineStageRecord) -> bool:
    """Default hire predicate: the stage's explicit hire flag."""
    return stage.is_terminal_hire_stage


def hire_stage_ids(
    stages: Iterable[PipelineStageRecord],
    is_hire_stage: Optional[HirePredicate] = None,
) -> Set[int]:
    predicate = is_hire_stage or is_terminal_hire_stage
    return {stage.id for stage in stages if predicate(stage)}


def select_population(
    applications: Iterable[ApplicationRecord],
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    job_id: Optional[int] = None,
) -> List[ApplicationRecord]:
    """
    Applications a report is computed over.

    Drops records without applied_at, then applies the job filter and the
    half-open [start, end) window on applied_at.
    """
    start = ensure_utc(start) if start is not None else None
    end = ensure_utc(end) if end is not None else None

    population = []
    for application in applications:
        if application.applied_at is None:
            continue
        if job_id is not None and application.job_id != job_id:
            continue
        applied_at = ensure_utc(application.applied_at)
        if start is not None and applied_at < start:
            continue
        if end is not None and applied_at >= end:
            continue
        population.append(application)
    return population


def round_half_up(value: float, places: int = 1) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(numerator: int, denominator: int, places: int = 2) -> Decimal:
    """numerator / denominator as a percentage; zero when denominator is 0."""
    quantum = Decimal(1).scaleb(-places)
    if denominator <= 0:
        return Decimal(0).quantize(quantum)
    return (Decimal(numerator) * 100 / Decimal(denominator)).quantize(quantum, rounding=ROUND_HALF_UP)
