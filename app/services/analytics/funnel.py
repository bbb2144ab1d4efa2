"""Pipeline drop-off and source performance reports."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from app.schemas.analytics import (
    DropoffConversion,
    DropoffReport,
    DropoffStageCount,
    SourcePerformance,
)
from app.schemas.records import ApplicationRecord, PipelineStageRecord
from app.services.analytics.population import (
    HirePredicate,
    hire_stage_ids,
    round_half_up,
    select_population,
)

UNKNOWN_SOURCE = "unknown"
SHORTLIST_STATUSES = frozenset({"shortlisted", "interview"})


def build_dropoff_report(
    applications: Iterable[ApplicationRecord],
    stages: Iterable[PipelineStageRecord],
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    job_id: Optional[int] = None,
) -> DropoffReport:
    """
    Count applications by current stage and the conversion between stages.

    The first stage always converts at 100; each later stage is its count as
    a whole percentage of the previous stage's count (0 when that is empty).
    """
    population = select_population(applications, start=start, end=end, job_id=job_id)
    ordered_stages = sorted(stages, key=lambda stage: stage.order)

    per_stage: Dict[int, int] = {}
    unassigned = 0
    for application in population:
        if application.current_stage is None:
            unassigned += 1
        else:
            per_stage[application.current_stage] = per_stage.get(application.current_stage, 0) + 1

    counts = [
        DropoffStageCount(stage_id=stage.id, name=stage.name, order=stage.order, count=per_stage.get(stage.id, 0))
        for stage in ordered_stages
    ]

    conversions = []
    for index, row in enumerate(counts):
        if index == 0:
            rate = 100
        else:
            previous = counts[index - 1].count
            rate = int(round_half_up(row.count / previous * 100, 0)) if previous > 0 else 0
        conversions.append(DropoffConversion(name=row.name, count=row.count, rate=rate))

    return DropoffReport(stages=counts, unassigned=unassigned, conversions=conversions)


def build_source_performance(
    applications: Iterable[ApplicationRecord],
    stages: Iterable[PipelineStageRecord],
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    job_id: Optional[int] = None,
    is_hire_stage: Optional[HirePredicate] = None,
) -> List[SourcePerformance]:
    """Applications, shortlists and hires per application source."""
    population = select_population(applications, start=start, end=end, job_id=job_id)
    hire_ids = hire_stage_ids(stages, is_hire_stage)

    grouped: Dict[str, Dict[str, int]] = {}
    for application in population:
        bucket = grouped.setdefault(
            application.source or UNKNOWN_SOURCE,
            {"apps": 0, "shortlist": 0, "hires": 0},
        )
        bucket["apps"] += 1
        if application.status in SHORTLIST_STATUSES:
            bucket["shortlist"] += 1
        if application.current_stage in hire_ids:
            bucket["hires"] += 1

    return [
        SourcePerformance(
            source=source,
            apps=bucket["apps"],
            shortlist=bucket["shortlist"],
            hires=bucket["hires"],
            conversion=round_half_up(bucket["hires"] / bucket["apps"] * 100, 1),
        )
        for source, bucket in grouped.items()
    ]
