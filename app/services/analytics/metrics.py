"""
Hiring metrics.

Computes founder-level reporting numbers from raw pipeline records:
- Time-to-fill: average days from application to hire, overall and per job
- Time-in-stage: average/min/max dwell in each pipeline stage
- Totals and the application-to-hire conversion rate

Every figure is computed over the same filtered population (job filter plus
the [start, end) window on applied_at), so scoped calls are consistent
subsets of the unscoped call. Day counts stay fractional until output.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from app.schemas.analytics import HiringMetrics, TimeInStageMetric, TimeToFill, TimeToFillMetric
from app.schemas.records import (
    ApplicationRecord,
    JobRecord,
    PipelineStageRecord,
    StageHistoryRecord,
)
from app.services.analytics.population import (
    HirePredicate,
    hire_stage_ids,
    percentage,
    round_half_up,
    select_population,
)
from app.utils.time import days_between, ensure_utc, utc_now

logger = logging.getLogger(__name__)

UNKNOWN_JOB_TITLE = "Unknown job"


def _group_history(history: Iterable[StageHistoryRecord]) -> Dict[int, List[StageHistoryRecord]]:
    """History rows per application, oldest first."""
    grouped: Dict[int, List[StageHistoryRecord]] = defaultdict(list)
    for row in history:
        grouped[row.application_id].append(row)
    for rows in grouped.values():
        rows.sort(key=lambda row: ensure_utc(row.changed_at))
    return grouped


def _hire_time(
    application: ApplicationRecord,
    rows: Sequence[StageHistoryRecord],
    hire_ids: Set[int],
) -> Optional[datetime]:
    """When the application first entered a hire stage, if ever."""
    for row in rows:
        if row.to_stage in hire_ids:
            return ensure_utc(row.changed_at)
    # No transition recorded, but the current stage says hired
    if application.current_stage in hire_ids and application.stage_changed_at is not None:
        return ensure_utc(application.stage_changed_at)
    return None


def _collect_hires(
    population: Sequence[ApplicationRecord],
    history_by_app: Dict[int, List[StageHistoryRecord]],
    hire_ids: Set[int],
    end: Optional[datetime],
) -> List[Tuple[ApplicationRecord, datetime, float]]:
    hires = []
    for application in population:
        hired_at = _hire_time(application, history_by_app.get(application.id, ()), hire_ids)
        if hired_at is None:
            continue
        if end is not None and hired_at >= end:
            continue
        days = max(days_between(application.applied_at, hired_at), 0.0)
        hires.append((application, hired_at, days))
    return hires


def _time_to_fill_by_job(
    hires: Sequence[Tuple[ApplicationRecord, datetime, float]],
    jobs: Iterable[JobRecord],
) -> List[TimeToFillMetric]:
    titles = {job.id: job.title for job in jobs}
    per_job: Dict[int, List[Tuple[datetime, float]]] = defaultdict(list)
    for application, hired_at, days in hires:
        per_job[application.job_id].append((hired_at, days))

    metrics = []
    for job_id in sorted(per_job):
        samples = per_job[job_id]
        hire_dates = [hired_at for hired_at, _ in samples]
        total_days = sum(days for _, days in samples)
        metrics.append(
            TimeToFillMetric(
                job_id=job_id,
                job_title=titles.get(job_id, UNKNOWN_JOB_TITLE),
                average_days=round_half_up(total_days / len(samples), 1),
                hired_count=len(samples),
                oldest_hire_date=min(hire_dates),
                newest_hire_date=max(hire_dates),
            )
        )
    return metrics


def calculate_time_to_fill(
    applications: Iterable[ApplicationRecord],
    stages: Iterable[PipelineStageRecord],
    history: Iterable[StageHistoryRecord],
    jobs: Iterable[JobRecord] = (),
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    job_id: Optional[int] = None,
    is_hire_stage: Optional[HirePredicate] = None,
) -> TimeToFill:
    """
    Time-to-fill over the filtered population.

    ``overall`` is the mean over every hire (not a mean of per-job means) and
    is None only when there are no hires. Hires stamped at or after ``end``
    fall outside the window.
    """
    end = ensure_utc(end) if end is not None else None
    population = select_population(applications, start=start, end=end, job_id=job_id)
    hires = _collect_hires(population, _group_history(history), hire_stage_ids(stages, is_hire_stage), end)

    overall = None
    if hires:
        overall = round_half_up(sum(days for _, _, days in hires) / len(hires), 1)

    return TimeToFill(overall=overall, by_job=_time_to_fill_by_job(hires, jobs))


def calculate_time_in_stage(
    applications: Iterable[ApplicationRecord],
    stages: Iterable[PipelineStageRecord],
    history: Iterable[StageHistoryRecord],
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    job_id: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[TimeInStageMetric]:
    """
    Dwell-time statistics per pipeline stage, ordered by stage order.

    A history row opens a dwell in ``to_stage`` that closes at the next row
    for the same application. The last row closes at the window end, or at
    ``now`` when no end is given (or the end lies in the future). Rows at or
    after the window end are ignored. Stages without samples report zeros;
    rows pointing at unknown stages are dropped.
    """
    now = ensure_utc(now) if now is not None else utc_now()
    end = ensure_utc(end) if end is not None else None
    cutoff = min(end, now) if end is not None else now

    ordered_stages = sorted(stages, key=lambda stage: stage.order)
    known_ids = {stage.id for stage in ordered_stages}
    population = select_population(applications, start=start, end=end, job_id=job_id)
    history_by_app = _group_history(history)

    samples: Dict[int, List[float]] = defaultdict(list)
    for application in population:
        rows = [
            row for row in history_by_app.get(application.id, ())
            if end is None or ensure_utc(row.changed_at) < end
        ]
        for index, row in enumerate(rows):
            if row.to_stage not in known_ids:
                continue
            left_at = rows[index + 1].changed_at if index + 1 < len(rows) else cutoff
            samples[row.to_stage].append(max(days_between(row.changed_at, left_at), 0.0))

    metrics = []
    for stage in ordered_stages:
        dwell = samples.get(stage.id)
        if not dwell:
            metrics.append(
                TimeInStageMetric(stage_id=stage.id, stage_name=stage.name, stage_order=stage.order)
            )
            continue
        metrics.append(
            TimeInStageMetric(
                stage_id=stage.id,
                stage_name=stage.name,
                stage_order=stage.order,
                average_days=round_half_up(sum(dwell) / len(dwell), 1),
                transition_count=len(dwell),
                min_days=round_half_up(min(dwell), 1),
                max_days=round_half_up(max(dwell), 1),
            )
        )
    return metrics


def get_hiring_metrics(
    applications: Iterable[ApplicationRecord],
    stages: Iterable[PipelineStageRecord],
    history: Iterable[StageHistoryRecord],
    jobs: Iterable[JobRecord] = (),
    *,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    job_id: Optional[int] = None,
    now: Optional[datetime] = None,
    is_hire_stage: Optional[HirePredicate] = None,
) -> HiringMetrics:
    """
    Comprehensive hiring metrics for one scope.

    Args:
        applications: Candidate applications visible to the caller
        stages: The full pipeline stage list
        history: Stage transitions for those applications
        jobs: Jobs, used for titles in the per-job breakdown
        start: Optional inclusive lower bound on applied_at
        end: Optional exclusive upper bound on applied_at and stage changes
        job_id: Optional filter by specific job
        now: Reference time for open dwells (defaults to the current UTC time)
        is_hire_stage: Predicate marking hire stages (defaults to the stage flag)
    """
    applications = list(applications)
    stages = list(stages)
    history = list(history)
    jobs = list(jobs)

    end_utc = ensure_utc(end) if end is not None else None
    population = select_population(applications, start=start, end=end_utc, job_id=job_id)

    time_to_fill = calculate_time_to_fill(
        population, stages, history, jobs,
        end=end_utc, is_hire_stage=is_hire_stage,
    )
    time_in_stage = calculate_time_in_stage(
        population, stages, history,
        end=end_utc, now=now,
    )

    total_applications = len(population)
    total_hires = sum(metric.hired_count for metric in time_to_fill.by_job)
    logger.debug(
        "Hiring metrics: %d applications, %d hires (job_id=%s, start=%s, end=%s)",
        total_applications, total_hires, job_id, start, end,
    )

    return HiringMetrics(
        time_to_fill=time_to_fill,
        time_in_stage=time_in_stage,
        total_applications=total_applications,
        total_hires=total_hires,
        conversion_rate=percentage(total_hires, total_applications, 2),
    )
