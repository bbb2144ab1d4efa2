"""
Job health classification.

Each job is classified green / amber / red by an ordered rule cascade: the
first matching rule wins. Later rules are more lenient, so reordering them
would hide the real reason behind a weaker one.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from app.schemas.analytics import HealthStatus, JobHealth, JobHealthSummary
from app.schemas.records import ApplicationRecord, JobAnalyticsRecord, JobRecord
from app.services.analytics.population import percentage
from app.utils.time import days_between, ensure_utc, utc_now

logger = logging.getLogger(__name__)


class JobHealthPolicy(BaseModel):
    """Tunable thresholds for the health cascade."""

    model_config = ConfigDict(frozen=True)

    no_applications_days: int = 7
    low_volume_days: int = 14
    low_volume_min_applications: int = 3
    inactivity_days: int = 14
    min_conversion_rate: float = 5.0
    conversion_min_applications: int = 5


DEFAULT_POLICY = JobHealthPolicy()


class JobHealthSignals(BaseModel):
    """Activity signals the cascade is evaluated against."""

    model_config = ConfigDict(frozen=True)

    is_active: bool
    status: str
    days_since_posted: int
    total_applications: int
    days_since_last_application: Optional[int] = None
    conversion_rate: float = 0.0


HealthPredicate = Callable[[JobHealthSignals, JobHealthPolicy], bool]

# (predicate, status, reason); reasons may reference policy fields
HEALTH_RULES: Tuple[Tuple[HealthPredicate, HealthStatus, str], ...] = (
    (
        lambda s, p: not s.is_active,
        "red",
        "Job is inactive",
    ),
    (
        lambda s, p: s.status != "approved",
        "amber",
        "Job not yet approved",
    ),
    (
        lambda s, p: s.total_applications == 0 and s.days_since_posted > p.no_applications_days,
        "red",
        "No applications after the first week",
    ),
    (
        lambda s, p: (
            s.total_applications < p.low_volume_min_applications
            and s.days_since_posted > p.low_volume_days
        ),
        "red",
        "Very low application volume for job age",
    ),
    (
        lambda s, p: (
            s.days_since_last_application is not None
            and s.days_since_last_application > p.inactivity_days
        ),
        "amber",
        "No new applications in the last {inactivity_days} days",
    ),
    (
        lambda s, p: (
            s.conversion_rate < p.min_conversion_rate
            and s.total_applications >= p.conversion_min_applications
        ),
        "amber",
        "Low conversion from views to applications",
    ),
)

HEALTHY = JobHealth(status="green", reason="Healthy pipeline")


def classify_job_health(signals: JobHealthSignals, policy: JobHealthPolicy = DEFAULT_POLICY) -> JobHealth:
    """Evaluate HEALTH_RULES top to bottom; the first match decides."""
    for predicate, status, reason in HEALTH_RULES:
        if predicate(signals, policy):
            return JobHealth(status=status, reason=reason.format(**policy.model_dump()))
    return HEALTHY


def compute_view_conversion_rate(views: int, apply_clicks: int) -> Decimal:
    """Apply clicks as a percentage of views, two decimals."""
    return percentage(apply_clicks, views, 2)


def _floor_days(start: datetime, end: datetime) -> int:
    return max(int(math.floor(days_between(start, end))), 0)


def _analytics_conversion(analytics: Optional[JobAnalyticsRecord]) -> float:
    if analytics is None:
        return 0.0
    if analytics.conversion_rate is not None:
        return float(analytics.conversion_rate)
    return float(compute_view_conversion_rate(analytics.views, analytics.apply_clicks))


def derive_job_health_signals(
    job: JobRecord,
    applications: Iterable[ApplicationRecord],
    analytics: Optional[JobAnalyticsRecord] = None,
    now: Optional[datetime] = None,
) -> JobHealthSignals:
    """
    Build cascade inputs for one job.

    ``applications`` should be the job's own applications. Day counts are
    floored to whole days and clamped at zero.
    """
    now = ensure_utc(now) if now is not None else utc_now()
    applications = [a for a in applications if a.job_id == job.id]
    applied = [ensure_utc(a.applied_at) for a in applications if a.applied_at is not None]

    return JobHealthSignals(
        is_active=job.is_active,
        status=job.status,
        days_since_posted=_floor_days(job.created_at, now),
        total_applications=len(applications),
        days_since_last_application=_floor_days(max(applied), now) if applied else None,
        conversion_rate=_analytics_conversion(analytics),
    )


def summarize_job_health(
    jobs: Iterable[JobRecord],
    applications: Iterable[ApplicationRecord],
    analytics: Iterable[JobAnalyticsRecord] = (),
    now: Optional[datetime] = None,
    policy: JobHealthPolicy = DEFAULT_POLICY,
) -> List[JobHealthSummary]:
    """Health summary for every job, in the order the jobs were given."""
    now = ensure_utc(now) if now is not None else utc_now()
    by_job: Dict[int, List[ApplicationRecord]] = {}
    for application in applications:
        by_job.setdefault(application.job_id, []).append(application)
    analytics_by_job = {row.job_id: row for row in analytics}

    summaries = []
    for job in jobs:
        signals = derive_job_health_signals(job, by_job.get(job.id, ()), analytics_by_job.get(job.id), now)
        health = classify_job_health(signals, policy)
        summaries.append(
            JobHealthSummary(
                job_id=job.id,
                job_title=job.title,
                status=health.status,
                reason=health.reason,
                total_applications=signals.total_applications,
                days_since_posted=signals.days_since_posted,
                days_since_last_application=signals.days_since_last_application,
                conversion_rate=signals.conversion_rate,
            )
        )
    logger.debug("Classified %d jobs", len(summaries))
    return summaries


_SEVERITY = {"red": 0, "amber": 1}


def jobs_needing_attention(summaries: Iterable[JobHealthSummary]) -> List[JobHealthSummary]:
    """Non-green summaries, red before amber, otherwise in input order."""
    flagged = [summary for summary in summaries if summary.status != "green"]
    return sorted(flagged, key=lambda summary: _SEVERITY[summary.status])
