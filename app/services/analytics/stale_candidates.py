"""
Stale candidate detection.

An application is stale when its job is active, it is not rejected, and no
recruiter action has touched it for at least the threshold. The last touch
is the later of stage_changed_at and applied_at.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from app.schemas.analytics import StaleCandidatesSummary
from app.schemas.records import ApplicationRecord, JobRecord
from app.utils.time import days_between, ensure_utc, utc_now

DEFAULT_STALE_THRESHOLD_DAYS = 10

TERMINAL_STATUSES = frozenset({"rejected"})


def staleness_days(application: ApplicationRecord, now: datetime) -> Optional[float]:
    """Days since the application was last touched, or None without timestamps."""
    touches = [
        ensure_utc(stamp)
        for stamp in (application.stage_changed_at, application.applied_at)
        if stamp is not None
    ]
    if not touches:
        return None
    return days_between(max(touches), now)


def detect_stale_candidates(
    jobs: Iterable[JobRecord],
    applications: Iterable[ApplicationRecord],
    *,
    threshold_days: float = DEFAULT_STALE_THRESHOLD_DAYS,
    now: Optional[datetime] = None,
) -> List[StaleCandidatesSummary]:
    """
    Group stale applications per job.

    ``oldest_stale_days`` is the worst staleness in the group, floored to
    whole days. Results are sorted by count, highest first; ties keep the
    order in which the jobs first produced a stale application.
    """
    now = ensure_utc(now) if now is not None else utc_now()
    jobs_by_id = {job.id: job for job in jobs}

    stale: Dict[int, List[float]] = {}
    for application in applications:
        job = jobs_by_id.get(application.job_id)
        if job is None or not job.is_active:
            continue
        if application.status in TERMINAL_STATUSES:
            continue
        days = staleness_days(application, now)
        if days is None or days < threshold_days:
            continue
        stale.setdefault(job.id, []).append(days)

    summaries = [
        StaleCandidatesSummary(
            job_id=job_id,
            job_title=jobs_by_id[job_id].title,
            count=len(days),
            oldest_stale_days=int(math.floor(max(days))),
        )
        for job_id, days in stale.items()
    ]
    summaries.sort(key=lambda summary: summary.count, reverse=True)
    return summaries
