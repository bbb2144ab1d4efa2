"""
Analytics business logic service.

Loads caller-scoped records through AnalyticsRepository and hands them to
the pure functions in app.services.analytics.
"""

import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.repositories.analytics_repository import AnalyticsRepository
from app.schemas.analytics import (
    AnalyticsNudges,
    DropoffReport,
    HiringMetrics,
    JobHealthSummary,
    SourcePerformance,
)
from app.services.analytics import (
    HirePredicate,
    JobHealthPolicy,
    build_dropoff_report,
    build_source_performance,
    detect_stale_candidates,
    get_hiring_metrics,
    jobs_needing_attention,
    summarize_job_health,
)
from app.utils.time import utc_now

logger = logging.getLogger(__name__)


def policy_from_settings() -> JobHealthPolicy:
    """Health thresholds as configured in the environment."""
    return JobHealthPolicy(
        no_applications_days=settings.HEALTH_NO_APPLICATIONS_DAYS,
        low_volume_days=settings.HEALTH_LOW_VOLUME_DAYS,
        low_volume_min_applications=settings.HEALTH_LOW_VOLUME_MIN_APPLICATIONS,
        inactivity_days=settings.HEALTH_INACTIVITY_DAYS,
        min_conversion_rate=settings.HEALTH_MIN_CONVERSION_RATE,
        conversion_min_applications=settings.HEALTH_CONVERSION_MIN_APPLICATIONS,
    )


class AnalyticsService:
    """Service for hiring analytics and job health nudges."""

    def __init__(
        self,
        db: AsyncSession,
        policy: Optional[JobHealthPolicy] = None,
        is_hire_stage: Optional[HirePredicate] = None,
    ):
        self.repository = AnalyticsRepository(db)
        self.policy = policy or policy_from_settings()
        self.is_hire_stage = is_hire_stage

    async def get_hiring_metrics(
        self,
        recruiter_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        job_id: Optional[int] = None,
    ) -> HiringMetrics:
        """Time-to-fill, time-in-stage and conversion for the caller's scope."""
        jobs = await self.repository.list_jobs(recruiter_id=recruiter_id, job_id=job_id)
        applications = await self.repository.list_applications(
            recruiter_id=recruiter_id,
            job_id=job_id,
            applied_from=start,
            applied_to=end,
        )
        stages = await self.repository.list_stages()
        history = await self.repository.list_stage_history(
            [application.id for application in applications],
            changed_before=end,
        )

        metrics = get_hiring_metrics(
            applications, stages, history, jobs,
            start=start, end=end, job_id=job_id,
            now=utc_now(), is_hire_stage=self.is_hire_stage,
        )
        logger.info(
            "Hiring metrics for recruiter=%s job=%s: %d applications, %d hires",
            recruiter_id, job_id, metrics.total_applications, metrics.total_hires,
        )
        return metrics

    async def get_job_health(self, recruiter_id: Optional[int] = None) -> List[JobHealthSummary]:
        """Health summary for every job in scope."""
        jobs = await self.repository.list_jobs(recruiter_id=recruiter_id)
        applications = await self.repository.list_applications(recruiter_id=recruiter_id)
        analytics = await self.repository.list_job_analytics([job.id for job in jobs])
        return summarize_job_health(jobs, applications, analytics, now=utc_now(), policy=self.policy)

    async def get_nudges(
        self,
        recruiter_id: Optional[int] = None,
        stale_threshold_days: Optional[int] = None,
    ) -> AnalyticsNudges:
        """Jobs needing attention plus stale candidate counts."""
        threshold = stale_threshold_days or settings.STALE_THRESHOLD_DAYS
        now = utc_now()

        jobs = await self.repository.list_jobs(recruiter_id=recruiter_id)
        applications = await self.repository.list_applications(recruiter_id=recruiter_id)
        analytics = await self.repository.list_job_analytics([job.id for job in jobs])

        summaries = summarize_job_health(jobs, applications, analytics, now=now, policy=self.policy)
        stale = detect_stale_candidates(jobs, applications, threshold_days=threshold, now=now)

        nudges = AnalyticsNudges(
            jobs_needing_attention=jobs_needing_attention(summaries),
            stale_candidates=stale,
        )
        logger.info(
            "Nudges for recruiter=%s: %d jobs need attention, %d jobs with stale candidates",
            recruiter_id, len(nudges.jobs_needing_attention), len(nudges.stale_candidates),
        )
        return nudges

    async def get_dropoff(
        self,
        recruiter_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        job_id: Optional[int] = None,
    ) -> DropoffReport:
        """Current-stage counts and stage conversion."""
        applications = await self.repository.list_applications(
            recruiter_id=recruiter_id, job_id=job_id, applied_from=start, applied_to=end,
        )
        stages = await self.repository.list_stages()
        return build_dropoff_report(applications, stages, start=start, end=end, job_id=job_id)

    async def get_source_performance(
        self,
        recruiter_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        job_id: Optional[int] = None,
    ) -> List[SourcePerformance]:
        """Applications and hires grouped by source."""
        applications = await self.repository.list_applications(
            recruiter_id=recruiter_id, job_id=job_id, applied_from=start, applied_to=end,
        )
        stages = await self.repository.list_stages()
        return build_source_performance(
            applications, stages,
            start=start, end=end, job_id=job_id,
            is_hire_stage=self.is_hire_stage,
        )
