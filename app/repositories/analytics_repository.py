"""
Analytics repository - read-only queries feeding the analytics core.

Every method returns record schemas rather than ORM objects so the
aggregation code never depends on a live session.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.application import Application
from app.models.application_stage_history import ApplicationStageHistory
from app.models.job import Job
from app.models.job_analytics import JobAnalytics
from app.models.pipeline_stage import PipelineStage
from app.schemas.records import (
    ApplicationRecord,
    JobAnalyticsRecord,
    JobRecord,
    PipelineStageRecord,
    StageHistoryRecord,
)


class AnalyticsRepository:
    """Repository for the analytics source tables."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_jobs(
        self,
        recruiter_id: Optional[int] = None,
        job_id: Optional[int] = None,
    ) -> List[JobRecord]:
        """List jobs visible to the caller."""
        query = select(Job)

        if recruiter_id is not None:
            query = query.where(Job.posted_by == recruiter_id)
        if job_id is not None:
            query = query.where(Job.id == job_id)

        query = query.order_by(Job.created_at.desc(), Job.id)

        result = await self.db.execute(query)
        return [JobRecord.model_validate(job) for job in result.scalars().all()]

    async def list_applications(
        self,
        recruiter_id: Optional[int] = None,
        job_id: Optional[int] = None,
        applied_from: Optional[datetime] = None,
        applied_to: Optional[datetime] = None,
    ) -> List[ApplicationRecord]:
        """
        List applications for jobs visible to the caller.

        applied_from is inclusive, applied_to exclusive.
        """
        query = select(Application)

        if recruiter_id is not None:
            query = query.join(Job, Application.job_id == Job.id).where(Job.posted_by == recruiter_id)
        if job_id is not None:
            query = query.where(Application.job_id == job_id)
        if applied_from is not None:
            query = query.where(Application.applied_at >= applied_from)
        if applied_to is not None:
            query = query.where(Application.applied_at < applied_to)

        query = query.order_by(Application.id)

        result = await self.db.execute(query)
        return [ApplicationRecord.model_validate(app) for app in result.scalars().all()]

    async def list_stages(self) -> List[PipelineStageRecord]:
        """All pipeline stages in pipeline order."""
        result = await self.db.execute(
            select(PipelineStage).order_by(PipelineStage.order)
        )
        return [PipelineStageRecord.model_validate(stage) for stage in result.scalars().all()]

    async def list_stage_history(
        self,
        application_ids: Iterable[int],
        changed_before: Optional[datetime] = None,
    ) -> List[StageHistoryRecord]:
        """Stage transitions for the given applications, oldest first."""
        ids = list(application_ids)
        if not ids:
            return []

        query = select(ApplicationStageHistory).where(
            ApplicationStageHistory.application_id.in_(ids)
        )
        if changed_before is not None:
            query = query.where(ApplicationStageHistory.changed_at < changed_before)

        query = query.order_by(
            ApplicationStageHistory.application_id,
            ApplicationStageHistory.changed_at,
        )

        result = await self.db.execute(query)
        return [StageHistoryRecord.model_validate(row) for row in result.scalars().all()]

    async def list_job_analytics(self, job_ids: Iterable[int]) -> List[JobAnalyticsRecord]:
        """View/click counters for the given jobs."""
        ids = list(job_ids)
        if not ids:
            return []

        result = await self.db.execute(
            select(JobAnalytics).where(JobAnalytics.job_id.in_(ids))
        )
        return [JobAnalyticsRecord.model_validate(row) for row in result.scalars().all()]
