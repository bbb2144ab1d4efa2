"""
Analytics router - hiring metrics, job health and nudges.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.dependencies import get_db, get_recruiter_scope
from app.errors import invalid_query_param
from app.schemas.analytics import (
    AnalyticsNudges,
    DropoffReport,
    HiringMetrics,
    JobHealthSummary,
    SourcePerformance,
)
from app.services.analytics_service import AnalyticsService
from app.utils.time import ensure_utc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


def _parse_date(name: str, value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        invalid_query_param(name, value, f"Invalid {name} format")
    return ensure_utc(parsed)


def _parse_job_id(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        job_id = int(value)
    except ValueError:
        job_id = 0
    if job_id <= 0:
        invalid_query_param("jobId", value)
    return job_id


def parse_report_scope(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    job_id: Optional[str] = Query(None, alias="jobId"),
) -> Tuple[Optional[datetime], Optional[datetime], Optional[int]]:
    """Validate the shared startDate / endDate / jobId query parameters."""
    start = _parse_date("startDate", start_date)
    end = _parse_date("endDate", end_date)
    if start is not None and end is not None and end < start:
        invalid_query_param("endDate", end_date, "endDate must not be before startDate")
    return start, end, _parse_job_id(job_id)


@router.get("/hiring-metrics", response_model=HiringMetrics)
async def hiring_metrics(
    scope: Tuple[Optional[datetime], Optional[datetime], Optional[int]] = Depends(parse_report_scope),
    recruiter_id: Optional[int] = Depends(get_recruiter_scope),
    db: AsyncSession = Depends(get_db),
):
    """
    Comprehensive hiring metrics: time-to-fill, time-in-stage, conversion rate.

    The [startDate, endDate) window applies to application and stage-change dates.
    """
    start, end, job_id = scope
    try:
        return await AnalyticsService(db).get_hiring_metrics(
            recruiter_id=recruiter_id, start=start, end=end, job_id=job_id,
        )
    except Exception:
        logger.exception("Error fetching hiring metrics")
        raise


@router.get("/job-health", response_model=List[JobHealthSummary])
async def job_health(
    recruiter_id: Optional[int] = Depends(get_recruiter_scope),
    db: AsyncSession = Depends(get_db),
):
    """Health summaries for all jobs in scope."""
    try:
        return await AnalyticsService(db).get_job_health(recruiter_id=recruiter_id)
    except Exception:
        logger.exception("Error fetching job health")
        raise


@router.get("/nudges", response_model=AnalyticsNudges)
async def nudges(
    stale_days: Optional[int] = Query(None, alias="staleDays", ge=1, le=365),
    recruiter_id: Optional[int] = Depends(get_recruiter_scope),
    db: AsyncSession = Depends(get_db),
):
    """Jobs needing attention and stale candidate counts."""
    try:
        return await AnalyticsService(db).get_nudges(
            recruiter_id=recruiter_id, stale_threshold_days=stale_days,
        )
    except Exception:
        logger.exception("Error fetching nudges")
        raise


@router.get("/dropoff", response_model=DropoffReport)
async def dropoff(
    scope: Tuple[Optional[datetime], Optional[datetime], Optional[int]] = Depends(parse_report_scope),
    recruiter_id: Optional[int] = Depends(get_recruiter_scope),
    db: AsyncSession = Depends(get_db),
):
    """Stage counts and conversion rates for the selected window."""
    start, end, job_id = scope
    try:
        return await AnalyticsService(db).get_dropoff(
            recruiter_id=recruiter_id, start=start, end=end, job_id=job_id,
        )
    except Exception:
        logger.exception("Error fetching dropoff")
        raise


@router.get("/source-performance", response_model=List[SourcePerformance])
async def source_performance(
    scope: Tuple[Optional[datetime], Optional[datetime], Optional[int]] = Depends(parse_report_scope),
    recruiter_id: Optional[int] = Depends(get_recruiter_scope),
    db: AsyncSession = Depends(get_db),
):
    """Applications, shortlists and hires grouped by source."""
    start, end, job_id = scope
    try:
        return await AnalyticsService(db).get_source_performance(
            recruiter_id=recruiter_id, start=start, end=end, job_id=job_id,
        )
    except Exception:
        logger.exception("Error fetching source performance")
        raise
