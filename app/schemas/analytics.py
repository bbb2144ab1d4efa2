"""
Analytics Pydantic schemas.

Response shapes for the hiring-metrics, job-health, nudges and funnel
endpoints. Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


HealthStatus = Literal["green", "amber", "red"]


class CamelModel(BaseModel):
    """Base schema serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# Hiring metrics
# ============================================================================

class TimeToFillMetric(CamelModel):
    """Time-to-fill for a single job."""

    job_id: int
    job_title: str
    average_days: float
    hired_count: int
    oldest_hire_date: Optional[datetime] = None
    newest_hire_date: Optional[datetime] = None


class TimeToFill(CamelModel):
    overall: Optional[float] = None
    by_job: List[TimeToFillMetric] = []


class TimeInStageMetric(CamelModel):
    """Dwell time statistics for one pipeline stage."""

    stage_id: int
    stage_name: str
    stage_order: int
    average_days: float = 0.0
    transition_count: int = 0
    min_days: float = 0.0
    max_days: float = 0.0


class HiringMetrics(CamelModel):
    """Response for GET /api/analytics/hiring-metrics."""

    time_to_fill: TimeToFill
    time_in_stage: List[TimeInStageMetric]
    total_applications: int
    total_hires: int
    conversion_rate: Decimal


# ============================================================================
# Job health and nudges
# ============================================================================

class JobHealth(CamelModel):
    """Outcome of the health rule cascade."""

    status: HealthStatus
    reason: str


class JobHealthSummary(CamelModel):
    """Health classification plus the signals it was derived from."""

    job_id: int
    job_title: str
    status: HealthStatus
    reason: str
    total_applications: int
    days_since_posted: int
    days_since_last_application: Optional[int] = None
    conversion_rate: float


class StaleCandidatesSummary(CamelModel):
    """Stale applications grouped by job."""

    job_id: int
    job_title: str
    count: int
    oldest_stale_days: int


class AnalyticsNudges(CamelModel):
    """Response for GET /api/analytics/nudges."""

    jobs_needing_attention: List[JobHealthSummary]
    stale_candidates: List[StaleCandidatesSummary]


# ============================================================================
# Funnel reports
# ============================================================================

class DropoffStageCount(CamelModel):
    stage_id: int
    name: str
    order: int
    count: int


class DropoffConversion(CamelModel):
    name: str
    count: int
    rate: int


class DropoffReport(CamelModel):
    """Current-stage counts and stage-to-stage conversion."""

    stages: List[DropoffStageCount]
    unassigned: int
    conversions: List[DropoffConversion]


class SourcePerformance(CamelModel):
    """Applications, shortlists and hires for one application source."""

    source: str
    apps: int
    shortlist: int
    hires: int
    conversion: float
