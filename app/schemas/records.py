"""
Read-only record schemas consumed by the analytics core.

The repository converts ORM rows into these models so the pure
aggregation functions never touch a session.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class RecordBase(BaseModel):
    """Frozen, ORM-compatible base for analytics inputs."""

    model_config = ConfigDict(from_attributes=True, frozen=True)


class JobRecord(RecordBase):
    """A job posting as seen by the analytics core."""

    id: int
    title: str
    is_active: bool
    status: str  # pending, approved, declined
    created_at: datetime
    posted_by: Optional[int] = None


class ApplicationRecord(RecordBase):
    """A candidate application and its current pipeline position."""

    id: int
    job_id: int
    status: str = "submitted"
    applied_at: Optional[datetime] = None
    current_stage: Optional[int] = None
    stage_changed_at: Optional[datetime] = None
    source: Optional[str] = None


class PipelineStageRecord(RecordBase):
    """An ordered pipeline stage."""

    id: int
    name: str
    order: int
    is_default: bool = False
    is_terminal_hire_stage: bool = False


class StageHistoryRecord(RecordBase):
    """One stage transition of an application."""

    application_id: int
    from_stage: Optional[int] = None
    to_stage: int
    changed_at: datetime


class JobAnalyticsRecord(RecordBase):
    """View / apply-click counters for a job."""

    job_id: int
    views: int = 0
    apply_clicks: int = 0
    conversion_rate: Optional[Decimal] = None
