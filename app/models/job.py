"""
Job model.

Represents a job posting that candidates apply to.
"""

from datetime import datetime
from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Integer, Boolean, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.application import Application
    from app.models.job_analytics import JobAnalytics


class Job(Base):
    """
    Jobs table - a posting owned by a recruiter.

    A job is created pending and only becomes active after approval.
    Deactivation (manual or scheduled) removes it from attention scans.
    """

    __tablename__ = "jobs"
    __table_args__ = (
        Index("jobs_status_idx", "status"),
        Index("jobs_posted_by_idx", "posted_by"),
        Index("jobs_is_active_idx", "is_active"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Recruiter who posted the job (used for caller scoping)
    posted_by: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )

    # Only true after approval
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    # pending, approved, declined
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="pending",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default="now()",
    )

    applications: Mapped[List["Application"]] = relationship(
        "Application",
        back_populates="job",
    )

    analytics: Mapped[Optional["JobAnalytics"]] = relationship(
        "JobAnalytics",
        back_populates="job",
        uselist=False,
    )
