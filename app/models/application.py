"""
Application model.

Represents a candidate's application to a job and its pipeline position.
"""

from datetime import datetime
from typing import Optional, List, TYPE_CHECKING

from sqlalchemy import String, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.job import Job
    from app.models.application_stage_history import ApplicationStageHistory


class Application(Base):
    """
    Applications table - one row per candidate per job.

    current_stage / stage_changed_at move whenever a recruiter
    advances or regresses the candidate in the pipeline.
    """

    __tablename__ = "applications"
    __table_args__ = (
        Index("applications_job_id_idx", "job_id"),
        Index("applications_current_stage_idx", "current_stage"),
        Index("applications_status_idx", "status"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )

    job_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("jobs.id"),
        nullable=False,
    )

    # submitted, reviewed, shortlisted, rejected, downloaded
    status: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        default="submitted",
    )

    applied_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        server_default="now()",
    )

    current_stage: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("pipeline_stages.id"),
        nullable=True,
    )

    stage_changed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # public_apply, recruiter_add, referral, linkedin, indeed, other
    source: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
        default="public_apply",
    )

    # Relationships
    job: Mapped["Job"] = relationship(
        "Job",
        back_populates="applications",
    )

    stage_history: Mapped[List["ApplicationStageHistory"]] = relationship(
        "ApplicationStageHistory",
        back_populates="application",
    )
