"""
JobAnalytics model.

View / apply-click counters maintained by the tracking endpoints.
"""

from decimal import Decimal
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Integer, Numeric, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.job import Job


class JobAnalytics(Base):
    """
    JobAnalytics table - precomputed counters, one row per job.
    """

    __tablename__ = "job_analytics"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )

    job_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("jobs.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    views: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    apply_clicks: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    # Percentage of views that turned into apply clicks; NULL until computed
    conversion_rate: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(5, 2),
        nullable=True,
    )

    job: Mapped["Job"] = relationship(
        "Job",
        back_populates="analytics",
    )
