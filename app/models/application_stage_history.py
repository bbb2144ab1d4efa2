"""
ApplicationStageHistory model.

One row per pipeline transition of an application.
"""

from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy import Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

if TYPE_CHECKING:
    from app.models.application import Application


class ApplicationStageHistory(Base):
    """
    ApplicationStageHistory table - time series of stage changes.
    """

    __tablename__ = "application_stage_history"
    __table_args__ = (
        Index("application_stage_history_application_idx", "application_id", "changed_at"),
    )

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )

    application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("applications.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Null for the first placement into the pipeline
    from_stage: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("pipeline_stages.id"),
        nullable=True,
    )

    to_stage: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("pipeline_stages.id"),
        nullable=False,
    )

    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default="now()",
    )

    application: Mapped["Application"] = relationship(
        "Application",
        back_populates="stage_history",
    )
