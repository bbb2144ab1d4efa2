"""
PipelineStage model.

Represents a stage in the recruitment pipeline (e.g., Screening, Interview, Hired).
"""

from sqlalchemy import String, Integer, Boolean
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class PipelineStage(Base):
    """
    PipelineStages table - a recruiter-defined step in the hiring process.

    The order column determines display order and advancement direction.
    is_terminal_hire_stage marks the stage(s) that count as a hire.
    """

    __tablename__ = "pipeline_stages"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
    )

    # Human-readable name (e.g., "Phone Screen", "Offer Accepted")
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    is_default: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    is_terminal_hire_stage: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
