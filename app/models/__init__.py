"""
Models package.

Import all models here so they are registered with SQLAlchemy.
This file also makes it easy to import models from one place.
"""

from app.models.job import Job
from app.models.application import Application
from app.models.pipeline_stage import PipelineStage
from app.models.application_stage_history import ApplicationStageHistory
from app.models.job_analytics import JobAnalytics

# Export all models
__all__ = [
    "Job",
    "Application",
    "PipelineStage",
    "ApplicationStageHistory",
    "JobAnalytics",
]
