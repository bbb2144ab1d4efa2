"""
Schemas package.

Import all schemas here for easy access.
"""

from app.schemas.analytics import (
    AnalyticsNudges,
    DropoffReport,
    HiringMetrics,
    JobHealth,
    JobHealthSummary,
    SourcePerformance,
    StaleCandidatesSummary,
    TimeInStageMetric,
    TimeToFill,
    TimeToFillMetric,
)
from app.schemas.records import (
    ApplicationRecord,
    JobAnalyticsRecord,
    JobRecord,
    PipelineStageRecord,
    StageHistoryRecord,
)

__all__ = [
    "AnalyticsNudges",
    "ApplicationRecord",
    "DropoffReport",
    "HiringMetrics",
    "JobAnalyticsRecord",
    "JobHealth",
    "JobHealthSummary",
    "JobRecord",
    "PipelineStageRecord",
    "SourcePerformance",
    "StageHistoryRecord",
    "StaleCandidatesSummary",
    "TimeInStageMetric",
    "TimeToFill",
    "TimeToFillMetric",
]
