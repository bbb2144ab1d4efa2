"""
Hiring analytics core.

Pure, synchronous aggregation over record schemas supplied by the caller:
hiring metrics, job health classification, stale candidate detection and
funnel reports. Nothing in this package performs I/O.
"""

from app.services.analytics.funnel import build_dropoff_report, build_source_performance
from app.services.analytics.job_health import (
    DEFAULT_POLICY,
    HEALTH_RULES,
    JobHealthPolicy,
    JobHealthSignals,
    classify_job_health,
    compute_view_conversion_rate,
    derive_job_health_signals,
    jobs_needing_attention,
    summarize_job_health,
)
from app.services.analytics.metrics import (
    calculate_time_in_stage,
    calculate_time_to_fill,
    get_hiring_metrics,
)
from app.services.analytics.population import (
    HirePredicate,
    hire_stage_ids,
    is_terminal_hire_stage,
    select_population,
)
from app.services.analytics.stale_candidates import (
    DEFAULT_STALE_THRESHOLD_DAYS,
    detect_stale_candidates,
    staleness_days,
)

__all__ = [
    "DEFAULT_POLICY",
    "DEFAULT_STALE_THRESHOLD_DAYS",
    "HEALTH_RULES",
    "HirePredicate",
    "JobHealthPolicy",
    "JobHealthSignals",
    "build_dropoff_report",
    "build_source_performance",
    "calculate_time_in_stage",
    "calculate_time_to_fill",
    "classify_job_health",
    "compute_view_conversion_rate",
    "derive_job_health_signals",
    "detect_stale_candidates",
    "get_hiring_metrics",
    "hire_stage_ids",
    "is_terminal_hire_stage",
    "jobs_needing_attention",
    "select_population",
    "staleness_days",
    "summarize_job_health",
]
