"""Unit tests for drop-off and source performance reports."""

import pytest

from app.services.analytics import build_dropoff_report, build_source_performance
from tests.conftest import days_ago, make_application

pytestmark = pytest.mark.unit


def test_dropoff_counts_and_conversions(stages):
    applications = [make_application(i, current_stage=10) for i in range(1, 7)]
    applications += [make_application(i, current_stage=20) for i in range(7, 10)]
    applications += [make_application(10, current_stage=30)]
    applications += [make_application(11, current_stage=None)]

    report = build_dropoff_report(applications, stages)

    assert [(row.name, row.count) for row in report.stages] == [
        ("Applied", 6), ("Screening", 3), ("Interview", 1), ("Hired", 0),
    ]
    assert report.unassigned == 1
    assert [c.rate for c in report.conversions] == [100, 50, 33, 0]


def test_dropoff_after_empty_stage_is_zero(stages):
    applications = [make_application(1, current_stage=20)]

    report = build_dropoff_report(applications, stages)

    assert [c.rate for c in report.conversions] == [100, 0, 0, 0]


def test_dropoff_respects_job_and_window(stages):
    applications = [
        make_application(1, current_stage=10, applied_at=days_ago(3)),
        make_application(2, job_id=2, current_stage=10, applied_at=days_ago(3)),
        make_application(3, current_stage=10, applied_at=days_ago(60)),
    ]

    report = build_dropoff_report(applications, stages, start=days_ago(30), job_id=1)

    assert report.stages[0].count == 1


def test_source_performance(stages):
    applications = [
        make_application(1, source="linkedin", status="shortlisted"),
        make_application(2, source="linkedin", status="interview", current_stage=40),
        make_application(3, source="linkedin"),
        make_application(4, source=None),
    ]

    rows = {row.source: row for row in build_source_performance(applications, stages)}

    assert set(rows) == {"linkedin", "unknown"}
    linkedin = rows["linkedin"]
    assert (linkedin.apps, linkedin.shortlist, linkedin.hires) == (3, 2, 1)
    assert linkedin.conversion == 33.3
    assert rows["unknown"].conversion == 0.0


def test_source_performance_empty(stages):
    assert build_source_performance([], stages) == []
