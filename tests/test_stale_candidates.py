"""Unit tests for stale candidate detection."""

import pytest

from app.services.analytics import detect_stale_candidates, staleness_days
from tests.conftest import days_ago, make_application, make_job

pytestmark = pytest.mark.unit


def test_shortlisted_application_untouched_for_twelve_days_is_stale(now):
    jobs = [make_job(1, title="Backend Engineer")]
    applications = [
        make_application(1, status="shortlisted", applied_at=days_ago(20), stage_changed_at=days_ago(12)),
    ]

    [summary] = detect_stale_candidates(jobs, applications, now=now)

    assert summary.job_id == 1
    assert summary.job_title == "Backend Engineer"
    assert summary.count == 1
    assert summary.oldest_stale_days == 12


def test_rejected_and_inactive_are_excluded(now):
    jobs = [make_job(1), make_job(2, is_active=False)]
    applications = [
        make_application(1, status="rejected", applied_at=days_ago(40), stage_changed_at=days_ago(30)),
        make_application(2, job_id=2, applied_at=days_ago(30)),
        make_application(3, job_id=99, applied_at=days_ago(30)),
    ]

    assert detect_stale_candidates(jobs, applications, now=now) == []


def test_threshold_is_inclusive(now):
    jobs = [make_job(1)]
    applications = [
        make_application(1, applied_at=days_ago(10)),
        make_application(2, applied_at=days_ago(9.9)),
    ]

    [summary] = detect_stale_candidates(jobs, applications, now=now)

    assert summary.count == 1


def test_recent_stage_change_resets_staleness(now):
    application = make_application(1, applied_at=days_ago(30), stage_changed_at=days_ago(2))

    assert staleness_days(application, now) == 2.0
    assert detect_stale_candidates([make_job(1)], [application], now=now) == []


def test_falls_back_to_applied_at(now):
    application = make_application(1, applied_at=days_ago(11), stage_changed_at=None)

    assert staleness_days(application, now) == 11.0
    assert staleness_days(make_application(2, applied_at=None), now) is None


def test_sorted_by_count_with_oldest_floored(now):
    jobs = [make_job(1, title="Few"), make_job(2, title="Many"), make_job(3, title="Tied")]
    applications = [
        make_application(1, job_id=1, applied_at=days_ago(15.8)),
        make_application(2, job_id=2, applied_at=days_ago(11)),
        make_application(3, job_id=2, applied_at=days_ago(25.6)),
        make_application(4, job_id=2, applied_at=days_ago(13)),
        make_application(5, job_id=3, applied_at=days_ago(40)),
    ]

    summaries = detect_stale_candidates(jobs, applications, now=now)

    assert [s.job_id for s in summaries] == [2, 1, 3]
    assert [s.count for s in summaries] == [3, 1, 1]
    assert summaries[0].oldest_stale_days == 25
    assert summaries[1].oldest_stale_days == 15


def test_custom_threshold(now):
    jobs = [make_job(1)]
    applications = [make_application(1, applied_at=days_ago(4))]

    assert detect_stale_candidates(jobs, applications, threshold_days=3, now=now)[0].count == 1
    assert detect_stale_candidates(jobs, applications, now=now) == []
