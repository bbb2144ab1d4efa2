"""Unit tests for the job health rule cascade."""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.services.analytics import (
    HEALTH_RULES,
    JobHealthPolicy,
    JobHealthSignals,
    classify_job_health,
    compute_view_conversion_rate,
    derive_job_health_signals,
    jobs_needing_attention,
    summarize_job_health,
)
from tests.conftest import days_ago, make_analytics, make_application, make_job

pytestmark = pytest.mark.unit


def signals(**overrides) -> JobHealthSignals:
    data = {
        "is_active": True,
        "status": "approved",
        "days_since_posted": 10,
        "total_applications": 8,
        "days_since_last_application": 1,
        "conversion_rate": 12.0,
    }
    data.update(overrides)
    return JobHealthSignals(**data)


@pytest.mark.parametrize(
    "overrides, expected_status, expected_reason",
    [
        ({"is_active": False}, "red", "Job is inactive"),
        ({"status": "pending"}, "amber", "Job not yet approved"),
        (
            {"total_applications": 0, "days_since_posted": 8, "days_since_last_application": None},
            "red",
            "No applications after the first week",
        ),
        ({"total_applications": 2, "days_since_posted": 15}, "red", "Very low application volume for job age"),
        ({"days_since_last_application": 15}, "amber", "No new applications in the last 14 days"),
        ({"conversion_rate": 3.0, "total_applications": 6}, "amber", "Low conversion from views to applications"),
        ({}, "green", "Healthy pipeline"),
    ],
)
def test_each_rule(overrides, expected_status, expected_reason):
    health = classify_job_health(signals(**overrides))

    assert health.status == expected_status
    assert health.reason == expected_reason


def test_inactive_wins_over_no_applications():
    health = classify_job_health(
        signals(is_active=False, total_applications=0, days_since_posted=30, days_since_last_application=None)
    )

    assert health.status == "red"
    assert health.reason == "Job is inactive"


def test_thresholds_are_strict():
    at_week = classify_job_health(
        signals(total_applications=0, days_since_posted=7, days_since_last_application=None)
    )
    few_apps = classify_job_health(signals(total_applications=4, conversion_rate=1.0))

    assert at_week.status == "green"
    # Conversion rule needs at least five applications
    assert few_apps.status == "green"


def test_classification_is_idempotent():
    inputs = signals(days_since_last_application=20)

    assert classify_job_health(inputs) == classify_job_health(inputs)


def test_rule_order_is_fixed():
    assert [status for _, status, _ in HEALTH_RULES] == ["red", "amber", "red", "red", "amber", "amber"]


def test_policy_is_tunable():
    policy = JobHealthPolicy(inactivity_days=7)

    health = classify_job_health(signals(days_since_last_application=8), policy)

    assert health.status == "amber"
    assert health.reason == "No new applications in the last 7 days"


def test_job_a_low_volume_example(now):
    job = make_job(1, title="Job A", created_at=days_ago(20))
    applications = [
        make_application(1, applied_at=days_ago(19)),
        make_application(2, applied_at=days_ago(18)),
    ]

    [summary] = summarize_job_health([job], applications, [], now=now)

    assert summary.status == "red"
    assert summary.reason == "Very low application volume for job age"
    assert summary.total_applications == 2
    assert summary.days_since_posted == 20
    assert summary.days_since_last_application == 18


def test_derived_signals(now):
    job = make_job(1, created_at=days_ago(9.75))
    applications = [
        make_application(1, applied_at=days_ago(6.5)),
        make_application(2, applied_at=days_ago(2.2)),
        make_application(3, applied_at=None),
        make_application(4, job_id=2, applied_at=days_ago(1)),
    ]

    derived = derive_job_health_signals(job, applications, make_analytics(1, conversion_rate=Decimal("7.50")), now)

    assert derived.days_since_posted == 9
    assert derived.total_applications == 3
    assert derived.days_since_last_application == 2
    assert derived.conversion_rate == 7.5


def test_derived_signals_edge_cases(now):
    future_job = make_job(1, created_at=now + timedelta(hours=5))

    derived = derive_job_health_signals(future_job, [], None, now)

    assert derived.days_since_posted == 0
    assert derived.days_since_last_application is None
    assert derived.conversion_rate == 0.0


def test_conversion_falls_back_to_counters(now):
    derived = derive_job_health_signals(make_job(1), [], make_analytics(1, views=200, apply_clicks=9), now)

    assert derived.conversion_rate == 4.5


def test_compute_view_conversion_rate():
    assert compute_view_conversion_rate(0, 5) == Decimal("0.00")
    assert compute_view_conversion_rate(200, 9) == Decimal("4.50")
    assert compute_view_conversion_rate(3, 1) == Decimal("33.33")


def test_jobs_needing_attention_orders_red_first(now):
    jobs = [
        make_job(1, status="pending", is_active=False),
        make_job(2, status="pending"),
        make_job(3, created_at=days_ago(3)),
        make_job(4, created_at=days_ago(12)),
    ]

    summaries = summarize_job_health(jobs, [], [], now=now)
    flagged = jobs_needing_attention(summaries)

    assert [s.status for s in summaries] == ["red", "amber", "green", "red"]
    assert [s.job_id for s in flagged] == [1, 4, 2]
    assert all(s.status != "green" for s in flagged)


def test_summary_json_shape(now):
    [summary] = summarize_job_health([make_job(1)], [], [make_analytics(1)], now=now)

    payload = summary.model_dump(mode="json", by_alias=True)

    assert set(payload) == {
        "jobId", "jobTitle", "status", "reason", "totalApplications",
        "daysSincePosted", "daysSinceLastApplication", "conversionRate",
    }
    assert payload["conversionRate"] == 20.0


def test_unset_stored_rate_uses_view_counters(now):
    job = make_job(1, created_at=days_ago(10))
    applications = [make_application(i, applied_at=days_ago(2)) for i in range(1, 7)]

    [tracked] = summarize_job_health(
        [job], applications, [make_analytics(1, views=100, apply_clicks=20, conversion_rate=None)], now=now,
    )
    [untracked] = summarize_job_health([job], applications, [], now=now)

    assert tracked.conversion_rate == 20.0
    assert tracked.status == "green"
    # Without any view tracking the rate counts as zero
    assert untracked.conversion_rate == 0.0
    assert untracked.reason == "Low conversion from views to applications"
