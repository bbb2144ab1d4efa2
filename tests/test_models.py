"""Table definitions the analytics reads depend on."""

import pytest

from app.models import JobAnalytics

pytestmark = pytest.mark.unit


def test_job_analytics_conversion_rate_is_nullable():
    column = JobAnalytics.__table__.c.conversion_rate

    assert column.nullable is True
    assert column.default is None
    assert column.server_default is None
