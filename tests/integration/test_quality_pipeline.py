"""
End-to-end test of the quality pipeline on a file-backed SQLite database.

Metrics, feedback and reviews are written through the leaf services and read
back through the dashboard, whose fan-out runs on real worker threads.
"""

from datetime import datetime, timedelta

import pytest

import aiqa.utils.database as db_module
from aiqa.errors import UpstreamUnavailableError
from aiqa.models import Base
from aiqa.ops import (
    HealthStatus,
    create_dashboard_service,
    create_feedback_service,
    create_monitoring_service,
    create_review_service,
)
from aiqa.utils.database import get_session_factory, init_database


@pytest.fixture
def file_database(tmp_path):
    db_module._engine = None
    db_module._session_factory = None

    init_database(f"sqlite:///{tmp_path / 'aiqa.db'}")
    yield get_session_factory()

    db_module._engine.dispose()
    db_module._engine = None
    db_module._session_factory = None


def test_healthy_system_reports_excellent(file_database):
    monitoring = create_monitoring_service()
    feedback = create_feedback_service()
    review = create_review_service()
    dashboard = create_dashboard_service(max_workers=3)

    start = datetime(2025, 11, 1)
    for day in range(3):
        monitoring.record_metrics(
            generation_success_rate=0.99,
            average_confidence_score=0.95,
            parent_satisfaction_rating=4.8,
            content_flag_rate=0.01,
            human_review_rate=0.03,
            average_response_time_ms=900,
            total_generations=100,
            timestamp=start + timedelta(days=day),
        )
    for parent in ("p-1", "p-2"):
        feedback.submit_feedback("q-1", parent, 4.8, 4.8, 4.8, 4.8)
    for i in range(5):
        review.queue_for_review(f"q-{i}", "text", "answer", {"overall_quality": 0.9})

    health = dashboard.get_health_score()

    assert health.status == HealthStatus.EXCELLENT
    assert health.overall_score > 90

    overview = dashboard.get_overall_quality_metrics()
    assert overview.ai_performance.total_generations == 300
    assert overview.parent_feedback.total_feedback == 2
    assert overview.review_queue.low_count == 5
    assert overview.alerts.active_alerts_count == 0

    trend = dashboard.get_quality_trends(start, start + timedelta(days=1))
    assert len(trend) == 2


def test_degraded_system_raises_alerts_and_urgent_reviews(file_database):
    monitoring = create_monitoring_service()
    feedback = create_feedback_service()
    review = create_review_service()
    dashboard = create_dashboard_service()

    monitoring.record_metrics(
        generation_success_rate=0.7,
        average_confidence_score=0.6,
        parent_satisfaction_rating=2.5,
        content_flag_rate=0.12,
        human_review_rate=0.3,
        average_response_time_ms=4000,
        total_generations=50,
    )
    monitoring.check_alert_thresholds(
        average_confidence_score=0.6,
        parent_satisfaction_rating=2.5,
        content_flag_rate=0.12,
        human_review_rate=0.3,
    )
    feedback.submit_feedback("q-1", "p-1", 2.0, 2.0, 3.0, 2.0)
    urgent = review.queue_for_review(
        "q-1", "text", "answer",
        {"overall_quality": 0.9, "flags": [{"severity": "CRITICAL", "type": "safety"}]},
    )

    summary = dashboard.get_alerts_summary()
    assert summary.total_alerts == 4
    assert summary.by_severity == {"CRITICAL": 0, "HIGH": 2, "MEDIUM": 2, "LOW": 0}

    health = dashboard.get_health_score()
    assert health.status == HealthStatus.CRITICAL
    assert health.components.review_backlog.score == pytest.approx(97.0)

    review.approve_review(urgent.id, "Reviewed")
    for alert in monitoring.get_active_alerts():
        monitoring.resolve_alert(alert.id, "Handled")

    overview = dashboard.get_overall_quality_metrics()
    assert overview.review_queue.total_pending == 0
    assert overview.alerts.active_alerts_count == 0
    assert overview.parent_feedback.flagged_count == 1


def test_dashboard_fails_when_store_is_gone(file_database):
    dashboard = create_dashboard_service()
    Base.metadata.drop_all(bind=db_module._engine)

    with pytest.raises(UpstreamUnavailableError):
        dashboard.get_overall_quality_metrics()
