"""
Tests for AI metrics recording and threshold alerting.

Coverage:
- Snapshot recording and trend queries (closed interval, ascending)
- One alert per breached threshold, in rule order, no deduplication
- Active alerts newest first and one-time resolution
- Dashboard averages with and without data
"""

from datetime import timedelta

import pytest

from aiqa.errors import InvalidStateError, NotFoundError
from aiqa.models.metrics import AlertSeverity, AlertType


HEALTHY_VALUES = dict(
    average_confidence_score=0.85,
    parent_satisfaction_rating=4.5,
    content_flag_rate=0.02,
    human_review_rate=0.05,
)


class TestRecordMetrics:
    """Snapshot persistence."""

    def test_record_metrics_assigns_id_and_timestamp(self, monitoring_service, healthy_metrics):
        snapshot = monitoring_service.record_metrics(**healthy_metrics)

        assert snapshot.id is not None
        assert snapshot.timestamp is not None
        assert snapshot.average_confidence_score == 0.85
        assert snapshot.total_generations == 1000

    def test_record_metrics_does_not_raise_alerts(self, monitoring_service, healthy_metrics):
        bad = dict(healthy_metrics, average_confidence_score=0.1)
        monitoring_service.record_metrics(**bad)

        assert monitoring_service.get_active_alerts() == []

    def test_record_metrics_honours_explicit_timestamp(
        self, monitoring_service, healthy_metrics, base_time
    ):
        snapshot = monitoring_service.record_metrics(**healthy_metrics, timestamp=base_time)
        assert snapshot.timestamp == base_time


class TestCheckAlertThresholds:
    """Threshold rules."""

    def test_no_breach_creates_no_alerts(self, monitoring_service):
        assert monitoring_service.check_alert_thresholds(**HEALTHY_VALUES) == []

    def test_low_confidence_creates_single_high_alert(self, monitoring_service):
        alerts = monitoring_service.check_alert_thresholds(
            **dict(HEALTHY_VALUES, average_confidence_score=0.75)
        )

        assert len(alerts) == 1
        assert alerts[0].alert_type == AlertType.AI_CONFIDENCE_LOW
        assert alerts[0].severity == AlertSeverity.HIGH
        assert "0.75" in alerts[0].message
        assert "0.8" in alerts[0].message
        assert alerts[0].is_resolved is False

    @pytest.mark.parametrize("field,value,alert_type,severity", [
        ("average_confidence_score", 0.79, AlertType.AI_CONFIDENCE_LOW, AlertSeverity.HIGH),
        ("parent_satisfaction_rating", 3.9, AlertType.PARENT_SATISFACTION_LOW, AlertSeverity.MEDIUM),
        ("content_flag_rate", 0.06, AlertType.CONTENT_FLAG_RATE_HIGH, AlertSeverity.HIGH),
        ("human_review_rate", 0.16, AlertType.HUMAN_REVIEW_RATE_HIGH, AlertSeverity.MEDIUM),
    ])
    def test_each_rule_triggers_independently(
        self, monitoring_service, field, value, alert_type, severity
    ):
        alerts = monitoring_service.check_alert_thresholds(**dict(HEALTHY_VALUES, **{field: value}))

        assert [(a.alert_type, a.severity) for a in alerts] == [(alert_type, severity)]

    @pytest.mark.parametrize("field,value", [
        ("average_confidence_score", 0.8),
        ("parent_satisfaction_rating", 4.0),
        ("content_flag_rate", 0.05),
        ("human_review_rate", 0.15),
    ])
    def test_values_at_threshold_do_not_alert(self, monitoring_service, field, value):
        alerts = monitoring_service.check_alert_thresholds(**dict(HEALTHY_VALUES, **{field: value}))
        assert alerts == []

    def test_all_breaches_create_four_alerts_in_rule_order(self, monitoring_service):
        alerts = monitoring_service.check_alert_thresholds(
            average_confidence_score=0.5,
            parent_satisfaction_rating=2.0,
            content_flag_rate=0.2,
            human_review_rate=0.5,
        )

        assert [a.alert_type for a in alerts] == [
            AlertType.AI_CONFIDENCE_LOW,
            AlertType.PARENT_SATISFACTION_LOW,
            AlertType.CONTENT_FLAG_RATE_HIGH,
            AlertType.HUMAN_REVIEW_RATE_HIGH,
        ]
        assert len(monitoring_service.get_active_alerts()) == 4

    def test_alert_keeps_triggering_values(self, monitoring_service):
        values = dict(HEALTHY_VALUES, content_flag_rate=0.09)
        alert = monitoring_service.check_alert_thresholds(**values)[0]

        assert alert.metrics == values

    def test_repeated_checks_are_not_deduplicated(self, monitoring_service):
        values = dict(HEALTHY_VALUES, average_confidence_score=0.6)

        monitoring_service.check_alert_thresholds(**values)
        monitoring_service.check_alert_thresholds(**values)
        monitoring_service.check_alert_thresholds(**values)

        assert len(monitoring_service.get_active_alerts()) == 3


class TestMetricsTrend:
    """Closed-interval trend queries."""

    def test_trend_is_inclusive_and_ascending(self, monitoring_service, healthy_metrics, base_time):
        times = [base_time + timedelta(days=d) for d in (3, 0, 1, 5, 2)]
        for t in times:
            monitoring_service.record_metrics(**healthy_metrics, timestamp=t)

        trend = monitoring_service.get_metrics_trend(base_time, base_time + timedelta(days=3))

        assert [s.timestamp for s in trend] == [
            base_time + timedelta(days=d) for d in (0, 1, 2, 3)
        ]

    def test_trend_outside_range_is_empty(self, monitoring_service, healthy_metrics, base_time):
        monitoring_service.record_metrics(**healthy_metrics, timestamp=base_time)

        later = base_time + timedelta(days=10)
        assert monitoring_service.get_metrics_trend(later, later + timedelta(days=1)) == []


class TestAlertLifecycle:
    """Active alerts and resolution."""

    def test_active_alerts_newest_first(self, monitoring_service, base_time):
        first = monitoring_service.check_alert_thresholds(
            **dict(HEALTHY_VALUES, average_confidence_score=0.5)
        )[0]
        second = monitoring_service.check_alert_thresholds(
            **dict(HEALTHY_VALUES, human_review_rate=0.5)
        )[0]
        monitoring_service.alert_repo.update_by_id(first.id, created_at=base_time)
        monitoring_service.alert_repo.update_by_id(
            second.id, created_at=base_time + timedelta(hours=1)
        )

        active = monitoring_service.get_active_alerts()

        assert [a.id for a in active] == [second.id, first.id]

    def test_resolve_alert_sets_fields_and_removes_from_active(self, monitoring_service):
        alert = monitoring_service.check_alert_thresholds(
            **dict(HEALTHY_VALUES, average_confidence_score=0.5)
        )[0]

        resolved = monitoring_service.resolve_alert(alert.id, "Model retrained")

        assert resolved.is_resolved is True
        assert resolved.resolution_notes == "Model retrained"
        assert resolved.resolved_at is not None
        assert monitoring_service.get_active_alerts() == []

    def test_resolve_unknown_alert_raises_not_found(self, monitoring_service):
        with pytest.raises(NotFoundError):
            monitoring_service.resolve_alert("missing-id", "notes")

    def test_resolve_twice_raises_invalid_state(self, monitoring_service):
        alert = monitoring_service.check_alert_thresholds(
            **dict(HEALTHY_VALUES, average_confidence_score=0.5)
        )[0]
        monitoring_service.resolve_alert(alert.id, "first")

        with pytest.raises(InvalidStateError):
            monitoring_service.resolve_alert(alert.id, "second")

        stored = monitoring_service.alert_repo.find_by_id(alert.id)
        assert stored.resolution_notes == "first"


class TestDashboardStats:
    """Averages over all snapshots."""

    def test_empty_store_yields_nulls_and_zero_total(self, monitoring_service):
        stats = monitoring_service.calculate_dashboard_stats()

        assert stats.average_confidence is None
        assert stats.average_satisfaction is None
        assert stats.average_flag_rate is None
        assert stats.average_review_rate is None
        assert stats.total_generations == 0

    def test_averages_and_total(self, monitoring_service, healthy_metrics):
        monitoring_service.record_metrics(**dict(
            healthy_metrics, average_confidence_score=0.8, parent_satisfaction_rating=4.0,
            content_flag_rate=0.02, human_review_rate=0.1, total_generations=100,
        ))
        monitoring_service.record_metrics(**dict(
            healthy_metrics, average_confidence_score=0.9, parent_satisfaction_rating=5.0,
            content_flag_rate=0.04, human_review_rate=0.2, total_generations=300,
        ))

        stats = monitoring_service.calculate_dashboard_stats()

        assert stats.average_confidence == pytest.approx(0.85)
        assert stats.average_satisfaction == pytest.approx(4.5)
        assert stats.average_flag_rate == pytest.approx(0.03)
        assert stats.average_review_rate == pytest.approx(0.15)
        assert stats.total_generations == 400

    def test_zero_averages_are_not_treated_as_missing(self, monitoring_service, healthy_metrics):
        monitoring_service.record_metrics(**dict(healthy_metrics, content_flag_rate=0.0))

        stats = monitoring_service.calculate_dashboard_stats()

        assert stats.average_flag_rate == 0.0
