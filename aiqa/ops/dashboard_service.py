"""
Quality Dashboard Aggregation

Combines monitoring, parent feedback and review queue state into one
composite view and a weighted health score.

The service keeps no copy of leaf data: every call re-reads its sources in
parallel and recomputes. If any parallel read fails the whole call fails;
no partial dashboard is produced.
"""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from aiqa.config import DEFAULT_DASHBOARD_WORKERS, load_settings
from aiqa.models.metrics import Alert, MetricsSnapshot
from aiqa.ops.dashboard_models import (
    AIPerformanceSection,
    AlertsSection,
    AlertsSummary,
    AlertSummaryEntry,
    HealthScore,
    OverallQualityMetrics,
    ParentFeedbackSection,
    ReviewQueueSection,
    empty_severity_counts,
)
from aiqa.ops.feedback_service import FeedbackStats, create_feedback_service
from aiqa.ops.monitoring_service import DashboardStats, create_monitoring_service
from aiqa.ops.review_service import ReviewStats, create_review_service
from aiqa.ops.scoring import compute_health_score
from aiqa.utils.database import SessionFactory
from aiqa.utils.logging_config import get_logger
from aiqa.utils.tracing import add_span_attributes, trace_operation

logger = get_logger(__name__, component="dashboard")


class MonitoringReader(Protocol):
    """Read side of the monitoring service used by the dashboard."""

    def calculate_dashboard_stats(self) -> DashboardStats: ...

    def get_active_alerts(self) -> List[Alert]: ...

    def get_metrics_trend(self, start: datetime, end: datetime) -> List[MetricsSnapshot]: ...


class FeedbackReader(Protocol):
    """Read side of the parent feedback service used by the dashboard."""

    def get_parent_feedback_stats(self) -> FeedbackStats: ...


class ReviewReader(Protocol):
    """Read side of the review service used by the dashboard."""

    def get_review_stats(self) -> ReviewStats: ...


def count_by_severity(alerts: Sequence[Alert]) -> Dict[str, int]:
    """Bucket alerts by severity; severities with no alerts count 0."""
    counts = empty_severity_counts()
    for alert in alerts:
        severity = getattr(alert.severity, "value", alert.severity)
        counts[severity] = counts.get(severity, 0) + 1
    return counts


class QualityDashboardService:
    """Aggregates quality signals across monitoring, feedback and review."""

    def __init__(
        self,
        monitoring: MonitoringReader,
        feedback: FeedbackReader,
        review: ReviewReader,
        max_workers: int = DEFAULT_DASHBOARD_WORKERS
    ):
        """
        Initialize dashboard service.

        Args:
            monitoring: Monitoring reader (stats, active alerts, trends)
            feedback: Parent feedback reader
            review: Review queue reader
            max_workers: Upper bound on parallel reads per call
        """
        self.monitoring = monitoring
        self.feedback = feedback
        self.review = review
        self.max_workers = max(1, max_workers)

    @trace_operation("dashboard.overall_quality_metrics")
    def get_overall_quality_metrics(self) -> OverallQualityMetrics:
        """
        Read all sources in parallel and assemble the composite view.

        Returns:
            OverallQualityMetrics with ai_performance, parent_feedback,
            review_queue and alerts sections
        """
        results = self._fan_out({
            "monitoring_stats": self.monitoring.calculate_dashboard_stats,
            "feedback_stats": self.feedback.get_parent_feedback_stats,
            "review_stats": self.review.get_review_stats,
            "active_alerts": self.monitoring.get_active_alerts,
        })

        monitoring_stats: DashboardStats = results["monitoring_stats"]
        feedback_stats: FeedbackStats = results["feedback_stats"]
        review_stats: ReviewStats = results["review_stats"]
        active_alerts: List[Alert] = results["active_alerts"]

        return OverallQualityMetrics(
            ai_performance=AIPerformanceSection(
                average_confidence=monitoring_stats.average_confidence,
                total_generations=monitoring_stats.total_generations,
                average_flag_rate=monitoring_stats.average_flag_rate,
                average_review_rate=monitoring_stats.average_review_rate,
            ),
            parent_feedback=ParentFeedbackSection(
                total_feedback=feedback_stats.total_feedback,
                average_satisfaction=feedback_stats.average_satisfaction,
                flagged_count=feedback_stats.flagged_count,
                flag_rate=feedback_stats.flag_rate,
            ),
            review_queue=ReviewQueueSection(
                total_pending=review_stats.total_pending,
                urgent_count=review_stats.urgent_count,
                high_count=review_stats.high_count,
                medium_count=review_stats.medium_count,
                low_count=review_stats.low_count,
            ),
            alerts=AlertsSection(
                active_alerts_count=len(active_alerts),
                by_severity=count_by_severity(active_alerts),
            ),
        )

    def get_quality_trends(self, start: datetime, end: datetime) -> List[MetricsSnapshot]:
        """Metrics snapshots for the period, oldest first."""
        return self.monitoring.get_metrics_trend(start, end)

    @trace_operation("dashboard.health_score")
    def get_health_score(self) -> HealthScore:
        """
        Compute the weighted health score from current stats.

        Returns:
            HealthScore with overall score, status and component breakdown
        """
        results = self._fan_out({
            "monitoring_stats": self.monitoring.calculate_dashboard_stats,
            "feedback_stats": self.feedback.get_parent_feedback_stats,
            "review_stats": self.review.get_review_stats,
        })

        monitoring_stats: DashboardStats = results["monitoring_stats"]
        feedback_stats: FeedbackStats = results["feedback_stats"]
        review_stats: ReviewStats = results["review_stats"]

        health = compute_health_score(
            average_confidence=monitoring_stats.average_confidence,
            average_satisfaction=feedback_stats.average_satisfaction,
            flag_rate=monitoring_stats.average_flag_rate,
            total_pending=review_stats.total_pending,
            urgent_count=review_stats.urgent_count,
        )

        add_span_attributes(
            health_score=health.overall_score,
            health_status=health.status.value
        )
        logger.info(
            "health_score_computed",
            overall_score=health.overall_score,
            status=health.status.value
        )
        return health

    @trace_operation("dashboard.alerts_summary")
    def get_alerts_summary(self) -> AlertsSummary:
        """Active alerts with per-severity counts."""
        active_alerts = self.monitoring.get_active_alerts()

        return AlertsSummary(
            total_alerts=len(active_alerts),
            by_severity=count_by_severity(active_alerts),
            alerts=[
                AlertSummaryEntry(
                    id=alert.id,
                    alert_type=alert.alert_type,
                    severity=alert.severity,
                    created_at=alert.created_at,
                )
                for alert in active_alerts
            ],
        )

    def _fan_out(self, calls: Dict[str, Callable[[], Any]]) -> Dict[str, Any]:
        """
        Run independent reads in parallel and join them.

        Raises the first branch failure as soon as it occurs; branches that
        have not started are cancelled.
        """
        executor = ThreadPoolExecutor(
            max_workers=min(self.max_workers, len(calls)),
            thread_name_prefix="aiqa-dashboard",
        )
        try:
            futures = {name: executor.submit(call) for name, call in calls.items()}
            done, _ = wait(futures.values(), return_when=FIRST_EXCEPTION)

            for name, future in futures.items():
                if future in done and future.exception() is not None:
                    error = future.exception()
                    logger.error(
                        "dashboard_read_failed",
                        branch=name,
                        error=str(error),
                        error_type=type(error).__name__
                    )
                    raise error

            return {name: future.result() for name, future in futures.items()}
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


def create_dashboard_service(
    session_factory: Optional[SessionFactory] = None,
    max_workers: Optional[int] = None
) -> QualityDashboardService:
    """
    Factory function to create QualityDashboardService over the database-backed leaves.

    Args:
        session_factory: Session factory (default: global factory from init_database)
        max_workers: Upper bound on parallel reads per call
            (default: AIQA_DASHBOARD_WORKERS)

    Returns:
        QualityDashboardService instance
    """
    if max_workers is None:
        max_workers = load_settings().dashboard_workers

    return QualityDashboardService(
        monitoring=create_monitoring_service(session_factory),
        feedback=create_feedback_service(session_factory),
        review=create_review_service(session_factory),
        max_workers=max_workers,
    )
