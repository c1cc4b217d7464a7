"""
AI Monitoring and Alerting

Records performance snapshots for generated content and raises alerts when
a snapshot breaches a quality threshold:
- Average confidence below 0.80 (HIGH)
- Parent satisfaction below 4.0 (MEDIUM)
- Content flag rate above 0.05 (HIGH)
- Human review rate above 0.15 (MEDIUM)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from aiqa.models.metrics import Alert, AlertSeverity, AlertType, MetricsSnapshot
from aiqa.repositories.alert_repository import AlertRepository
from aiqa.repositories.metrics_repository import MetricsRepository
from aiqa.utils.database import SessionFactory, get_session_factory
from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="monitoring")

# Thresholds for raising alerts
MIN_CONFIDENCE_SCORE = 0.8
MIN_PARENT_SATISFACTION = 4.0
MAX_CONTENT_FLAG_RATE = 0.05
MAX_HUMAN_REVIEW_RATE = 0.15


@dataclass(frozen=True)
class ThresholdRule:
    """One alerting rule over a single metric."""
    metric: str
    alert_type: AlertType
    severity: AlertSeverity
    threshold: float
    breach_when_above: bool
    label: str

    def is_breached(self, value: float) -> bool:
        if self.breach_when_above:
            return value > self.threshold
        return value < self.threshold

    def message(self, value: float) -> str:
        direction = "increased" if self.breach_when_above else "dropped"
        return f"{self.label} {direction} to {value} (threshold: {self.threshold})"


# Evaluated in this order; one alert per breached rule
ALERT_RULES = (
    ThresholdRule(
        metric="average_confidence_score",
        alert_type=AlertType.AI_CONFIDENCE_LOW,
        severity=AlertSeverity.HIGH,
        threshold=MIN_CONFIDENCE_SCORE,
        breach_when_above=False,
        label="Average AI confidence score",
    ),
    ThresholdRule(
        metric="parent_satisfaction_rating",
        alert_type=AlertType.PARENT_SATISFACTION_LOW,
        severity=AlertSeverity.MEDIUM,
        threshold=MIN_PARENT_SATISFACTION,
        breach_when_above=False,
        label="Parent satisfaction",
    ),
    ThresholdRule(
        metric="content_flag_rate",
        alert_type=AlertType.CONTENT_FLAG_RATE_HIGH,
        severity=AlertSeverity.HIGH,
        threshold=MAX_CONTENT_FLAG_RATE,
        breach_when_above=True,
        label="Content flag rate",
    ),
    ThresholdRule(
        metric="human_review_rate",
        alert_type=AlertType.HUMAN_REVIEW_RATE_HIGH,
        severity=AlertSeverity.MEDIUM,
        threshold=MAX_HUMAN_REVIEW_RATE,
        breach_when_above=True,
        label="Human review rate",
    ),
)


@dataclass
class DashboardStats:
    """Averages and totals across all recorded snapshots."""
    average_confidence: Optional[float]
    average_satisfaction: Optional[float]
    average_flag_rate: Optional[float]
    average_review_rate: Optional[float]
    total_generations: int


class AIMonitoringService:
    """
    Tracks AI performance indicators and manages alerts.

    Alerting is explicit: recording a snapshot never raises alerts on its own.
    """

    def __init__(self, session_factory: SessionFactory):
        """
        Initialize monitoring service.

        Args:
            session_factory: Callable returning a new SQLAlchemy Session
        """
        self.metrics_repo = MetricsRepository(session_factory)
        self.alert_repo = AlertRepository(session_factory)

    def record_metrics(
        self,
        generation_success_rate: float,
        average_confidence_score: float,
        parent_satisfaction_rating: float,
        content_flag_rate: float,
        human_review_rate: float,
        average_response_time_ms: int,
        total_generations: int,
        timestamp: Optional[datetime] = None
    ) -> MetricsSnapshot:
        """
        Record a performance snapshot verbatim.

        Args:
            generation_success_rate: Successful generations / attempts (0-1)
            average_confidence_score: Mean model confidence (0-1)
            parent_satisfaction_rating: Mean parent rating (1-5)
            content_flag_rate: Share of content flagged (0-1)
            human_review_rate: Share of content sent to human review (0-1)
            average_response_time_ms: Mean generation latency in ms
            total_generations: Generations in this snapshot period
            timestamp: Snapshot time (default: now)

        Returns:
            Stored MetricsSnapshot with id and timestamp assigned
        """
        fields: Dict[str, Any] = dict(
            generation_success_rate=generation_success_rate,
            average_confidence_score=average_confidence_score,
            parent_satisfaction_rating=parent_satisfaction_rating,
            content_flag_rate=content_flag_rate,
            human_review_rate=human_review_rate,
            average_response_time_ms=average_response_time_ms,
            total_generations=total_generations,
        )
        if timestamp is not None:
            fields["timestamp"] = timestamp

        snapshot = self.metrics_repo.create(**fields)

        logger.info(
            "metrics_recorded",
            snapshot_id=snapshot.id,
            confidence=average_confidence_score,
            satisfaction=parent_satisfaction_rating,
            total_generations=total_generations
        )
        return snapshot

    def check_alert_thresholds(
        self,
        average_confidence_score: float,
        parent_satisfaction_rating: float,
        content_flag_rate: float,
        human_review_rate: float
    ) -> List[Alert]:
        """
        Create one alert per breached threshold.

        No deduplication or cooldown: every call with bad values raises new
        alerts. Schedule this once per evaluation cycle, not per request.
        Each alert is persisted on its own; a failure part-way leaves the
        earlier alerts stored.

        Returns:
            Created alerts in rule order (empty if nothing breached)
        """
        values = {
            "average_confidence_score": average_confidence_score,
            "parent_satisfaction_rating": parent_satisfaction_rating,
            "content_flag_rate": content_flag_rate,
            "human_review_rate": human_review_rate,
        }

        alerts: List[Alert] = []
        for rule in ALERT_RULES:
            value = values[rule.metric]
            if not rule.is_breached(value):
                continue

            alert = self.alert_repo.create(
                alert_type=rule.alert_type,
                severity=rule.severity,
                message=rule.message(value),
                metrics=dict(values),
                is_resolved=False,
            )
            alerts.append(alert)

            logger.warning(
                "alert_created",
                alert_id=alert.id,
                alert_type=rule.alert_type.value,
                severity=rule.severity.value,
                value=value,
                threshold=rule.threshold
            )

        return alerts

    def get_metrics_trend(self, start: datetime, end: datetime) -> List[MetricsSnapshot]:
        """Snapshots with start <= timestamp <= end, oldest first."""
        return self.metrics_repo.get_between(start, end)

    def get_active_alerts(self) -> List[Alert]:
        """Unresolved alerts, newest first."""
        return self.alert_repo.get_active()

    def resolve_alert(self, alert_id: str, resolution_notes: str) -> Alert:
        """
        Mark an alert resolved.

        Raises:
            NotFoundError: Unknown alert ID
            InvalidStateError: Alert already resolved
        """
        return self.alert_repo.resolve(alert_id, resolution_notes)

    def calculate_dashboard_stats(self) -> DashboardStats:
        """
        Average the headline metrics over all snapshots.

        Returns:
            DashboardStats; averages are None and total_generations 0 when
            nothing has been recorded
        """
        aggregates = self.metrics_repo.get_aggregates()

        return DashboardStats(
            average_confidence=_as_float(aggregates["avg_confidence"]),
            average_satisfaction=_as_float(aggregates["avg_satisfaction"]),
            average_flag_rate=_as_float(aggregates["avg_flag_rate"]),
            average_review_rate=_as_float(aggregates["avg_review_rate"]),
            total_generations=int(aggregates["total_generations"] or 0),
        )


def _as_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def create_monitoring_service(
    session_factory: Optional[SessionFactory] = None
) -> AIMonitoringService:
    """
    Factory function to create AIMonitoringService.

    Args:
        session_factory: Session factory (default: global factory from init_database)

    Returns:
        AIMonitoringService instance
    """
    return AIMonitoringService(session_factory or get_session_factory())
