"""
Operations Module

Quality-assurance services for AI-generated questions.

Components:
- AIMonitoringService: Metrics snapshots and threshold alerts
- ParentFeedbackService: Parent ratings, satisfaction scoring, auto-flagging
- HumanReviewService: Priority review queue and review workflow
- QualityDashboardService: Composite quality view and weighted health score

Usage:
    from aiqa.ops import create_dashboard_service, create_review_service
    from aiqa.utils.database import init_database

    init_database("sqlite:///aiqa.db")

    review_service = create_review_service()
    pending = review_service.get_pending_reviews()

    dashboard = create_dashboard_service()
    health = dashboard.get_health_score()
"""

from aiqa.ops.monitoring_service import (
    AIMonitoringService,
    DashboardStats,
    create_monitoring_service,
    ALERT_RULES,
)
from aiqa.ops.feedback_service import (
    ParentFeedbackService,
    FeedbackStats,
    DimensionAverages,
    create_feedback_service,
)
from aiqa.ops.review_service import (
    HumanReviewService,
    ReviewStats,
    calculate_review_priority,
    create_review_service,
)
from aiqa.ops.dashboard_service import (
    QualityDashboardService,
    MonitoringReader,
    FeedbackReader,
    ReviewReader,
    create_dashboard_service,
)
from aiqa.ops.dashboard_models import (
    HealthScore,
    HealthStatus,
    OverallQualityMetrics,
    AlertsSummary,
)
from aiqa.ops.scoring import compute_health_score, HEALTH_WEIGHTS

__all__ = [
    "AIMonitoringService",
    "DashboardStats",
    "create_monitoring_service",
    "ALERT_RULES",
    "ParentFeedbackService",
    "FeedbackStats",
    "DimensionAverages",
    "create_feedback_service",
    "HumanReviewService",
    "ReviewStats",
    "calculate_review_priority",
    "create_review_service",
    "QualityDashboardService",
    "MonitoringReader",
    "FeedbackReader",
    "ReviewReader",
    "create_dashboard_service",
    "HealthScore",
    "HealthStatus",
    "OverallQualityMetrics",
    "AlertsSummary",
    "compute_health_score",
    "HEALTH_WEIGHTS",
]
