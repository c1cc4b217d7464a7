"""
AIQA Data Models

SQLAlchemy models for MetricsSnapshot, Alert, FeedbackEntry and ReviewItem,
plus the pydantic QualityAssessment input contract.
"""

from aiqa.models.base import Base
from aiqa.models.metrics import Alert, AlertSeverity, AlertType, MetricsSnapshot
from aiqa.models.feedback import FeedbackEntry
from aiqa.models.review_queue import PRIORITY_RANK, ReviewItem, ReviewPriority, ReviewStatus
from aiqa.models.quality_assessment import QualityAssessment, QualityFlag

__all__ = [
    "Base",
    "MetricsSnapshot",
    "Alert",
    "AlertType",
    "AlertSeverity",
    "FeedbackEntry",
    "ReviewItem",
    "ReviewPriority",
    "ReviewStatus",
    "PRIORITY_RANK",
    "QualityAssessment",
    "QualityFlag",
]
