"""
AIQA Repository Module

Database access layer with repository pattern for clean separation of concerns.
"""

from aiqa.repositories.base import RecordRepository
from aiqa.repositories.metrics_repository import MetricsRepository
from aiqa.repositories.alert_repository import AlertRepository
from aiqa.repositories.feedback_repository import FeedbackRepository
from aiqa.repositories.review_queue_repository import ReviewQueueRepository

__all__ = [
    "RecordRepository",
    "MetricsRepository",
    "AlertRepository",
    "FeedbackRepository",
    "ReviewQueueRepository",
]
