"""
AI Metrics and Alert Models

MetricsSnapshot records point-in-time generation quality; Alert records a
threshold breach detected from those values.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, Float, Index, Integer, String, Text

from aiqa.models.base import Base


class AlertType(str, enum.Enum):
    """Categories of quality degradation that raise alerts."""
    AI_CONFIDENCE_LOW = "AI_CONFIDENCE_LOW"
    PARENT_SATISFACTION_LOW = "PARENT_SATISFACTION_LOW"
    CONTENT_FLAG_RATE_HIGH = "CONTENT_FLAG_RATE_HIGH"
    HUMAN_REVIEW_RATE_HIGH = "HUMAN_REVIEW_RATE_HIGH"
    RESPONSE_TIME_HIGH = "RESPONSE_TIME_HIGH"
    GENERATION_FAILURE_HIGH = "GENERATION_FAILURE_HIGH"


class AlertSeverity(str, enum.Enum):
    """Alert severity levels for prioritization and response."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class MetricsSnapshot(Base):
    """
    Point-in-time snapshot of AI generation quality.

    Immutable once recorded; retained for trend queries.
    """

    __tablename__ = "ai_metrics"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    generation_success_rate = Column(Float, nullable=False, comment="0.0-1.0")
    average_confidence_score = Column(Float, nullable=False, comment="0.0-1.0")
    parent_satisfaction_rating = Column(Float, nullable=False, comment="1.0-5.0")
    content_flag_rate = Column(Float, nullable=False, comment="0.0-1.0")
    human_review_rate = Column(Float, nullable=False, comment="0.0-1.0")
    average_response_time_ms = Column(Integer, nullable=False)
    total_generations = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    def __repr__(self):
        return (
            f"<MetricsSnapshot(id={self.id}, "
            f"confidence={self.average_confidence_score}, "
            f"timestamp={self.timestamp})>"
        )

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "generation_success_rate": self.generation_success_rate,
            "average_confidence_score": self.average_confidence_score,
            "parent_satisfaction_rating": self.parent_satisfaction_rating,
            "content_flag_rate": self.content_flag_rate,
            "human_review_rate": self.human_review_rate,
            "average_response_time_ms": self.average_response_time_ms,
            "total_generations": self.total_generations,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


class Alert(Base):
    """
    Detected threshold breach.

    Resolved exactly once (is_resolved, resolution_notes, resolved_at); never deleted.
    """

    __tablename__ = "ai_alerts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    alert_type = Column(Enum(AlertType), nullable=False)
    severity = Column(Enum(AlertSeverity), nullable=False)
    message = Column(Text, nullable=False)
    metrics = Column(JSON, nullable=False, comment="Values that triggered the alert")

    is_resolved = Column(Boolean, nullable=False, default=False)
    resolution_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    resolved_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_alert_resolved_created", "is_resolved", "created_at"),
        Index("idx_alert_type", "alert_type"),
    )

    def __repr__(self):
        return (
            f"<Alert(id={self.id}, type={self.alert_type}, "
            f"severity={self.severity}, resolved={self.is_resolved})>"
        )

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "alert_type": self.alert_type.value,
            "severity": self.severity.value,
            "message": self.message,
            "metrics": self.metrics,
            "is_resolved": self.is_resolved,
            "resolution_notes": self.resolution_notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "resolved_at": self.resolved_at.isoformat() if self.resolved_at else None,
        }
