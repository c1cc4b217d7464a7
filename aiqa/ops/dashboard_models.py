"""Typed result models for the quality dashboard."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from aiqa.models.metrics import AlertSeverity, AlertType


class HealthStatus(str, Enum):
    """Health status categories for overall system quality."""

    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


def empty_severity_counts() -> Dict[str, int]:
    """Severity buckets with every severity present at 0."""
    return {severity.value: 0 for severity in (
        AlertSeverity.CRITICAL, AlertSeverity.HIGH, AlertSeverity.MEDIUM, AlertSeverity.LOW
    )}


class AIPerformanceSection(BaseModel):
    """Averages over recorded metrics snapshots."""

    average_confidence: Optional[float] = None
    total_generations: int = 0
    average_flag_rate: Optional[float] = None
    average_review_rate: Optional[float] = None

    model_config = ConfigDict(extra="forbid")


class ParentFeedbackSection(BaseModel):
    """Global parent feedback statistics."""

    total_feedback: int = 0
    average_satisfaction: Optional[float] = None
    flagged_count: int = 0
    flag_rate: float = 0.0

    model_config = ConfigDict(extra="forbid")


class ReviewQueueSection(BaseModel):
    """Pending review counts by priority."""

    total_pending: int = 0
    urgent_count: int = 0
    high_count: int = 0
    medium_count: int = 0
    low_count: int = 0

    model_config = ConfigDict(extra="forbid")


class AlertsSection(BaseModel):
    """Active alert count and per-severity buckets."""

    active_alerts_count: int = 0
    by_severity: Dict[str, int] = Field(default_factory=empty_severity_counts)

    model_config = ConfigDict(extra="forbid")


class OverallQualityMetrics(BaseModel):
    """Composite view across monitoring, feedback, review and alerts."""

    ai_performance: AIPerformanceSection
    parent_feedback: ParentFeedbackSection
    review_queue: ReviewQueueSection
    alerts: AlertsSection

    model_config = ConfigDict(extra="forbid")


class HealthComponent(BaseModel):
    """One sub-score paired with its weight."""

    score: float = Field(..., description="Sub-score on a 0-100 scale")
    weight: float = Field(..., ge=0.0, le=1.0)

    model_config = ConfigDict(extra="forbid")


class HealthComponents(BaseModel):
    ai_confidence: HealthComponent
    parent_satisfaction: HealthComponent
    content_quality: HealthComponent
    review_backlog: HealthComponent

    model_config = ConfigDict(extra="forbid")


class HealthScore(BaseModel):
    """Weighted health score with status and per-component breakdown."""

    overall_score: float
    status: HealthStatus
    components: HealthComponents

    model_config = ConfigDict(extra="forbid")


class AlertSummaryEntry(BaseModel):
    id: str
    alert_type: AlertType
    severity: AlertSeverity
    created_at: datetime

    model_config = ConfigDict(extra="forbid")


class AlertsSummary(BaseModel):
    """Active alerts grouped by severity."""

    total_alerts: int = 0
    by_severity: Dict[str, int] = Field(default_factory=empty_severity_counts)
    alerts: List[AlertSummaryEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")
