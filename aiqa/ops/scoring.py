"""
Health Score Curves

Maps raw quality signals onto 0-100 sub-scores and combines them into a
weighted health score with a four-tier status.

Each curve is an ordered table of segments evaluated top-down; the first
segment whose bound admits the value produces the score. A segment scores
``base + (value - anchor) * slope``.

Sub-score bands (per curve):
    Excellent >= 90, Good 75-89, Warning 50-74, Critical < 50
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from aiqa.ops.dashboard_models import HealthComponent, HealthComponents, HealthScore, HealthStatus


@dataclass(frozen=True)
class Segment:
    """One linear piece of a curve."""
    bound: float
    anchor: float
    base: float
    slope: float

    def score(self, value: float) -> float:
        return self.base + (value - self.anchor) * self.slope


@dataclass(frozen=True)
class PiecewiseCurve:
    """
    Ordered segments evaluated top-down.

    Attributes:
        segments: Segments in evaluation order; the last must admit everything
        lower_bounds: If True a segment applies when value >= bound,
            otherwise when value <= bound
        floor: Optional minimum score
        ceiling: Optional maximum score
    """
    segments: Tuple[Segment, ...]
    lower_bounds: bool = False
    floor: Optional[float] = None
    ceiling: Optional[float] = None

    def __call__(self, value: float) -> float:
        for segment in self.segments:
            admitted = value >= segment.bound if self.lower_bounds else value <= segment.bound
            if admitted:
                return self._clamp(segment.score(value))
        raise ValueError(f"No segment admits value {value}")

    @property
    def breakpoints(self) -> Tuple[float, ...]:
        """Finite segment bounds, in evaluation order."""
        return tuple(s.bound for s in self.segments if math.isfinite(s.bound))

    def _clamp(self, score: float) -> float:
        if self.floor is not None:
            score = max(self.floor, score)
        if self.ceiling is not None:
            score = min(self.ceiling, score)
        return score


# Average AI confidence (0-1): 0.9 -> 90, 0.8 -> 75, 0.7 -> 50, 1.0 -> 100
AI_CONFIDENCE_CURVE = PiecewiseCurve(
    segments=(
        Segment(bound=0.9, anchor=0.9, base=90.0, slope=100.0),
        Segment(bound=0.8, anchor=0.8, base=75.0, slope=150.0),
        Segment(bound=0.7, anchor=0.7, base=50.0, slope=250.0),
        Segment(bound=-math.inf, anchor=0.0, base=0.0, slope=70.0),
    ),
    lower_bounds=True,
)

# Parent satisfaction (1-5) rescaled linearly to 0-100
PARENT_SATISFACTION_CURVE = PiecewiseCurve(
    segments=(
        Segment(bound=math.inf, anchor=1.0, base=0.0, slope=25.0),
    ),
    floor=0.0,
    ceiling=100.0,
)

# Content flag rate (0-1), inverted: 0.02 -> 90, 0.05 -> 75, 0.10 -> 50
CONTENT_QUALITY_CURVE = PiecewiseCurve(
    segments=(
        Segment(bound=0.02, anchor=0.0, base=100.0, slope=-500.0),
        Segment(bound=0.05, anchor=0.02, base=90.0, slope=-500.0),
        Segment(bound=0.10, anchor=0.05, base=75.0, slope=-500.0),
        Segment(bound=math.inf, anchor=0.10, base=50.0, slope=-500.0),
    ),
    floor=0.0,
)

# Weighted review backlog (pending + 2 * urgent): 10 -> 90, 30 -> 75, 60 -> ~50
REVIEW_BACKLOG_CURVE = PiecewiseCurve(
    segments=(
        Segment(bound=10, anchor=0, base=100.0, slope=-1.0),
        Segment(bound=30, anchor=10, base=90.0, slope=-0.75),
        Segment(bound=60, anchor=30, base=75.0, slope=-0.83),
        Segment(bound=math.inf, anchor=60, base=50.0, slope=-1.0),
    ),
    floor=0.0,
)

URGENT_BACKLOG_MULTIPLIER = 2

# Component weights (must sum to 1.0)
HEALTH_WEIGHTS: Dict[str, float] = {
    "ai_confidence": 0.35,
    "parent_satisfaction": 0.30,
    "content_quality": 0.20,
    "review_backlog": 0.15,
}

# Minimum overall score per status, checked top-down
HEALTH_STATUS_THRESHOLDS: Tuple[Tuple[float, HealthStatus], ...] = (
    (90.0, HealthStatus.EXCELLENT),
    (75.0, HealthStatus.GOOD),
    (50.0, HealthStatus.WARNING),
)


def ai_confidence_score(average_confidence: Optional[float]) -> float:
    """Sub-score for average AI confidence; no data scores 0."""
    if average_confidence is None:
        return 0.0
    return AI_CONFIDENCE_CURVE(average_confidence)


def parent_satisfaction_score(average_satisfaction: Optional[float]) -> float:
    """Sub-score for average parent satisfaction; no data scores 0."""
    if average_satisfaction is None:
        return 0.0
    return PARENT_SATISFACTION_CURVE(average_satisfaction)


def content_quality_score(flag_rate: Optional[float]) -> float:
    """Sub-score for content flag rate; no data is assumed clean (100)."""
    if flag_rate is None:
        return 100.0
    return CONTENT_QUALITY_CURVE(flag_rate)


def weighted_backlog(total_pending: int, urgent_count: int) -> int:
    """Pending reviews with urgent items counted extra."""
    return total_pending + urgent_count * URGENT_BACKLOG_MULTIPLIER


def review_backlog_score(total_pending: int, urgent_count: int) -> float:
    """Sub-score for the review backlog."""
    return REVIEW_BACKLOG_CURVE(weighted_backlog(total_pending, urgent_count))


def determine_health_status(score: float) -> HealthStatus:
    """Classify an overall score into EXCELLENT/GOOD/WARNING/CRITICAL."""
    for minimum, status in HEALTH_STATUS_THRESHOLDS:
        if score >= minimum:
            return status
    return HealthStatus.CRITICAL


def compute_health_score(
    average_confidence: Optional[float],
    average_satisfaction: Optional[float],
    flag_rate: Optional[float],
    total_pending: int,
    urgent_count: int
) -> HealthScore:
    """
    Combine the four sub-scores into a weighted health score.

    Args:
        average_confidence: Mean AI confidence (0-1) or None
        average_satisfaction: Mean parent satisfaction (1-5) or None
        flag_rate: Mean content flag rate (0-1) or None
        total_pending: Pending review items
        urgent_count: Pending URGENT review items

    Returns:
        HealthScore with overall score rounded to one decimal, status
        classified on the unrounded score, and each component's score and weight
    """
    scores = {
        "ai_confidence": ai_confidence_score(average_confidence),
        "parent_satisfaction": parent_satisfaction_score(average_satisfaction),
        "content_quality": content_quality_score(flag_rate),
        "review_backlog": review_backlog_score(total_pending, urgent_count),
    }

    overall = sum(scores[name] * weight for name, weight in HEALTH_WEIGHTS.items())
    # Status uses the unrounded score; only the reported value is rounded
    overall_score = round(overall, 1)

    components = HealthComponents(**{
        name: HealthComponent(score=round(scores[name], 1), weight=weight)
        for name, weight in HEALTH_WEIGHTS.items()
    })

    return HealthScore(
        overall_score=overall_score,
        status=determine_health_status(overall),
        components=components,
    )
