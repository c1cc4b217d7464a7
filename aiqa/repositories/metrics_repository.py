"""
Metrics Snapshot Repository

Database operations for AI performance snapshots: recording, time-range
trends, and dashboard averages.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func

from aiqa.models.metrics import MetricsSnapshot
from aiqa.repositories.base import RecordRepository
from aiqa.utils.database import session_scope


class MetricsRepository(RecordRepository[MetricsSnapshot]):
    """Repository for MetricsSnapshot records."""

    model = MetricsSnapshot
    entity_name = "metrics_snapshot"

    def get_between(self, start: datetime, end: datetime) -> List[MetricsSnapshot]:
        """
        Get snapshots within a closed time interval.

        Args:
            start: Inclusive lower bound
            end: Inclusive upper bound

        Returns:
            Snapshots ordered by timestamp ascending
        """
        return self.find_many(
            MetricsSnapshot.timestamp >= start,
            MetricsSnapshot.timestamp <= end,
            order_by=[MetricsSnapshot.timestamp.asc()],
        )

    def get_aggregates(self) -> Dict[str, Optional[float]]:
        """
        Compute averages and totals across all snapshots in one query.

        Returns:
            Dict with avg_confidence, avg_satisfaction, avg_flag_rate,
            avg_review_rate (None when empty) and total_generations (None when empty)
        """
        with session_scope(self.session_factory) as session:
            row = session.query(
                func.avg(MetricsSnapshot.average_confidence_score),
                func.avg(MetricsSnapshot.parent_satisfaction_rating),
                func.avg(MetricsSnapshot.content_flag_rate),
                func.avg(MetricsSnapshot.human_review_rate),
                func.sum(MetricsSnapshot.total_generations),
            ).one()

        return {
            "avg_confidence": row[0],
            "avg_satisfaction": row[1],
            "avg_flag_rate": row[2],
            "avg_review_rate": row[3],
            "total_generations": row[4],
        }
