"""
Parent Feedback Repository

Database operations for parent feedback: per-question listings, dimension
averages and global statistics.
"""

from typing import Dict, List, Optional

from sqlalchemy import case, func

from aiqa.models.feedback import FeedbackEntry
from aiqa.repositories.base import RecordRepository
from aiqa.utils.database import session_scope


class FeedbackRepository(RecordRepository[FeedbackEntry]):
    """Repository for FeedbackEntry records."""

    model = FeedbackEntry
    entity_name = "feedback"

    def get_by_question(self, question_id: str) -> List[FeedbackEntry]:
        """Get all feedback for a question, newest first."""
        return self.find_many(
            order_by=[FeedbackEntry.submitted_at.desc()],
            question_id=question_id,
        )

    def get_flagged(self) -> List[FeedbackEntry]:
        """Get flagged feedback, lowest overall satisfaction first."""
        return self.find_many(
            order_by=[FeedbackEntry.overall_satisfaction.asc()],
            flagged_for_review=True,
        )

    def get_dimension_averages(self, question_id: str) -> Dict[str, Optional[float]]:
        """
        Average each rating dimension for a question.

        Returns:
            Dict keyed by dimension; each value None when no entry contributes
        """
        with session_scope(self.session_factory) as session:
            row = session.query(
                func.avg(FeedbackEntry.explanation_rating),
                func.avg(FeedbackEntry.helpfulness_rating),
                func.avg(FeedbackEntry.clarity_rating),
                func.avg(FeedbackEntry.age_appropriate_rating),
            ).filter(FeedbackEntry.question_id == question_id).one()

        return {
            "explanation": row[0],
            "helpfulness": row[1],
            "clarity": row[2],
            "age_appropriate": row[3],
        }

    def get_statistics(self) -> Dict:
        """
        Get global feedback statistics in one query.

        Returns:
            Dict with total, average_satisfaction (None when empty) and flagged
        """
        with session_scope(self.session_factory) as session:
            row = session.query(
                func.count(FeedbackEntry.id),
                func.avg(FeedbackEntry.overall_satisfaction),
                func.sum(case((FeedbackEntry.flagged_for_review.is_(True), 1), else_=0)),
            ).one()

        return {
            "total": int(row[0] or 0),
            "average_satisfaction": row[1],
            "flagged": int(row[2] or 0),
        }
