"""
Parent Feedback Model

Multi-dimensional parent rating of one generated question.
overall_satisfaction and flagged_for_review are derived at submission and
never edited afterwards.
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Float, Index, String, Text

from aiqa.models.base import Base


class FeedbackEntry(Base):
    """One parent's rating of one question across four dimensions (1-5)."""

    __tablename__ = "parent_feedback"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    question_id = Column(String, nullable=False, index=True)
    parent_id = Column(String, nullable=False, index=True)

    explanation_rating = Column(Float, nullable=False)
    helpfulness_rating = Column(Float, nullable=False)
    clarity_rating = Column(Float, nullable=False)
    age_appropriate_rating = Column(Float, nullable=False)

    overall_satisfaction = Column(Float, nullable=False, comment="Mean of the four ratings")
    flagged_for_review = Column(Boolean, nullable=False, default=False)
    comments = Column(Text, nullable=True)

    submitted_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("idx_feedback_submitted", "submitted_at"),
        Index("idx_feedback_flagged", "flagged_for_review", "overall_satisfaction"),
    )

    def __repr__(self):
        return (
            f"<FeedbackEntry(id={self.id}, question_id={self.question_id}, "
            f"overall={self.overall_satisfaction:.2f}, flagged={self.flagged_for_review})>"
        )

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "question_id": self.question_id,
            "parent_id": self.parent_id,
            "explanation_rating": self.explanation_rating,
            "helpfulness_rating": self.helpfulness_rating,
            "clarity_rating": self.clarity_rating,
            "age_appropriate_rating": self.age_appropriate_rating,
            "overall_satisfaction": self.overall_satisfaction,
            "flagged_for_review": self.flagged_for_review,
            "comments": self.comments,
            "submitted_at": self.submitted_at.isoformat() if self.submitted_at else None,
        }
