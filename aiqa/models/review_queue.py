"""
Review Queue Model for Flagged Questions

Tracks generated questions that require human review. Priority is derived
from the quality assessment once, at queue time, and never recomputed.
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, Enum, Index, String, Text

from aiqa.models.base import Base


class ReviewStatus(str, enum.Enum):
    """Status of items in the review queue."""
    PENDING = "PENDING"  # Awaiting a reviewer
    IN_REVIEW = "IN_REVIEW"  # Assigned to a reviewer
    APPROVED = "APPROVED"  # Terminal
    REJECTED = "REJECTED"  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self in (ReviewStatus.APPROVED, ReviewStatus.REJECTED)


class ReviewPriority(str, enum.Enum):
    """Review urgency. Ordered by rank, never by name."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    ReviewPriority.URGENT: 4,
    ReviewPriority.HIGH: 3,
    ReviewPriority.MEDIUM: 2,
    ReviewPriority.LOW: 1,
}


class ReviewItem(Base):
    """Review queue entry for a generated question."""

    __tablename__ = "review_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # Question under review
    question_id = Column(String, nullable=False, index=True)
    question_text = Column(Text, nullable=False)
    correct_answer = Column(String(100), nullable=False)
    quality_assessment = Column(JSON, nullable=False, comment="overall_quality + flags")

    priority = Column(Enum(ReviewPriority), nullable=False)
    review_status = Column(
        Enum(ReviewStatus),
        nullable=False,
        default=ReviewStatus.PENDING,
    )

    reviewer_id = Column(String, nullable=True, index=True)
    reviewer_notes = Column(Text, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    review_started_at = Column(DateTime, nullable=True)
    review_completed_at = Column(DateTime, nullable=True)

    __table_args__ = (
        Index("idx_review_status_priority_created", "review_status", "priority", "created_at"),
    )

    def __repr__(self):
        return (
            f"<ReviewItem(id={self.id}, "
            f"question_id={self.question_id}, "
            f"priority={self.priority}, "
            f"status={self.review_status})>"
        )

    def to_dict(self):
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "question_id": self.question_id,
            "question_text": self.question_text,
            "correct_answer": self.correct_answer,
            "quality_assessment": self.quality_assessment,
            "priority": self.priority.value,
            "review_status": self.review_status.value,
            "reviewer_id": self.reviewer_id,
            "reviewer_notes": self.reviewer_notes,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "review_started_at": (
                self.review_started_at.isoformat() if self.review_started_at else None
            ),
            "review_completed_at": (
                self.review_completed_at.isoformat() if self.review_completed_at else None
            ),
        }
