"""
Human Review Service

Queues generated questions for human review with a priority derived from
their quality assessment, and drives the review workflow:
PENDING -> IN_REVIEW -> APPROVED | REJECTED.

Priority rules (first match wins):
- Any CRITICAL flag -> URGENT, regardless of quality score
- Any HIGH flag or overall quality < 0.6 -> HIGH
- Overall quality < 0.8 -> MEDIUM
- Otherwise -> LOW
"""

from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from aiqa.errors import ValidationError
from aiqa.models.metrics import AlertSeverity
from aiqa.models.quality_assessment import QualityAssessment
from aiqa.models.review_queue import ReviewItem, ReviewPriority, ReviewStatus
from aiqa.repositories.review_queue_repository import ReviewQueueRepository
from aiqa.utils.database import SessionFactory, get_session_factory
from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="review_service")

HIGH_PRIORITY_QUALITY_THRESHOLD = 0.6
MEDIUM_PRIORITY_QUALITY_THRESHOLD = 0.8

AssessmentInput = Union[QualityAssessment, Mapping[str, Any]]


@dataclass
class ReviewStats:
    """Pending review counts; the per-priority counts sum to total_pending."""
    total_pending: int
    urgent_count: int
    high_count: int
    medium_count: int
    low_count: int


def calculate_review_priority(assessment: QualityAssessment) -> ReviewPriority:
    """
    Derive review priority from a quality assessment.

    Args:
        assessment: Quality assessment for the question

    Returns:
        ReviewPriority
    """
    if assessment.has_severity(AlertSeverity.CRITICAL):
        return ReviewPriority.URGENT
    if (
        assessment.has_severity(AlertSeverity.HIGH)
        or assessment.overall_quality < HIGH_PRIORITY_QUALITY_THRESHOLD
    ):
        return ReviewPriority.HIGH
    if assessment.overall_quality < MEDIUM_PRIORITY_QUALITY_THRESHOLD:
        return ReviewPriority.MEDIUM
    return ReviewPriority.LOW


def sort_by_priority(items: List[ReviewItem]) -> List[ReviewItem]:
    """
    Order items URGENT -> HIGH -> MEDIUM -> LOW, oldest first within a tier.

    Uses the explicit priority rank, never the priority name.
    """
    return sorted(items, key=lambda item: (-item.priority.rank, item.created_at))


class HumanReviewService:
    """Service for the human review queue."""

    def __init__(self, session_factory: SessionFactory):
        """
        Initialize HumanReviewService.

        Args:
            session_factory: Callable returning a new SQLAlchemy Session
        """
        self.review_repo = ReviewQueueRepository(session_factory)

    def queue_for_review(
        self,
        question_id: str,
        question_text: str,
        correct_answer: str,
        assessment: AssessmentInput
    ) -> ReviewItem:
        """
        Queue a question for review.

        Priority is computed once here and never recomputed.

        Args:
            question_id: Question under review
            question_text: Question text for the reviewer
            correct_answer: Expected answer for the reviewer
            assessment: QualityAssessment or equivalent mapping

        Returns:
            Created PENDING ReviewItem

        Raises:
            ValidationError: Assessment mapping fails validation; nothing is queued
        """
        if not isinstance(assessment, QualityAssessment):
            try:
                assessment = QualityAssessment.model_validate(assessment)
            except PydanticValidationError as e:
                logger.warning(
                    "review_assessment_rejected",
                    question_id=question_id,
                    error_count=e.error_count()
                )
                raise ValidationError(f"Invalid quality assessment for {question_id}: {e}") from e

        priority = calculate_review_priority(assessment)

        return self.review_repo.add_to_queue(
            question_id=question_id,
            question_text=question_text,
            correct_answer=correct_answer,
            quality_assessment=assessment.model_dump(mode="json"),
            priority=priority,
        )

    def get_pending_reviews(self) -> List[ReviewItem]:
        """Pending items by priority rank, FIFO within each priority."""
        return sort_by_priority(self.review_repo.get_pending())

    def get_reviews_by_priority(self, priority: ReviewPriority) -> List[ReviewItem]:
        """Pending items of exactly this priority, oldest first."""
        return self.review_repo.get_pending(priority=ReviewPriority(priority))

    def assign_review(self, review_id: str, reviewer_id: str) -> ReviewItem:
        """
        Assign a PENDING item to a reviewer (-> IN_REVIEW).

        Raises:
            NotFoundError: Unknown review ID
            InvalidStateError: Item is not PENDING
        """
        return self.review_repo.assign(review_id, reviewer_id)

    def approve_review(self, review_id: str, reviewer_notes: str) -> ReviewItem:
        """
        Approve a non-terminal item (-> APPROVED).

        Raises:
            NotFoundError: Unknown review ID
            InvalidStateError: Item already approved or rejected
        """
        return self.review_repo.complete(review_id, ReviewStatus.APPROVED, reviewer_notes)

    def reject_review(self, review_id: str, rejection_reason: str) -> ReviewItem:
        """
        Reject a non-terminal item (-> REJECTED).

        Raises:
            NotFoundError: Unknown review ID
            InvalidStateError: Item already approved or rejected
        """
        return self.review_repo.complete(review_id, ReviewStatus.REJECTED, rejection_reason)

    def get_review_stats(self) -> ReviewStats:
        """Counts of pending items per priority."""
        counts = self.review_repo.get_statistics()
        return ReviewStats(
            total_pending=counts["total"],
            urgent_count=counts[ReviewPriority.URGENT.value],
            high_count=counts[ReviewPriority.HIGH.value],
            medium_count=counts[ReviewPriority.MEDIUM.value],
            low_count=counts[ReviewPriority.LOW.value],
        )

    def get_review_by_id(self, review_id: str) -> Optional[ReviewItem]:
        """Review item, or None if not found."""
        return self.review_repo.get_by_id(review_id)


def create_review_service(
    session_factory: Optional[SessionFactory] = None
) -> HumanReviewService:
    """
    Factory function to create HumanReviewService.

    Args:
        session_factory: Session factory (default: global factory from init_database)

    Returns:
        HumanReviewService instance
    """
    return HumanReviewService(session_factory or get_session_factory())
