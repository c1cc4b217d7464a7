"""
Review Queue Repository

Database operations for the human review queue.
Handles queuing, assignment, approval and rejection workflows.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func

from aiqa.errors import InvalidStateError, NotFoundError
from aiqa.models.review_queue import ReviewItem, ReviewPriority, ReviewStatus
from aiqa.repositories.base import RecordRepository
from aiqa.utils.database import session_scope
from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="review_queue_repo")


class ReviewQueueRepository(RecordRepository[ReviewItem]):
    """Repository for review queue operations."""

    model = ReviewItem
    entity_name = "review_item"

    def add_to_queue(
        self,
        question_id: str,
        question_text: str,
        correct_answer: str,
        quality_assessment: Dict,
        priority: ReviewPriority
    ) -> ReviewItem:
        """
        Add a question to the review queue in PENDING state.

        Args:
            question_id: Question under review
            question_text: Question text for the reviewer
            correct_answer: Expected answer for the reviewer
            quality_assessment: Serialized assessment that triggered review
            priority: Priority fixed at queue time

        Returns:
            Created ReviewItem
        """
        item = self.create(
            question_id=question_id,
            question_text=question_text,
            correct_answer=correct_answer,
            quality_assessment=quality_assessment,
            priority=priority,
            review_status=ReviewStatus.PENDING,
        )

        logger.info(
            "question_queued_for_review",
            item_id=item.id,
            question_id=question_id,
            priority=priority.value
        )

        return item

    def get_pending(self, priority: Optional[ReviewPriority] = None) -> List[ReviewItem]:
        """
        Get pending review items, oldest first.

        Args:
            priority: Optional filter by exact priority

        Returns:
            List of pending ReviewItems ordered by created_at ascending
        """
        filters = {"review_status": ReviewStatus.PENDING}
        if priority is not None:
            filters["priority"] = priority

        return self.find_many(order_by=[ReviewItem.created_at.asc()], **filters)

    def get_by_id(self, item_id: str) -> Optional[ReviewItem]:
        """Get review item by ID, or None if not found."""
        return self.find_by_id(item_id)

    def assign(self, item_id: str, reviewer_id: str) -> ReviewItem:
        """
        Move a PENDING item to IN_REVIEW.

        Raises:
            NotFoundError: Unknown item ID
            InvalidStateError: Item is not PENDING
        """
        with session_scope(self.session_factory) as session:
            item = self._get_for_update(session, item_id)

            if item.review_status != ReviewStatus.PENDING:
                logger.warning(
                    "review_item_not_pending",
                    item_id=item_id,
                    status=item.review_status.value
                )
                raise InvalidStateError(
                    self.entity_name, item_id, item.review_status.value, "assign"
                )

            item.review_status = ReviewStatus.IN_REVIEW
            item.reviewer_id = reviewer_id
            item.review_started_at = datetime.utcnow()
            session.flush()

        logger.info("review_item_assigned", item_id=item_id, reviewer_id=reviewer_id)
        return item

    def complete(self, item_id: str, status: ReviewStatus, reviewer_notes: str) -> ReviewItem:
        """
        Move a non-terminal item to APPROVED or REJECTED.

        Args:
            item_id: Review item ID
            status: ReviewStatus.APPROVED or ReviewStatus.REJECTED
            reviewer_notes: Decision notes

        Raises:
            NotFoundError: Unknown item ID
            InvalidStateError: Item already in a terminal state
        """
        if not status.is_terminal:
            raise ValueError(f"complete() requires a terminal status, got {status.value}")

        with session_scope(self.session_factory) as session:
            item = self._get_for_update(session, item_id)

            if item.review_status.is_terminal:
                logger.warning(
                    "review_item_already_completed",
                    item_id=item_id,
                    status=item.review_status.value
                )
                raise InvalidStateError(
                    self.entity_name, item_id, item.review_status.value, status.value.lower()
                )

            item.review_status = status
            item.reviewer_notes = reviewer_notes
            item.review_completed_at = datetime.utcnow()
            session.flush()

        logger.info(
            "review_item_completed",
            item_id=item_id,
            status=status.value,
            reviewer_id=item.reviewer_id
        )
        return item

    def get_statistics(self) -> Dict[str, int]:
        """
        Count pending items by priority in one query.

        Returns:
            Dict with "total" and a count per priority value
        """
        with session_scope(self.session_factory) as session:
            rows = session.query(ReviewItem.priority, func.count(ReviewItem.id)).filter(
                ReviewItem.review_status == ReviewStatus.PENDING
            ).group_by(ReviewItem.priority).all()

        counts = {priority.value: 0 for priority in ReviewPriority}
        for priority, count in rows:
            counts[priority.value] = count
        counts["total"] = sum(counts.values())
        return counts

    def _get_for_update(self, session, item_id: str) -> ReviewItem:
        item = session.get(ReviewItem, item_id)
        if item is None:
            logger.warning("review_item_not_found", item_id=item_id)
            raise NotFoundError(self.entity_name, item_id)
        return item
