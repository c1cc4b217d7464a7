"""
Parent Feedback Scoring

Collects multi-dimensional parent ratings on generated questions, derives
overall satisfaction, and flags low-scoring content for review.
"""

from dataclasses import dataclass
from typing import List, Optional

from aiqa.errors import ValidationError
from aiqa.models.feedback import FeedbackEntry
from aiqa.repositories.feedback_repository import FeedbackRepository
from aiqa.utils.database import SessionFactory, get_session_factory
from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="feedback")

MIN_RATING = 1.0
MAX_RATING = 5.0

# Feedback strictly below this overall satisfaction is flagged
FLAG_SATISFACTION_THRESHOLD = 3.0


@dataclass
class DimensionAverages:
    """Per-dimension mean rating; None where no feedback contributes."""
    explanation: Optional[float]
    helpfulness: Optional[float]
    clarity: Optional[float]
    age_appropriate: Optional[float]


@dataclass
class FeedbackStats:
    """Global parent feedback statistics."""
    total_feedback: int
    average_satisfaction: Optional[float]
    flagged_count: int
    flag_rate: float


def calculate_overall_satisfaction(ratings: List[float]) -> float:
    """Unweighted mean of the dimension ratings."""
    return sum(ratings) / len(ratings)


def should_flag(overall_satisfaction: float) -> bool:
    """Exactly 3.0 is not flagged."""
    return overall_satisfaction < FLAG_SATISFACTION_THRESHOLD


class ParentFeedbackService:
    """Service for parent feedback on generated questions."""

    def __init__(self, session_factory: SessionFactory):
        """
        Initialize ParentFeedbackService.

        Args:
            session_factory: Callable returning a new SQLAlchemy Session
        """
        self.feedback_repo = FeedbackRepository(session_factory)

    def submit_feedback(
        self,
        question_id: str,
        parent_id: str,
        explanation_rating: float,
        helpfulness_rating: float,
        clarity_rating: float,
        age_appropriate_rating: float,
        comments: Optional[str] = None
    ) -> FeedbackEntry:
        """
        Validate, score and store one feedback submission.

        Args:
            question_id: Question being rated
            parent_id: Parent submitting the rating
            explanation_rating: Explanation quality (1-5)
            helpfulness_rating: Helpfulness (1-5)
            clarity_rating: Clarity (1-5)
            age_appropriate_rating: Age appropriateness (1-5)
            comments: Optional free text

        Returns:
            Stored FeedbackEntry with overall_satisfaction and flagged_for_review set

        Raises:
            ValidationError: A rating lies outside 1-5; nothing is stored
        """
        ratings = {
            "explanation_rating": explanation_rating,
            "helpfulness_rating": helpfulness_rating,
            "clarity_rating": clarity_rating,
            "age_appropriate_rating": age_appropriate_rating,
        }

        for name, rating in ratings.items():
            if rating is None or not (MIN_RATING <= rating <= MAX_RATING):
                logger.warning(
                    "feedback_rejected",
                    question_id=question_id,
                    dimension=name,
                    rating=rating
                )
                raise ValidationError(
                    f"Rating must be between {MIN_RATING:g} and {MAX_RATING:g}, "
                    f"got {rating} for {name}"
                )

        overall_satisfaction = calculate_overall_satisfaction(list(ratings.values()))
        flagged = should_flag(overall_satisfaction)

        entry = self.feedback_repo.create(
            question_id=question_id,
            parent_id=parent_id,
            overall_satisfaction=overall_satisfaction,
            flagged_for_review=flagged,
            comments=comments,
            **ratings,
        )

        logger.info(
            "feedback_submitted",
            feedback_id=entry.id,
            question_id=question_id,
            overall_satisfaction=overall_satisfaction
        )
        if flagged:
            logger.warning(
                "feedback_flagged_for_review",
                feedback_id=entry.id,
                question_id=question_id,
                overall_satisfaction=overall_satisfaction
            )

        return entry

    def get_feedback_by_question(self, question_id: str) -> List[FeedbackEntry]:
        """All feedback for a question, newest first."""
        return self.feedback_repo.get_by_question(question_id)

    def get_average_satisfaction(self, question_id: str) -> Optional[float]:
        """Mean overall satisfaction for a question, or None without feedback."""
        value = self.feedback_repo.average(
            FeedbackEntry.overall_satisfaction,
            question_id=question_id,
        )
        return None if value is None else float(value)

    def get_flagged_feedback(self) -> List[FeedbackEntry]:
        """Flagged feedback, worst overall satisfaction first."""
        return self.feedback_repo.get_flagged()

    def get_dimension_averages(self, question_id: str) -> DimensionAverages:
        """Mean of each dimension for a question, each independently None when empty."""
        averages = self.feedback_repo.get_dimension_averages(question_id)
        return DimensionAverages(**{
            name: None if value is None else float(value)
            for name, value in averages.items()
        })

    def get_parent_feedback_stats(self) -> FeedbackStats:
        """
        Global totals, mean satisfaction and flag rate.

        flag_rate is 0 when there is no feedback.
        """
        stats = self.feedback_repo.get_statistics()
        total = stats["total"]
        flagged = stats["flagged"]
        average = stats["average_satisfaction"]

        return FeedbackStats(
            total_feedback=total,
            average_satisfaction=None if average is None else float(average),
            flagged_count=flagged,
            flag_rate=flagged / total if total > 0 else 0.0,
        )


def create_feedback_service(
    session_factory: Optional[SessionFactory] = None
) -> ParentFeedbackService:
    """
    Factory function to create ParentFeedbackService.

    Args:
        session_factory: Session factory (default: global factory from init_database)

    Returns:
        ParentFeedbackService instance
    """
    return ParentFeedbackService(session_factory or get_session_factory())
