"""
Alert Repository

Database operations for monitoring alerts: creation, active-alert listing,
and the one-time resolution update.
"""

from datetime import datetime
from typing import List

from aiqa.errors import InvalidStateError, NotFoundError
from aiqa.models.metrics import Alert
from aiqa.repositories.base import RecordRepository
from aiqa.utils.database import session_scope
from aiqa.utils.logging_config import get_logger

logger = get_logger(__name__, component="alert_repo")


class AlertRepository(RecordRepository[Alert]):
    """Repository for Alert records."""

    model = Alert
    entity_name = "alert"

    def get_active(self) -> List[Alert]:
        """Get unresolved alerts, newest first."""
        return self.find_many(
            order_by=[Alert.created_at.desc()],
            is_resolved=False,
        )

    def resolve(self, alert_id: str, resolution_notes: str) -> Alert:
        """
        Mark an alert resolved.

        Args:
            alert_id: Alert ID
            resolution_notes: How the alert was resolved

        Returns:
            The resolved Alert

        Raises:
            NotFoundError: Unknown alert ID
            InvalidStateError: Alert already resolved
        """
        with session_scope(self.session_factory) as session:
            alert = session.get(Alert, alert_id)

            if alert is None:
                logger.warning("alert_not_found", alert_id=alert_id)
                raise NotFoundError(self.entity_name, alert_id)

            if alert.is_resolved:
                logger.warning("alert_already_resolved", alert_id=alert_id)
                raise InvalidStateError(self.entity_name, alert_id, "resolved", "resolve")

            alert.is_resolved = True
            alert.resolution_notes = resolution_notes
            alert.resolved_at = datetime.utcnow()
            session.flush()

        logger.info("alert_resolved", alert_id=alert_id, alert_type=alert.alert_type.value)
        return alert
