"""
Error taxonomy for the quality-assurance core.

Services raise these; callers decide on retry. Nothing here is retried
internally.
"""


class QualityAssuranceError(Exception):
    """Base class for all AIQA errors."""
    pass


class ValidationError(QualityAssuranceError):
    """Input rejected before any write (e.g. rating outside 1-5)."""
    pass


class NotFoundError(QualityAssuranceError):
    """Operation targeted an unknown alert or review item."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class InvalidStateError(QualityAssuranceError):
    """Operation is not allowed from the record's current state."""

    def __init__(self, entity: str, entity_id: str, state: str, action: str):
        self.entity = entity
        self.entity_id = entity_id
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} {entity} {entity_id} in state {state}")


class UpstreamUnavailableError(QualityAssuranceError):
    """The durable store failed a read or write."""
    pass
