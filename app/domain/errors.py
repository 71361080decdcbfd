"""Domain errors raised across the intake pipeline."""

from typing import Optional


class LeadIntakeError(Exception):
    """Base class for intake pipeline errors."""


class ValidationError(LeadIntakeError):
    """Malformed or missing submission input."""

    def __init__(self, errors: dict[str, list[str]]) -> None:
        """
        Initialize validation error.

        Args:
            errors: Field name to list of messages
        """
        super().__init__("Validation error.")
        self.errors = errors


class PersistenceError(LeadIntakeError):
    """Storage failure; the enclosing transaction has been rolled back."""


class NotFoundError(LeadIntakeError):
    """No record exists for the requested id."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class UpstreamError(LeadIntakeError):
    """An outbound compliance or notification call failed or timed out."""

    def __init__(self, service: str, detail: str, status_code: Optional[int] = None) -> None:
        super().__init__(f"{service}: {detail}")
        self.service = service
        self.detail = detail
        self.status_code = status_code

    @property
    def retryable(self) -> bool:
        """Transport failures and 5xx responses are worth retrying."""
        return self.status_code is None or self.status_code >= 500
