"""Lead repository port."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from app.application.dtos.lead import ExtraFieldValue, Lead, NewLead

# Separator used when an array-valued form input is stored as one detail value
DETAIL_ARRAY_SEPARATOR = "| "


def serialize_detail_value(value: ExtraFieldValue) -> str:
    """Flatten a form value into the string stored in lead_details."""
    if isinstance(value, list):
        return DETAIL_ARRAY_SEPARATOR.join(value)
    return value


class LeadRepository(ABC):
    """Port interface for lead repository."""

    @abstractmethod
    async def create_if_absent(
        self, fields: NewLead, extra_fields: dict[str, ExtraFieldValue]
    ) -> tuple[int, bool]:
        """
        Create a lead and its details unless the phone number is already known.

        The lookup and the insert form one atomic unit. The lead row and all
        detail rows are written in a single transaction.

        Args:
            fields: Fixed-schema lead fields
            extra_fields: Form-specific fields, reserved keys already removed

        Returns:
            Tuple of (lead_id, created). created is False when an existing lead
            with the same phone_number was found and nothing was written.

        Raises:
            PersistenceError: If the write failed and was rolled back
        """
        pass

    @abstractmethod
    async def fetch_with_details(self, lead_id: int) -> dict[str, Any]:
        """
        Get a lead merged with its detail pairs.

        Args:
            lead_id: Lead identifier

        Returns:
            Flat mapping of base fields; detail keys override same-named base fields

        Raises:
            NotFoundError: If no lead has this id
        """
        pass

    @abstractmethod
    async def get(self, lead_id: int) -> Optional[Lead]:
        """
        Get a lead without its details.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead DTO, or None if not found
        """
        pass

    @abstractmethod
    async def list(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            Leads, most recently created first
        """
        pass

    @abstractmethod
    async def update_flags(
        self,
        lead_id: int,
        is_verified: Optional[bool] = None,
        is_sent: Optional[bool] = None,
    ) -> None:
        """
        Update the verification and sent flags; other fields are immutable.

        Args:
            lead_id: Lead identifier
            is_verified: New verification flag, or None to leave unchanged
            is_sent: New sent flag, or None to leave unchanged

        Raises:
            NotFoundError: If no lead has this id
            PersistenceError: If the write failed
        """
        pass
