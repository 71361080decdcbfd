"""In-memory lead repository adapter."""

from datetime import datetime, timezone
from typing import Any, Optional

from app.application.dtos.lead import ExtraFieldValue, Lead, NewLead
from app.application.ports.lead_repository import LeadRepository, serialize_detail_value
from app.domain.errors import NotFoundError


class InMemoryLeadRepository(LeadRepository):
    """In-memory implementation of lead repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._leads: dict[int, Lead] = {}
        self._details: dict[int, list[tuple[str, str]]] = {}
        self._next_id = 1

    def _find_by_phone(self, phone_number: str) -> Optional[Lead]:
        for lead in self._leads.values():
            if lead.phone_number == phone_number:
                return lead
        return None

    async def create_if_absent(
        self, fields: NewLead, extra_fields: dict[str, ExtraFieldValue]
    ) -> tuple[int, bool]:
        """
        Create a lead unless its phone number is known.

        No await between the lookup and the insert keeps them atomic on the
        event loop.

        Args:
            fields: Fixed-schema lead fields
            extra_fields: Form-specific fields

        Returns:
            Tuple of (lead_id, created)
        """
        existing = self._find_by_phone(fields.phone_number)
        if existing is not None:
            return existing.id, False

        details = [(key, serialize_detail_value(value)) for key, value in extra_fields.items()]

        now = datetime.now(timezone.utc)
        lead = Lead(id=self._next_id, created_at=now, updated_at=now, **fields.model_dump())
        self._next_id += 1
        self._leads[lead.id] = lead
        self._details[lead.id] = details
        return lead.id, True

    async def fetch_with_details(self, lead_id: int) -> dict[str, Any]:
        """
        Get a lead merged with its detail pairs.

        Args:
            lead_id: Lead identifier

        Returns:
            Flat mapping; detail keys override base fields

        Raises:
            NotFoundError: If no lead has this id
        """
        lead = self._leads.get(lead_id)
        if lead is None:
            raise NotFoundError("Lead", lead_id)

        merged = lead.to_record()
        for key, value in self._details.get(lead_id, []):
            merged[key] = value
        return merged

    async def get(self, lead_id: int) -> Optional[Lead]:
        return self._leads.get(lead_id)

    def detail_rows(self, lead_id: int) -> list[tuple[str, str]]:
        """Stored (key, value) detail pairs for a lead, in insertion order."""
        return list(self._details.get(lead_id, []))

    async def list(self) -> list[Lead]:
        """
        List all leads.

        Returns:
            Leads, most recently created first
        """
        return sorted(
            self._leads.values(),
            key=lambda lead: (lead.created_at, lead.id),
            reverse=True,
        )

    async def update_flags(
        self,
        lead_id: int,
        is_verified: Optional[bool] = None,
        is_sent: Optional[bool] = None,
    ) -> None:
        lead = self._leads.get(lead_id)
        if lead is None:
            raise NotFoundError("Lead", lead_id)

        changes: dict[str, Any] = {"updated_at": datetime.now(timezone.utc)}
        if is_verified is not None:
            changes["is_verified"] = is_verified
        if is_sent is not None:
            changes["is_sent"] = is_sent
        self._leads[lead_id] = lead.model_copy(update=changes)
