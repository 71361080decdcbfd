"""Submit lead use case: the intake orchestrator."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from app.application.dtos.compliance import ChannelOtp
from app.application.dtos.lead import (
    ExtraFieldValue,
    Lead,
    LeadSubmission,
    NewLead,
    SubmitLeadResult,
)
from app.application.ports.lead_repository import LeadRepository, serialize_detail_value
from app.application.use_cases.dispatch_lead import NotificationDispatcher
from app.application.use_cases.evaluate_compliance import ComplianceGateway
from app.domain.entities.intake_session import IntakeSession
from app.domain.errors import PersistenceError
from app.domain.value_objects.compliance_status import ComplianceStatus


def merge_submitted(
    lead_id: int, fields: NewLead, extra_fields: dict[str, ExtraFieldValue]
) -> dict[str, Any]:
    """Merged lead view built from the submitted values instead of a re-read."""
    lead = Lead(id=lead_id, created_at=datetime.now(timezone.utc), **fields.model_dump())
    merged = lead.to_record()
    for key, value in extra_fields.items():
        merged[key] = serialize_detail_value(value)
    merged["id"] = lead_id
    return merged


class SubmitLeadUseCase:
    """
    Orchestrates one lead submission.

    received -> validated -> deduped(existing | new) -> persisted -> enriched
    -> dispatched -> responded. Validation happens at the HTTP boundary; a
    phone-number duplicate returns the existing id and skips everything after
    the dedupe. Upstream failures are absorbed by the gateway and dispatcher.
    """

    def __init__(
        self,
        lead_repository: LeadRepository,
        compliance_gateway: ComplianceGateway,
        dispatcher: NotificationDispatcher,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize submit lead use case.

        Args:
            lead_repository: Lead store
            compliance_gateway: Junk / DNC / IP screening
            dispatcher: CRM, chat and WhatsApp notifications
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._lead_repository = lead_repository
        self._compliance_gateway = compliance_gateway
        self._dispatcher = dispatcher
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    async def execute(
        self,
        submission: LeadSubmission,
        session: Optional[IntakeSession] = None,
        request_id: Optional[str] = None,
    ) -> SubmitLeadResult:
        """
        Execute lead submission.

        Args:
            submission: Validated lead submission
            session: Caller's session context; lead_sent is set on it for every
                clear lead
            request_id: Optional request identifier for logging

        Returns:
            Submission result

        Raises:
            PersistenceError: If the lead could not be stored
        """
        request_id = request_id or "unknown"
        session = session or IntakeSession()

        fields = submission.to_new_lead()
        extra_fields = submission.extra_fields()
        lead_id, created = await self._lead_repository.create_if_absent(fields, extra_fields)
        self._log(request_id, "store", lead_id=lead_id, deduped="new" if created else "existing")

        if not created:
            return SubmitLeadResult(lead_id=lead_id, created=False, lead_sent=session.lead_sent)

        try:
            lead = await self._lead_repository.fetch_with_details(lead_id)
        except PersistenceError as err:
            self._log(request_id, "store", level=logging.WARNING, lead_id=lead_id, detail=str(err))
            lead = merge_submitted(lead_id, fields, extra_fields)
        # A submitted "id" extra must not replace the stored id
        lead["id"] = lead_id

        otp = ChannelOtp(user_otp=submission.user_otp, wp_otp=submission.wp_otp)
        decision = await self._compliance_gateway.evaluate(lead, otp, request_id=request_id)
        if decision.lead_sent:
            session.mark_lead_sent()

        dispatched = await self._dispatcher.dispatch(lead, decision, request_id=request_id)
        await self._dispatcher.notify_chat(lead, request_id=request_id)
        if decision.status is ComplianceStatus.CLEAR:
            await self._dispatcher.notify_whatsapp(lead, request_id=request_id)

        try:
            await self._lead_repository.update_flags(
                lead_id, is_verified=decision.is_verified, is_sent=dispatched
            )
        except PersistenceError as err:
            self._log(request_id, "store", level=logging.WARNING, lead_id=lead_id, detail=str(err))

        return SubmitLeadResult(
            lead_id=lead_id,
            created=True,
            status=decision.status.value,
            dispatched=dispatched,
            lead_sent=session.lead_sent,
        )
