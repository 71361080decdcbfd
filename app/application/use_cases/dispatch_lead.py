"""Notification dispatcher use case."""

import asyncio
import logging
from typing import Any, Callable, Optional

from app.application.dtos.compliance import ComplianceDecision
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.notification_sinks import ChatNotifier, LeadWebhook, MessagingClient
from app.domain.errors import UpstreamError

WHATSAPP_CONFIRMATION = (
    "Hi {name}, thank you for your enquiry. "
    "Our consultant will be in touch with you shortly."
)


class NotificationDispatcher:
    """Sends enriched leads to the CRM webhook, the chat channel and WhatsApp."""

    def __init__(
        self,
        crm_webhook: LeadWebhook,
        chat_notifier: ChatNotifier,
        idempotency_store: IdempotencyStore,
        messaging_client: Optional[MessagingClient] = None,
        client_id: Optional[str] = None,
        project_id: Optional[str] = None,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 0.5,
        idempotency_ttl_seconds: int = 604800,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize notification dispatcher.

        Args:
            crm_webhook: CRM webhook endpoint
            chat_notifier: Chat channel for new-lead notifications
            idempotency_store: Records lead ids already delivered to the CRM
            messaging_client: Optional WhatsApp client; confirmations are skipped if None
            client_id: CRM client id placeholder
            project_id: CRM project id placeholder
            max_attempts: Delivery attempts for the CRM webhook
            retry_backoff_seconds: Linear backoff between CRM attempts
            idempotency_ttl_seconds: How long a delivered lead id is remembered
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._crm_webhook = crm_webhook
        self._chat_notifier = chat_notifier
        self._idempotency_store = idempotency_store
        self._messaging_client = messaging_client
        self._client_id = client_id
        self._project_id = project_id
        self._max_attempts = max(1, max_attempts)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._idempotency_ttl_seconds = idempotency_ttl_seconds
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    def _log_sink(
        self, request_id: str, lead_id: Any, sink: str, success: bool, **kwargs: Any
    ) -> None:
        self._log(
            request_id,
            "dispatch",
            level=logging.INFO if success else logging.WARNING,
            lead_id=lead_id,
            sink=sink,
            success=success,
            **kwargs,
        )

    def build_payload(self, lead: dict[str, Any], decision: ComplianceDecision) -> dict[str, Any]:
        """
        Merge raw lead fields with the decision metadata.

        Decision metadata wins over same-named lead fields.

        Args:
            lead: Lead merged with its details
            decision: Compliance decision

        Returns:
            CRM webhook payload
        """
        payload = dict(lead)
        payload.update(
            {
                "client_id": self._client_id,
                "project_id": self._project_id,
                "ip_address": decision.ip_address,
                "is_verified": 1 if decision.is_verified else 0,
                "status": decision.status.value,
                "is_send_discord": decision.is_send_discord,
            }
        )
        return payload

    async def dispatch(
        self,
        lead: dict[str, Any],
        decision: ComplianceDecision,
        request_id: str = "unknown",
    ) -> bool:
        """
        Deliver the lead to the CRM webhook at least once.

        The lead id is the idempotency key. A lead already recorded as
        delivered is not sent again.

        Args:
            lead: Lead merged with its details
            decision: Compliance decision
            request_id: Request identifier for logging

        Returns:
            True if the CRM accepted the payload (now or earlier)
        """
        key = str(lead["id"])

        if await self._idempotency_store.is_processed(key):
            self._log_sink(
                request_id, lead["id"], "crm_webhook", True, skipped="already_dispatched"
            )
            return True

        payload = self.build_payload(lead, decision)

        for attempt in range(1, self._max_attempts + 1):
            try:
                await self._crm_webhook.post(payload, idempotency_key=key)
            except UpstreamError as err:
                self._log_sink(
                    request_id,
                    lead["id"],
                    "crm_webhook",
                    False,
                    attempt=attempt,
                    detail=err.detail,
                )
                if not err.retryable or attempt == self._max_attempts:
                    return False
                if self._retry_backoff_seconds:
                    await asyncio.sleep(self._retry_backoff_seconds * attempt)
                continue

            await self._idempotency_store.mark_processed(key, self._idempotency_ttl_seconds)
            self._log_sink(request_id, lead["id"], "crm_webhook", True, attempt=attempt)
            return True

        return False

    async def notify_chat(self, lead: dict[str, Any], request_id: str = "unknown") -> bool:
        """Post a new lead to the chat channel. Failures are logged, never raised."""
        try:
            await self._chat_notifier.notify_lead(lead)
        except UpstreamError as err:
            self._log_sink(request_id, lead.get("id"), "discord", False, detail=err.detail)
            return False
        self._log_sink(request_id, lead.get("id"), "discord", True)
        return True

    async def notify_whatsapp(self, lead: dict[str, Any], request_id: str = "unknown") -> bool:
        """Send the submitter a WhatsApp confirmation if a messaging client is configured."""
        if self._messaging_client is None or not lead.get("phone_number"):
            return False

        text = WHATSAPP_CONFIRMATION.format(name=lead.get("name") or "there")
        try:
            await self._messaging_client.send_message(str(lead["phone_number"]), text)
        except UpstreamError as err:
            self._log_sink(request_id, lead.get("id"), "whatsapp", False, detail=err.detail)
            return False
        self._log_sink(request_id, lead.get("id"), "whatsapp", True)
        return True
