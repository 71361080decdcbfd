"""Notification sink ports."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class LeadWebhook(ABC):
    """Port interface for CRM-style JSON webhooks (CRM dispatch, frequency control)."""

    @abstractmethod
    async def post(self, payload: dict[str, Any], idempotency_key: Optional[str] = None) -> None:
        """
        Deliver a JSON payload.

        Args:
            payload: JSON-serializable body
            idempotency_key: Optional key the receiver can use to drop duplicates

        Raises:
            UpstreamError: If the call failed or the receiver did not return 2xx
        """
        pass


class ChatNotifier(ABC):
    """Port interface for chat channel notifications."""

    @abstractmethod
    async def notify_lead(self, lead: dict[str, Any]) -> None:
        """
        Post a new lead record to the chat channel.

        Raises:
            UpstreamError: If the post failed
        """
        pass


class MessagingClient(ABC):
    """Port interface for direct messages to a submitter."""

    @abstractmethod
    async def send_message(self, phone_number: str, text: str) -> None:
        """
        Send a text message.

        Args:
            phone_number: Local phone number, without country code
            text: Message body

        Raises:
            UpstreamError: If the send failed
        """
        pass
