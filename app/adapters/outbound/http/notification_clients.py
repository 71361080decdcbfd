"""HTTP adapters for CRM webhooks, Discord and WhatsApp (2Chat)."""

from typing import Any, Optional

from app.adapters.outbound.http.client import basic_auth, send_request
from app.application.ports.notification_sinks import ChatNotifier, LeadWebhook, MessagingClient
from app.domain.errors import UpstreamError
from app.infrastructure.config.settings import settings

# Discord rejects message content longer than this
DISCORD_CONTENT_LIMIT = 2000


class BasicAuthWebhook(LeadWebhook):
    """JSON webhook protected by HTTP basic auth (CRM dispatch, frequency control)."""

    def __init__(
        self,
        service: str,
        url: str,
        credentials: str = "",
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """
        Initialize webhook client.

        Args:
            service: Service name used in errors and logs
            url: Endpoint URL
            credentials: 'user:password' for basic auth; empty sends no auth
            timeout_seconds: Per-call timeout
        """
        self._service = service
        self._url = url
        self._auth = basic_auth(credentials)
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    async def post(self, payload: dict[str, Any], idempotency_key: Optional[str] = None) -> None:
        headers = {"Content-Type": "application/json"}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        await send_request(
            self._service,
            "POST",
            self._url,
            self._timeout,
            json=payload,
            headers=headers,
            auth=self._auth,
        )


def format_discord_content(lead: dict[str, Any]) -> str:
    """Render a lead record as Discord message content."""
    lines = [f"**New lead #{lead.get('id', '?')}** ({lead.get('form_type', 'unknown')})"]
    for key, value in lead.items():
        if key in ("id", "form_type") or value in (None, ""):
            continue
        lines.append(f"- **{key}**: `{value}`")
    content = "\n".join(lines)
    if len(content) > DISCORD_CONTENT_LIMIT:
        content = content[: DISCORD_CONTENT_LIMIT - 3] + "..."
    return content


class DiscordChatNotifier(ChatNotifier):
    """Posts new leads to a Discord channel webhook."""

    SERVICE = "discord"

    def __init__(
        self,
        webhook_url: Optional[str] = None,
        username: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._webhook_url = webhook_url if webhook_url is not None else settings.discord_webhook_url
        self._username = username or settings.discord_username
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    async def notify_lead(self, lead: dict[str, Any]) -> None:
        await send_request(
            self.SERVICE,
            "POST",
            self._webhook_url,
            self._timeout,
            json={"username": self._username, "content": format_discord_content(lead)},
        )


class TwoChatWhatsAppClient(MessagingClient):
    """WhatsApp messages through the 2Chat send-message API."""

    SERVICE = "whatsapp"

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_number: Optional[str] = None,
        country_code: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._api_key = api_key if api_key is not None else settings.whatsapp_api_key
        self._from_number = (
            from_number if from_number is not None else settings.whatsapp_from_number
        )
        self._country_code = country_code or settings.whatsapp_country_code
        self._api_url = api_url or settings.whatsapp_api_url
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    async def send_message(self, phone_number: str, text: str) -> None:
        if not phone_number or not text:
            raise UpstreamError(self.SERVICE, "phone number or message is empty")

        await send_request(
            self.SERVICE,
            "POST",
            self._api_url,
            self._timeout,
            json={
                "to_number": f"+{self._country_code}{phone_number.strip()}",
                "from_number": self._from_number,
                "text": text,
            },
            headers={"X-User-API-Key": self._api_key},
        )
