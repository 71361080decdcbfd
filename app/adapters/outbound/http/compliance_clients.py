"""HTTP adapters for content moderation, the DNC registry and public IP lookup."""

from typing import Optional

from app.adapters.outbound.http.client import json_body, send_request
from app.application.ports.compliance_services import DncRegistry, IpResolver, JunkChecker
from app.domain.errors import UpstreamError
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger


class ContentModeratorJunkChecker(JunkChecker):
    """Junk detection via a content moderator text-screen endpoint."""

    SERVICE = "content_moderator"

    def __init__(
        self,
        url: Optional[str] = None,
        subscription_key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._url = url if url is not None else settings.content_moderator_url
        self._key = (
            subscription_key if subscription_key is not None else settings.content_moderator_key
        )
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    async def is_junk(self, text: str) -> bool:
        resp = await send_request(
            self.SERVICE,
            "POST",
            self._url,
            self._timeout,
            content=text.encode("utf-8"),
            headers={
                "Content-Type": "text/plain",
                "Ocp-Apim-Subscription-Key": self._key,
            },
        )
        data = json_body(self.SERVICE, resp)
        return isinstance(data, dict) and bool(data.get("Terms"))


class DncRegistryClient(DncRegistry):
    """Do-not-call registry lookup by email and phone number."""

    SERVICE = "dnc_registry"

    def __init__(self, url: Optional[str] = None, timeout_seconds: Optional[float] = None) -> None:
        self._url = url if url is not None else settings.dnc_url
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    async def is_listed(self, email: str, phone_number: str) -> bool:
        resp = await send_request(
            self.SERVICE,
            "POST",
            self._url,
            self._timeout,
            json={"email": email, "ph_number": phone_number},
        )
        data = json_body(self.SERVICE, resp)
        return isinstance(data, dict) and bool(data.get("status"))


class IpifyResolver(IpResolver):
    """Public IP resolution via an IP-echo service; best-effort."""

    SERVICE = "ip_echo"

    def __init__(
        self,
        url: Optional[str] = None,
        retries: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self._url = url if url is not None else settings.ip_echo_url
        self._retries = settings.ip_lookup_retries if retries is None else max(0, retries)
        self._timeout = timeout_seconds or settings.http_timeout_seconds

    async def resolve(self) -> Optional[str]:
        """
        Resolve the public IP.

        Returns:
            IP string, or None if every attempt failed
        """
        for attempt in range(1, self._retries + 2):
            try:
                resp = await send_request(self.SERVICE, "GET", self._url, self._timeout)
                data = json_body(self.SERVICE, resp)
            except UpstreamError as e:
                logger.warning(f"IP lookup attempt {attempt} failed: {e.detail}")
                continue
            ip = data.get("ip") if isinstance(data, dict) else None
            return str(ip) if ip else None
        return None
