"""Shared httpx helpers for outbound calls."""

from typing import Any, Optional

import httpx

from app.domain.errors import UpstreamError


async def send_request(
    service: str,
    method: str,
    url: str,
    timeout: float,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send one HTTP request and translate every failure into UpstreamError.

    Args:
        service: Service name used in errors and logs
        method: HTTP method
        url: Target URL
        timeout: Per-call timeout in seconds
        **kwargs: Passed through to httpx (json, content, headers, auth, ...)

    Returns:
        Response with a 2xx status

    Raises:
        UpstreamError: If the URL is not configured, the call failed or timed
            out, or the response was not 2xx
    """
    if not url:
        raise UpstreamError(service, "endpoint not configured")

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
            return resp
    except httpx.HTTPStatusError as e:
        raise UpstreamError(
            service, f"HTTP {e.response.status_code}", status_code=e.response.status_code
        ) from e
    except httpx.TimeoutException as e:
        raise UpstreamError(service, "timed out") from e
    except httpx.HTTPError as e:
        raise UpstreamError(service, str(e) or e.__class__.__name__) from e


def json_body(service: str, resp: httpx.Response) -> Any:
    """Decode a JSON response body, raising UpstreamError if it is not JSON."""
    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError(service, "response was not valid JSON") from e


def basic_auth(credentials: str) -> Optional[httpx.BasicAuth]:
    """Build basic auth from a 'user:password' string; None if empty."""
    if not credentials:
        return None
    username, _, password = credentials.partition(":")
    return httpx.BasicAuth(username, password)
