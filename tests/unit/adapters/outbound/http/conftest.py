"""Shared fixtures for outbound HTTP adapter tests."""

import httpx
import pytest


@pytest.fixture
def mock_http(monkeypatch):
    """
    Route every httpx.AsyncClient through a MockTransport.

    Returns a function that installs a handler; the handler receives the
    httpx.Request and returns an httpx.Response or raises an httpx error.
    Sent requests are collected in the returned list.
    """
    real_client = httpx.AsyncClient
    sent: list[httpx.Request] = []

    def install(handler):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return handler(request)

        def make_client(**kwargs):
            return real_client(transport=httpx.MockTransport(recording_handler), **kwargs)

        monkeypatch.setattr(httpx, "AsyncClient", make_client)
        return sent

    return install
