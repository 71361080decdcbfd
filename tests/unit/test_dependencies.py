"""Unit tests for settings-driven dependency wiring."""

from unittest.mock import patch

import pytest

from app.adapters.outbound.eligibility import (
    InMemoryEligibilityLeadRepository,
    PostgresEligibilityLeadRepository,
)
from app.adapters.outbound.http.notification_clients import TwoChatWhatsAppClient
from app.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from app.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from app.adapters.outbound.lead import InMemoryLeadRepository, PostgresLeadRepository
from app.infrastructure.config.settings import settings
from app.infrastructure.wiring import dependencies


def test_default_repositories_are_in_memory():
    """Test the default configuration needs no database."""
    with patch.object(settings, "lead_repository", "in_memory"), patch.object(
        settings, "eligibility_repository", "in_memory"
    ):
        assert isinstance(dependencies.create_lead_repository(), InMemoryLeadRepository)
        assert isinstance(
            dependencies.create_eligibility_lead_repository(),
            InMemoryEligibilityLeadRepository,
        )


def test_postgres_repositories_require_database_url():
    """Test selecting postgres without DATABASE_URL fails fast."""
    with patch.object(settings, "lead_repository", "postgres"), patch.object(
        settings, "database_url", ""
    ):
        with pytest.raises(ValueError):
            dependencies.create_lead_repository()


def test_postgres_repositories_selected():
    """Test postgres adapters are built when configured."""
    with patch.object(settings, "lead_repository", "postgres"), patch.object(
        settings, "eligibility_repository", "postgres"
    ), patch.object(settings, "database_url", "postgresql://u:p@localhost/leads"):
        assert isinstance(dependencies.create_lead_repository(), PostgresLeadRepository)
        assert isinstance(
            dependencies.create_eligibility_lead_repository(),
            PostgresEligibilityLeadRepository,
        )


def test_idempotency_store_selection():
    """Test Redis is used only when enabled and configured."""
    with patch.object(settings, "webhook_idempotency_enabled", True), patch.object(
        settings, "redis_url", "redis://localhost:6379/0"
    ):
        assert isinstance(dependencies.create_idempotency_store(), RedisIdempotencyStore)

    with patch.object(settings, "webhook_idempotency_enabled", True), patch.object(
        settings, "redis_url", ""
    ):
        assert isinstance(dependencies.create_idempotency_store(), NoOpIdempotencyStore)

    with patch.object(settings, "webhook_idempotency_enabled", False), patch.object(
        settings, "redis_url", "redis://localhost:6379/0"
    ):
        assert isinstance(dependencies.create_idempotency_store(), NoOpIdempotencyStore)


def test_messaging_client_requires_flag_and_key():
    """Test WhatsApp is wired only when enabled with an API key."""
    with patch.object(settings, "whatsapp_enabled", False), patch.object(
        settings, "whatsapp_api_key", "key"
    ):
        assert dependencies.create_messaging_client() is None

    with patch.object(settings, "whatsapp_enabled", True), patch.object(
        settings, "whatsapp_api_key", "key"
    ):
        assert isinstance(dependencies.create_messaging_client(), TwoChatWhatsAppClient)
