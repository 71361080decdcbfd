"""Dependency injection factory functions."""

from typing import Optional

from app.adapters.outbound.eligibility import (
    InMemoryEligibilityLeadRepository,
    PostgresEligibilityLeadRepository,
)
from app.adapters.outbound.http.compliance_clients import (
    ContentModeratorJunkChecker,
    DncRegistryClient,
    IpifyResolver,
)
from app.adapters.outbound.http.notification_clients import (
    BasicAuthWebhook,
    DiscordChatNotifier,
    TwoChatWhatsAppClient,
)
from app.adapters.outbound.idempotency.noop_idempotency_store import NoOpIdempotencyStore
from app.adapters.outbound.idempotency.redis_idempotency_store import RedisIdempotencyStore
from app.adapters.outbound.lead import (
    InMemoryLeadRepository,
    PostgresLeadRepository,
)
from app.application.ports.eligibility_lead_repository import EligibilityLeadRepository
from app.application.ports.idempotency_store import IdempotencyStore
from app.application.ports.lead_repository import LeadRepository
from app.application.ports.notification_sinks import MessagingClient
from app.application.use_cases.dispatch_lead import NotificationDispatcher
from app.application.use_cases.evaluate_compliance import ComplianceGateway
from app.application.use_cases.submit_eligibility import SubmitEligibilityUseCase
from app.application.use_cases.submit_lead import SubmitLeadUseCase
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import log_intake


def create_lead_repository() -> LeadRepository:
    """
    Factory function to create lead repository.

    Returns:
        LeadRepository instance
    """
    if settings.lead_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when LEAD_REPOSITORY=postgres")
        return PostgresLeadRepository()
    else:
        return InMemoryLeadRepository()


def create_eligibility_lead_repository() -> EligibilityLeadRepository:
    """
    Factory function to create eligibility lead repository.

    Returns:
        EligibilityLeadRepository instance
    """
    if settings.eligibility_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when ELIGIBILITY_REPOSITORY=postgres")
        return PostgresEligibilityLeadRepository()
    else:
        return InMemoryEligibilityLeadRepository()


def create_idempotency_store() -> IdempotencyStore:
    """
    Factory function to create the CRM dispatch idempotency store.

    Returns:
        IdempotencyStore instance (Redis or NoOp)
    """
    if not settings.webhook_idempotency_enabled:
        return NoOpIdempotencyStore()

    if not settings.redis_url:
        # Dispatch still works, it just cannot detect earlier deliveries
        return NoOpIdempotencyStore()

    return RedisIdempotencyStore(settings.redis_url)


def create_messaging_client() -> Optional[MessagingClient]:
    """
    Factory function to create WhatsApp client if enabled.

    Returns:
        MessagingClient instance if enabled and configured, None otherwise
    """
    if not settings.whatsapp_enabled or not settings.whatsapp_api_key:
        return None
    return TwoChatWhatsAppClient()


def create_compliance_gateway() -> ComplianceGateway:
    """
    Factory function to create the compliance gateway.

    Returns:
        ComplianceGateway instance
    """
    return ComplianceGateway(
        junk_checker=ContentModeratorJunkChecker(),
        dnc_registry=DncRegistryClient(),
        ip_resolver=IpifyResolver(),
        frequency_webhook=BasicAuthWebhook(
            "frequency", settings.frequency_url, settings.frequency_auth
        ),
        default_source_url=settings.default_source_url,
        logger=log_intake,
    )


def create_notification_dispatcher() -> NotificationDispatcher:
    """
    Factory function to create the notification dispatcher.

    Returns:
        NotificationDispatcher instance
    """
    return NotificationDispatcher(
        crm_webhook=BasicAuthWebhook("crm_webhook", settings.webhook_url, settings.webhook_auth),
        chat_notifier=DiscordChatNotifier(),
        idempotency_store=create_idempotency_store(),
        messaging_client=create_messaging_client(),
        client_id=settings.webhook_client_id,
        project_id=settings.webhook_project_id,
        max_attempts=settings.webhook_max_attempts,
        idempotency_ttl_seconds=settings.webhook_idempotency_ttl_seconds,
        logger=log_intake,
    )


def create_submit_lead_use_case(
    lead_repository: Optional[LeadRepository] = None,
) -> SubmitLeadUseCase:
    """
    Factory function to create SubmitLeadUseCase with dependencies.

    Args:
        lead_repository: Repository to share with the read endpoints

    Returns:
        SubmitLeadUseCase instance
    """
    return SubmitLeadUseCase(
        lead_repository or create_lead_repository(),
        create_compliance_gateway(),
        create_notification_dispatcher(),
        logger=log_intake,
    )


def create_submit_eligibility_use_case(
    repository: Optional[EligibilityLeadRepository] = None,
) -> SubmitEligibilityUseCase:
    """
    Factory function to create SubmitEligibilityUseCase.

    Args:
        repository: Repository to share with the read endpoints

    Returns:
        SubmitEligibilityUseCase instance
    """
    return SubmitEligibilityUseCase(
        repository or create_eligibility_lead_repository(),
        listing_prefix=settings.eligibility_listing_prefix,
    )
