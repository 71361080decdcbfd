"""Application settings."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings."""

    debug_mode: bool = False
    lead_repository: str = "in_memory"  # in_memory or postgres
    eligibility_repository: str = "in_memory"  # in_memory or postgres
    database_url: str = ""  # Required when either repository=postgres

    # Outbound HTTP
    http_timeout_seconds: float = 8.0
    ip_lookup_retries: int = 1
    webhook_max_attempts: int = 3

    # Junk / DNC / IP enrichment
    content_moderator_url: str = ""
    content_moderator_key: str = ""
    dnc_url: str = ""
    ip_echo_url: str = "https://api.ipify.org/?format=json"

    # CRM endpoints ("user:password" pairs, base64-encoded at send time)
    frequency_url: str = ""
    frequency_auth: str = ""
    webhook_url: str = ""
    webhook_auth: str = ""
    webhook_client_id: Optional[str] = None
    webhook_project_id: Optional[str] = None

    # Chat notifications
    discord_webhook_url: str = ""
    discord_username: str = "Lead Intake"
    default_source_url: str = "https://launchgovtest.homes/"

    # WhatsApp (2Chat)
    whatsapp_enabled: bool = False
    whatsapp_api_url: str = "https://api.p.2chat.io/open/whatsapp/send-message"
    whatsapp_api_key: str = ""
    whatsapp_from_number: str = ""
    whatsapp_country_code: str = "65"

    eligibility_listing_prefix: str = ""

    # CRM webhook idempotency
    redis_url: str = ""  # e.g. redis://localhost:6379/0; empty disables dispatch dedupe
    webhook_idempotency_enabled: bool = True
    webhook_idempotency_ttl_seconds: int = 604800  # 7 days

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
    )


settings = Settings()
