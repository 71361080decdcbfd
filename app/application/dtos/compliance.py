"""Compliance DTOs."""

from typing import Any, Optional

from app.application.dtos.base import DTO
from app.domain.value_objects.compliance_status import ComplianceStatus


class ChannelOtp(DTO):
    """One-time codes used to tell whether the WhatsApp channel was verified."""

    user_otp: Optional[str] = None  # Code typed in by the submitter
    wp_otp: Optional[str] = None  # Code sent over WhatsApp

    @property
    def verified(self) -> bool:
        """Channel is verified only if a code was sent and the submitter echoed it."""
        return bool(self.wp_otp) and self.wp_otp == self.user_otp


class ComplianceDecision(DTO):
    """Result of screening a lead before it is forwarded."""

    status: ComplianceStatus
    ip_address: Optional[str] = None
    is_verified: bool = False
    lead_sent: bool = False  # Clear lead handed to frequency control
    summary: dict[str, Any] = {}

    @property
    def is_send_discord(self) -> int:
        """Legacy CRM flag: 1 when the lead was clear."""
        return 1 if self.status is ComplianceStatus.CLEAR else 0
