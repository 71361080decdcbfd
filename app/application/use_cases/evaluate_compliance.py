"""Enrichment and compliance gateway use case."""

import json
import logging
from typing import Any, Callable, Optional

from app.application.dtos.compliance import ChannelOtp, ComplianceDecision
from app.application.ports.compliance_services import DncRegistry, IpResolver, JunkChecker
from app.application.ports.notification_sinks import LeadWebhook
from app.domain.errors import UpstreamError
from app.domain.value_objects.compliance_status import ComplianceStatus
from app.domain.value_objects.form_type import FormType


def _value(lead: dict[str, Any], key: str) -> str:
    value = lead.get(key)
    return "" if value is None else str(value)


def _pair(key: str, value: str) -> dict[str, str]:
    return {"key": key, "value": value}


def build_additional_data(lead: dict[str, Any]) -> list[dict[str, str]]:
    """
    Render form-specific fields with the labels the CRM expects.

    Args:
        lead: Lead merged with its details

    Returns:
        List of {key, value} pairs; empty for forms without a label mapping
    """
    form_type = FormType.parse(_value(lead, "form_type"))

    if form_type is FormType.CONDO:
        return [
            _pair("Project", f"Condo {_value(lead, 'project')}"),
            _pair("Blk", _value(lead, "block")),
            _pair("Looking to sell your property", _value(lead, "sell")),
            _pair("Floor - Unit number", f"{_value(lead, 'floor')} - {_value(lead, 'number')}"),
        ]
    if form_type is FormType.LANDED:
        return [
            _pair("Project", "Landed"),
            _pair("Landed Street", _value(lead, "street")),
            _pair("SQFT", _value(lead, "sqft")),
            _pair("Like to Know", _value(lead, "like_to_know")),
            _pair("Plans", _value(lead, "plan")),
        ]
    if form_type is FormType.HDB:
        return [
            _pair("Project", "HDB"),
            _pair("Town", _value(lead, "town")),
            _pair("Street Name", _value(lead, "street")),
            _pair("Blk", _value(lead, "block")),
            _pair("HDB Flat Type", _value(lead, "flat_type")),
            _pair("Looking to sell your property", _value(lead, "sell")),
            _pair("Floor - Unit number", f"{_value(lead, 'floor')} - {_value(lead, 'unit')}"),
        ]
    return []


def build_lead_summary(lead: dict[str, Any], default_source_url: str = "") -> dict[str, Any]:
    """
    Build the compact lead summary sent to moderation and frequency control.

    Args:
        lead: Lead merged with its details
        default_source_url: Used when the lead has no source_url

    Returns:
        Summary mapping
    """
    return {
        "name": _value(lead, "name"),
        "mobile_number": _value(lead, "phone_number"),
        "email": _value(lead, "email"),
        "source_url": _value(lead, "source_url") or default_source_url,
        "additional_data": build_additional_data(lead),
    }


class ComplianceGateway:
    """Screens a lead for junk and do-not-call hits and forwards clear leads."""

    def __init__(
        self,
        junk_checker: JunkChecker,
        dnc_registry: DncRegistry,
        ip_resolver: IpResolver,
        frequency_webhook: LeadWebhook,
        default_source_url: str = "",
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize compliance gateway.

        Args:
            junk_checker: Content moderation service
            dnc_registry: Do-not-call registry
            ip_resolver: Public IP resolver
            frequency_webhook: Frequency-control endpoint for clear leads
            default_source_url: Fallback source URL for the summary
            logger: Optional logger function (request_id, component, **kwargs)
        """
        self._junk_checker = junk_checker
        self._dnc_registry = dnc_registry
        self._ip_resolver = ip_resolver
        self._frequency_webhook = frequency_webhook
        self._default_source_url = default_source_url
        self._logger = logger

    def _log(self, request_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(request_id, component, **kwargs)

    def _upstream_failed(self, request_id: str, err: UpstreamError) -> None:
        self._log(
            request_id,
            "upstream",
            level=logging.WARNING,
            service=err.service,
            detail=err.detail,
        )

    async def evaluate(
        self,
        lead: dict[str, Any],
        otp: Optional[ChannelOtp] = None,
        request_id: str = "unknown",
    ) -> ComplianceDecision:
        """
        Screen a lead and forward it to frequency control if it is clear.

        Upstream failures never raise: a failed check degrades the status to
        unknown unless the other check flagged the lead.

        Args:
            lead: Lead merged with its details
            otp: One-time codes from the submission
            request_id: Request identifier for logging

        Returns:
            Compliance decision
        """
        otp = otp or ChannelOtp()
        verified = otp.verified
        summary = build_lead_summary(lead, self._default_source_url)
        summary["additional_data"].append(_pair("Whatsapp Verified", "Yes" if verified else "No"))

        junk: Optional[bool] = None
        try:
            junk = await self._junk_checker.is_junk(json.dumps(summary))
        except UpstreamError as err:
            self._upstream_failed(request_id, err)

        dnc: Optional[bool] = None
        try:
            dnc = await self._dnc_registry.is_listed(
                _value(lead, "email"), _value(lead, "phone_number")
            )
        except UpstreamError as err:
            self._upstream_failed(request_id, err)

        ip_address = await self._ip_resolver.resolve()

        if junk:
            status = ComplianceStatus.JUNK
        elif dnc:
            status = ComplianceStatus.DNC
        elif junk is None or dnc is None:
            status = ComplianceStatus.UNKNOWN
        else:
            status = ComplianceStatus.CLEAR

        lead_sent = status.forwardable
        frequency_forwarded = False
        if lead_sent:
            try:
                await self._frequency_webhook.post(summary)
                frequency_forwarded = True
            except UpstreamError as err:
                self._upstream_failed(request_id, err)

        self._log(
            request_id,
            "compliance",
            lead_id=lead.get("id"),
            compliance_status=status.value,
            ip_address=ip_address,
            whatsapp_verified=verified,
            frequency_forwarded=frequency_forwarded,
        )

        return ComplianceDecision(
            status=status,
            ip_address=ip_address,
            is_verified=verified,
            lead_sent=lead_sent,
            summary=summary,
        )
