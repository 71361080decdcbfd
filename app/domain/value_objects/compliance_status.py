"""Compliance status value object."""

from enum import Enum


class ComplianceStatus(str, Enum):
    """Outcome of the junk / do-not-call screening."""

    CLEAR = "clear"
    JUNK = "junk"
    DNC = "dnc"
    UNKNOWN = "unknown"  # A screening call failed and nothing was flagged

    @property
    def forwardable(self) -> bool:
        """Only clear leads go to the frequency-control endpoint."""
        return self is ComplianceStatus.CLEAR
