"""Intake session entity."""

from dataclasses import dataclass


@dataclass
class IntakeSession:
    """Per-visitor session context threaded through lead submission."""

    lead_sent: bool = False  # A clear lead was handed to frequency control

    def mark_lead_sent(self) -> None:
        """Record that a clear lead from this session was handed to frequency control."""
        self.lead_sent = True
