"""Unique user resolution across devices and optional emails."""

from collections.abc import Iterable
from dataclasses import dataclass

from compost_logbook.domain.logs import LogEntry
from compost_logbook.domain.stats import IdentityMapping
from compost_logbook.services.privacy import EmailPrivacyService


@dataclass
class IdentityService:
    """Links device ids to emails and counts unique users.

    The mapping is rebuilt from the complete log history for every report
    view. That full scan (with one decryption per emailed log) is the
    dominant cost of a report and grows with the log table.
    """

    privacy: EmailPrivacyService

    def build_mapping(self, all_logs: Iterable[LogEntry]) -> IdentityMapping:
        """Return device/email associations; the first email seen for a device wins."""
        email_to_devices: dict[str, set[str]] = {}
        device_to_email: dict[str, str] = {}
        for log in all_logs:
            device_id = log.device_id.strip()
            if not device_id:
                continue
            email = self.privacy.reveal(log.email_ciphertext)
            if email is None:
                continue
            email_to_devices.setdefault(email, set()).add(device_id)
            device_to_email.setdefault(device_id, email)
        return IdentityMapping(
            email_to_devices={
                email: frozenset(devices) for email, devices in email_to_devices.items()
            },
            device_to_email=device_to_email,
        )

    def count_unique_users(
        self, logs: Iterable[LogEntry], device_to_email: dict[str, str]
    ) -> int:
        """Count distinct emails plus distinct devices never linked to an email."""
        emails: set[str] = set()
        anonymous_devices: set[str] = set()
        for log in logs:
            device_id = log.device_id.strip()
            if not device_id:
                continue
            email = self.privacy.reveal(log.email_ciphertext)
            if email is None:
                email = device_to_email.get(device_id)
            if email is None:
                anonymous_devices.add(device_id)
            else:
                emails.add(email)
        return len(emails) + len(anonymous_devices)
