"""Log submission and admin listing."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from compost_logbook.domain.errors import LogValidationError
from compost_logbook.domain.logs import Activity, LogEntry, NewLogEntry
from compost_logbook.services.log_query import LogRepository
from compost_logbook.services.privacy import (
    EmailPrivacyService,
    is_plausible_email,
    mask_email,
    normalize_email,
)

_logger = logging.getLogger(__name__)

MAX_DEVICE_ID_LENGTH = 50


@dataclass(frozen=True)
class LogListing:
    """Admin view of a stored log with a masked email."""

    entry: LogEntry
    masked_email: str


@dataclass
class LogbookService:
    """Validates and stores composting activity logs."""

    repository: LogRepository
    privacy: EmailPrivacyService
    timezone_name: str = "Europe/Amsterdam"

    def submit(  # noqa: PLR0913
        self,
        location_id: int,
        location_name: str,
        activity: str,
        weight_kg: float,
        device_id: str,
        email: str | None = None,
        logged_at: datetime | None = None,
    ) -> LogEntry:
        """Validate a submission, protect its email and store it."""
        resolved_activity = _validate_submission(
            location_id, location_name, activity, weight_kg, device_id
        )
        normalized_email = normalize_email(email)
        if normalized_email is not None and not is_plausible_email(normalized_email):
            raise LogValidationError("Email address is not valid.")
        ciphertext, email_hash = self.privacy.protect(normalized_email)
        moment = logged_at or datetime.now(tz=ZoneInfo(self.timezone_name))
        stored = self.repository.insert_log(
            NewLogEntry(
                log_date=moment.date(),
                log_time=moment.time().replace(microsecond=0, tzinfo=None),
                location_id=location_id,
                location_name=location_name.strip(),
                activity=resolved_activity,
                weight_kg=float(weight_kg),
                device_id=device_id.strip(),
                email_ciphertext=ciphertext,
                email_hash=email_hash,
            )
        )
        _logger.info(
            "Log stored: id=%s location_id=%s activity=%s",
            stored.id,
            stored.location_id,
            stored.activity,
        )
        return stored

    def list_recent(self, limit: int = 50) -> list[LogListing]:
        """Return recent logs with masked emails."""
        return [
            LogListing(
                entry=entry,
                masked_email=mask_email(self.privacy.reveal(entry.email_ciphertext)),
            )
            for entry in self.repository.list_recent_logs(limit)
        ]


def _validate_submission(
    location_id: int,
    location_name: str,
    activity: str,
    weight_kg: float,
    device_id: str,
) -> Activity:
    if location_id <= 0:
        raise LogValidationError("Location is required.")
    if not location_name.strip():
        raise LogValidationError("Location name is required.")
    try:
        resolved = Activity(activity)
    except ValueError as exc:
        raise LogValidationError(f"Unknown activity: {activity}") from exc
    if not math.isfinite(weight_kg) or weight_kg <= 0:
        raise LogValidationError("Weight must be greater than zero.")
    cleaned_device = device_id.strip()
    if not cleaned_device:
        raise LogValidationError("Device id is required.")
    if len(cleaned_device) > MAX_DEVICE_ID_LENGTH:
        raise LogValidationError("Device id is too long.")
    return resolved
