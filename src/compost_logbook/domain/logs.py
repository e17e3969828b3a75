"""Domain models for composting activity logs."""

from dataclasses import dataclass
from datetime import date, time
from enum import StrEnum


class Activity(StrEnum):
    """Kind of composting activity."""

    INPUT = "input"
    OUTPUT = "output"


@dataclass(frozen=True)
class NewLogEntry:
    """Log entry payload before it is stored."""

    log_date: date
    log_time: time
    location_id: int
    location_name: str
    activity: Activity
    weight_kg: float
    device_id: str
    email_ciphertext: str | None = None
    email_hash: str | None = None


@dataclass(frozen=True)
class LogEntry:
    """Stored, immutable activity log entry."""

    id: int
    log_date: date
    log_time: time
    location_id: int
    location_name: str
    activity: Activity
    weight_kg: float
    device_id: str
    email_ciphertext: str | None = None
    email_hash: str | None = None
