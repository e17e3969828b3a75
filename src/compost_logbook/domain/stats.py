"""Domain models for report statistics."""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from compost_logbook.domain.logs import LogEntry

Grouping = Literal["location", "category"]


@dataclass(frozen=True)
class IdentityMapping:
    """Device and email associations derived from the full log history."""

    email_to_devices: dict[str, frozenset[str]] = field(default_factory=dict)
    device_to_email: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ActivityTotals:
    """Counts and weights for a set of logs."""

    total: int
    input_count: int
    output_count: int
    total_input_weight: float
    total_output_weight: float
    unique_users: int


EMPTY_TOTALS = ActivityTotals(
    total=0,
    input_count=0,
    output_count=0,
    total_input_weight=0.0,
    total_output_weight=0.0,
    unique_users=0,
)


@dataclass(frozen=True)
class LocationGroup:
    """Logs and totals for a single location."""

    location_id: int
    name: str
    totals: ActivityTotals
    logs: tuple[LogEntry, ...]


@dataclass(frozen=True)
class CategoryGroup:
    """Locations and totals for a single taxonomy term."""

    taxonomy: str
    term_id: int
    name: str
    taxonomy_label: str
    totals: ActivityTotals
    locations: tuple[LocationGroup, ...]


@dataclass(frozen=True)
class ReportResult:
    """Fully resolved report output."""

    totals: ActivityTotals
    location_names: tuple[str, ...]
    most_active_location_name: str | None
    grouping: Grouping
    locations: tuple[LocationGroup, ...] = ()
    categories: tuple[CategoryGroup, ...] = ()
    first_log_date: date | None = None
    last_log_date: date | None = None
