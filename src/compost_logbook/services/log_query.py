"""Log storage interface and the report log query."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol

from compost_logbook.domain.logs import LogEntry, NewLogEntry
from compost_logbook.domain.reports import ExactSet, LocationSelector


class LogRepository(Protocol):
    """Persistence interface for activity logs."""

    def insert_log(self, entry: NewLogEntry) -> LogEntry:
        """Store a log entry and return it with its id."""

    def list_logs(
        self, selector: LocationSelector, date_from: date, date_to: date
    ) -> list[LogEntry]:
        """Return logs for the selector within the inclusive date range."""

    def list_all_logs(self) -> list[LogEntry]:
        """Return every stored log."""

    def list_logs_by_email_hash(self, email_hash: str) -> list[LogEntry]:
        """Return logs submitted with the hashed email."""

    def list_recent_logs(self, limit: int) -> list[LogEntry]:
        """Return the most recent logs."""


def newest_first(logs: list[LogEntry]) -> list[LogEntry]:
    """Order logs by date, then time, then id, newest first."""
    return sorted(
        logs, key=lambda log: (log.log_date, log.log_time, log.id), reverse=True
    )


@dataclass
class LogQueryService:
    """Fetches the logs a report covers."""

    repository: LogRepository

    def fetch_logs(
        self, selector: LocationSelector, date_from: date, date_to: date
    ) -> list[LogEntry]:
        """Return logs for the selector and inclusive range, newest first."""
        if isinstance(selector, ExactSet) and not selector.location_ids:
            return []
        return newest_first(self.repository.list_logs(selector, date_from, date_to))
