"""Supabase repository for activity logs."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, time
from typing import Any

from supabase import Client

from compost_logbook.domain.logs import Activity, LogEntry, NewLogEntry
from compost_logbook.domain.reports import ExactSet, LocationSelector
from compost_logbook.services.log_query import LogRepository

LOGS_TABLE = "clb_logs"
PAGE_SIZE = 1000


@dataclass
class SupabaseLogRepository(LogRepository):
    """Supabase implementation for the append-only log table."""

    client: Client

    def insert_log(self, entry: NewLogEntry) -> LogEntry:
        """Insert a log row and return it with its id."""
        response = (
            self.client.table(LOGS_TABLE)
            .insert(
                {
                    "log_date": entry.log_date.isoformat(),
                    "log_time": entry.log_time.isoformat(),
                    "location_id": entry.location_id,
                    "location_name": entry.location_name,
                    "activity": entry.activity.value,
                    "total_weight": entry.weight_kg,
                    "email": entry.email_ciphertext,
                    "email_hash": entry.email_hash,
                    "device_id": entry.device_id,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create log entry")
        return _parse_log(response.data[0])

    def list_logs(
        self, selector: LocationSelector, date_from: date, date_to: date
    ) -> list[LogEntry]:
        """Return logs for the selector within the inclusive date range."""
        if isinstance(selector, ExactSet) and not selector.location_ids:
            return []

        def build_query() -> Any:
            query = (
                self.client.table(LOGS_TABLE)
                .select("*")
                .gte("log_date", date_from.isoformat())
                .lte("log_date", date_to.isoformat())
            )
            if isinstance(selector, ExactSet):
                query = query.in_("location_id", sorted(selector.location_ids))
            return query

        return self._fetch_all(build_query)

    def list_all_logs(self) -> list[LogEntry]:
        """Return every log row."""
        return self._fetch_all(lambda: self.client.table(LOGS_TABLE).select("*"))

    def list_logs_by_email_hash(self, email_hash: str) -> list[LogEntry]:
        """Return logs submitted with the hashed email."""
        return self._fetch_all(
            lambda: self.client.table(LOGS_TABLE)
            .select("*")
            .eq("email_hash", email_hash)
        )

    def list_recent_logs(self, limit: int) -> list[LogEntry]:
        """Return the most recent logs."""
        response = (
            self.client.table(LOGS_TABLE)
            .select("*")
            .order("log_date", desc=True)
            .order("log_time", desc=True)
            .order("id", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_log(row) for row in response.data or []]

    def _fetch_all(self, build_query: Callable[[], Any]) -> list[LogEntry]:
        # PostgREST caps result sizes, so read the table in id-ordered pages.
        logs: list[LogEntry] = []
        start = 0
        while True:
            response = (
                build_query()
                .order("id", desc=False)
                .range(start, start + PAGE_SIZE - 1)
                .execute()
            )
            rows = response.data or []
            logs.extend(_parse_log(row) for row in rows)
            if len(rows) < PAGE_SIZE:
                return logs
            start += PAGE_SIZE


def _parse_log(row: dict[str, object]) -> LogEntry:
    return LogEntry(
        id=int(row["id"]),
        log_date=date.fromisoformat(str(row["log_date"])),
        log_time=time.fromisoformat(str(row.get("log_time") or "00:00:00")),
        location_id=int(row.get("location_id", 0)),
        location_name=str(row.get("location_name") or ""),
        activity=_parse_activity(row.get("activity")),
        weight_kg=float(row.get("total_weight", 0.0)),
        device_id=str(row.get("device_id") or ""),
        email_ciphertext=row.get("email") or None,
        email_hash=row.get("email_hash") or None,
    )


def _parse_activity(raw: object) -> Activity:
    # Anything that is not an input counts as harvested output.
    return Activity.INPUT if raw == Activity.INPUT.value else Activity.OUTPUT
