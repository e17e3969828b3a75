"""Supabase repository for saved reports."""

import json
from dataclasses import dataclass
from datetime import date

from supabase import Client

from compost_logbook.domain.reports import (
    AllLocations,
    CategoryFilter,
    CategoryTerm,
    LocationFilter,
    LocationIdSet,
    ReportSpec,
)
from compost_logbook.services.reports import ReportRepository

REPORTS_TABLE = "clb_reports"
ALL_LOCATIONS = "all"


@dataclass
class SupabaseReportRepository(ReportRepository):
    """Supabase-backed report storage.

    Filters are stored as two JSON text columns: ``locations`` holds
    ``"all"`` or a list of location ids, and ``taxonomy_terms`` holds
    ``{"terms": [{"taxonomy": ..., "term_id": ...}]}`` for category reports.
    """

    client: Client

    def create_report(
        self,
        date_created: date,
        date_from: date,
        date_to: date,
        location_filter: LocationFilter,
    ) -> ReportSpec:
        """Insert a report row and return it."""
        locations_json, taxonomy_json = _encode_filter(location_filter)
        response = (
            self.client.table(REPORTS_TABLE)
            .insert(
                {
                    "date_made": date_created.isoformat(),
                    "date_from": date_from.isoformat(),
                    "date_to": date_to.isoformat(),
                    "locations": locations_json,
                    "taxonomy_terms": taxonomy_json,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create report")
        return _parse_report(response.data[0])

    def get_report(self, report_id: int) -> ReportSpec | None:
        """Return a report by id, if present."""
        response = (
            self.client.table(REPORTS_TABLE)
            .select("*")
            .eq("id", report_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_report(response.data[0])

    def list_reports(self) -> list[ReportSpec]:
        """Return all reports, newest first."""
        response = (
            self.client.table(REPORTS_TABLE)
            .select("*")
            .order("id", desc=True)
            .execute()
        )
        return [_parse_report(row) for row in response.data or []]


def _encode_filter(location_filter: LocationFilter) -> tuple[str, str | None]:
    match location_filter:
        case LocationIdSet(location_ids=location_ids):
            return json.dumps(sorted(location_ids)), None
        case CategoryFilter(terms=terms):
            payload = {
                "terms": [
                    {"taxonomy": term.taxonomy, "term_id": term.term_id}
                    for term in terms
                ]
            }
            return json.dumps(ALL_LOCATIONS), json.dumps(payload)
    return json.dumps(ALL_LOCATIONS), None


def _decode_filter(locations_raw: object, taxonomy_raw: object) -> LocationFilter:
    if isinstance(taxonomy_raw, str) and taxonomy_raw:
        taxonomy_data = json.loads(taxonomy_raw)
        terms = taxonomy_data.get("terms") if isinstance(taxonomy_data, dict) else None
        if terms:
            return CategoryFilter(
                terms=tuple(
                    CategoryTerm(
                        taxonomy=str(term["taxonomy"]), term_id=int(term["term_id"])
                    )
                    for term in terms
                )
            )
    locations = json.loads(locations_raw) if isinstance(locations_raw, str) else None
    if isinstance(locations, list):
        ids = (int(value) for value in locations)
        return LocationIdSet(location_ids=frozenset(i for i in ids if i > 0))
    return AllLocations()


def _parse_report(row: dict[str, object]) -> ReportSpec:
    return ReportSpec(
        id=int(row["id"]),
        date_created=date.fromisoformat(str(row["date_made"])),
        date_from=date.fromisoformat(str(row["date_from"])),
        date_to=date.fromisoformat(str(row["date_to"])),
        location_filter=_decode_filter(row.get("locations"), row.get("taxonomy_terms")),
    )
