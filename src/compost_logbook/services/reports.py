"""Report creation and report views."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from compost_logbook.domain.errors import ReportNotFoundError, ReportValidationError
from compost_logbook.domain.reports import (
    OPEN_END,
    OPEN_START,
    AllLocations,
    CategoryFilter,
    LocationFilter,
    LocationIdSet,
    ReportSpec,
)
from compost_logbook.domain.stats import ReportResult
from compost_logbook.services.aggregation import AggregationService
from compost_logbook.services.filters import FilterResolver
from compost_logbook.services.identity import IdentityService
from compost_logbook.services.log_query import LogQueryService, newest_first
from compost_logbook.services.privacy import hash_email, is_plausible_email

_logger = logging.getLogger(__name__)


class ReportRepository(Protocol):
    """Persistence interface for saved reports."""

    def create_report(
        self,
        date_created: date,
        date_from: date,
        date_to: date,
        location_filter: LocationFilter,
    ) -> ReportSpec:
        """Store a report and return it with its id."""

    def get_report(self, report_id: int) -> ReportSpec | None:
        """Return a report by id, if present."""

    def list_reports(self) -> list[ReportSpec]:
        """Return all reports, newest first."""


@dataclass(frozen=True)
class ReportView:
    """A saved report together with its computed result."""

    report: ReportSpec
    result: ReportResult


@dataclass
class ReportService:
    """Creates reports and computes their results on demand."""

    repository: ReportRepository
    log_query: LogQueryService
    filters: FilterResolver
    identity: IdentityService
    aggregation: AggregationService
    timezone_name: str = "Europe/Amsterdam"

    def create_report(
        self,
        location_filter: LocationFilter,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ReportSpec:
        """Validate and store a report; missing bounds become open bounds."""
        self._validate_filter(location_filter)
        resolved_from = date_from or OPEN_START
        resolved_to = date_to or OPEN_END
        _validate_period(resolved_from, resolved_to)
        report = self.repository.create_report(
            date_created=datetime.now(tz=ZoneInfo(self.timezone_name)).date(),
            date_from=resolved_from,
            date_to=resolved_to,
            location_filter=location_filter,
        )
        _logger.info(
            "Report created: id=%s filter=%s",
            report.id,
            type(location_filter).__name__,
        )
        return report

    def get_report(self, report_id: int) -> ReportSpec:
        """Return a report or raise ReportNotFoundError."""
        report = self.repository.get_report(report_id)
        if report is None:
            raise ReportNotFoundError(f"Report {report_id} does not exist.")
        return report

    def list_reports(self) -> list[ReportSpec]:
        """Return saved reports, newest first."""
        return sorted(self.repository.list_reports(), key=lambda r: r.id, reverse=True)

    def build_report(self, report_id: int) -> ReportView:
        """Compute the result of a saved report against current data."""
        report = self.get_report(report_id)
        selector = self.filters.resolve_locations(report.location_filter)
        logs = self.log_query.fetch_logs(selector, report.date_from, report.date_to)
        mapping = self.identity.build_mapping(
            self.log_query.repository.list_all_logs()
        )
        result = self.aggregation.aggregate(logs, report.location_filter, mapping)
        _logger.info(
            "Report built: id=%s logs=%s grouping=%s",
            report.id,
            result.totals.total,
            result.grouping,
        )
        return ReportView(report=report, result=result)

    def build_email_report(self, email: str) -> ReportResult:
        """Compute a location-grouped report of everything logged with an email."""
        email_hash = hash_email(email)
        if email_hash is None or not is_plausible_email(email.strip()):
            raise ReportValidationError("Email address is not valid.")
        logs = newest_first(
            self.log_query.repository.list_logs_by_email_hash(email_hash)
        )
        mapping = self.identity.build_mapping(
            self.log_query.repository.list_all_logs()
        )
        return self.aggregation.aggregate(logs, AllLocations(), mapping)

    def _validate_filter(self, location_filter: LocationFilter) -> None:
        match location_filter:
            case LocationIdSet(location_ids=location_ids):
                if not location_ids:
                    raise ReportValidationError("Select at least one location.")
                if any(location_id <= 0 for location_id in location_ids):
                    raise ReportValidationError("Location ids must be positive.")
            case CategoryFilter(terms=terms):
                if not terms:
                    raise ReportValidationError("Select at least one category.")
                for term in terms:
                    label = self.filters.taxonomy.describe_term(
                        term.taxonomy, term.term_id
                    )
                    if label is None:
                        raise ReportValidationError(
                            f"Unknown category: {term.taxonomy}|{term.term_id}"
                        )


def _validate_period(date_from: date, date_to: date) -> None:
    if date_from > date_to:
        raise ReportValidationError("The start date must not be after the end date.")
    if date_from < OPEN_START or date_to > OPEN_END:
        raise ReportValidationError("Dates are outside the supported range.")
