"""Report statistics and grouping."""

import logging
from collections import Counter
from dataclasses import dataclass

from compost_logbook.domain.logs import Activity, LogEntry
from compost_logbook.domain.reports import CategoryFilter, CategoryTerm, LocationFilter
from compost_logbook.domain.stats import (
    ActivityTotals,
    CategoryGroup,
    IdentityMapping,
    LocationGroup,
    ReportResult,
)
from compost_logbook.services.filters import FilterResolver
from compost_logbook.services.identity import IdentityService

_logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = "Unknown location"
UNKNOWN_CATEGORY = "Unknown category"
WEIGHT_DECIMALS = 2


@dataclass
class AggregationService:
    """Builds report results from a fetched log set.

    Ties in activity counts are broken by ascending location id, and for
    categories by ascending (taxonomy, term id).
    """

    identity: IdentityService
    filters: FilterResolver

    def aggregate(
        self,
        logs: list[LogEntry],
        location_filter: LocationFilter,
        mapping: IdentityMapping,
    ) -> ReportResult:
        """Return totals and the grouped breakdown for the logs."""
        names = _location_names(logs)
        common = {
            "totals": self.compute_totals(logs, mapping),
            "location_names": tuple(sorted(set(names.values()))),
            "most_active_location_name": _most_active_location(logs, names),
            "first_log_date": min((log.log_date for log in logs), default=None),
            "last_log_date": max((log.log_date for log in logs), default=None),
        }
        if isinstance(location_filter, CategoryFilter):
            return ReportResult(
                grouping="category",
                categories=self.group_by_category(
                    logs, location_filter, mapping, names
                ),
                **common,
            )
        return ReportResult(
            grouping="location",
            locations=self.group_by_location(logs, mapping, names),
            **common,
        )

    def compute_totals(
        self, logs: list[LogEntry], mapping: IdentityMapping
    ) -> ActivityTotals:
        """Return counts, weights and unique users for a log subset."""
        input_count = 0
        output_count = 0
        input_weight = 0.0
        output_weight = 0.0
        for log in logs:
            if log.activity == Activity.INPUT:
                input_count += 1
                input_weight += log.weight_kg
            else:
                output_count += 1
                output_weight += log.weight_kg
        return ActivityTotals(
            total=len(logs),
            input_count=input_count,
            output_count=output_count,
            total_input_weight=round(input_weight, WEIGHT_DECIMALS),
            total_output_weight=round(output_weight, WEIGHT_DECIMALS),
            unique_users=self.identity.count_unique_users(
                logs, mapping.device_to_email
            ),
        )

    def group_by_location(
        self,
        logs: list[LogEntry],
        mapping: IdentityMapping,
        names: dict[int, str] | None = None,
    ) -> tuple[LocationGroup, ...]:
        """Partition logs per location, most active first."""
        resolved_names = names if names is not None else _location_names(logs)
        buckets: dict[int, list[LogEntry]] = {}
        for log in logs:
            buckets.setdefault(log.location_id, []).append(log)
        groups = [
            self._location_group(location_id, bucket, mapping, resolved_names)
            for location_id, bucket in buckets.items()
        ]
        groups.sort(key=lambda group: (-group.totals.total, group.location_id))
        return tuple(groups)

    def group_by_category(
        self,
        logs: list[LogEntry],
        location_filter: CategoryFilter,
        mapping: IdentityMapping,
        names: dict[int, str] | None = None,
    ) -> tuple[CategoryGroup, ...]:
        """Fan logs out to every selected category their location belongs to.

        A location matching several categories contributes its logs to each
        of them, so category totals can overlap and need not add up to the
        report total.
        """
        resolved_names = names if names is not None else _location_names(logs)
        memberships: dict[int, list[CategoryTerm]] = {}
        buckets: dict[CategoryTerm, dict[int, list[LogEntry]]] = {}
        for log in logs:
            if log.location_id not in memberships:
                memberships[log.location_id] = self.filters.matching_terms(
                    log.location_id, location_filter
                )
            for term in memberships[log.location_id]:
                buckets.setdefault(term, {}).setdefault(log.location_id, []).append(
                    log
                )

        groups = []
        for term, location_buckets in buckets.items():
            locations = [
                self._location_group(location_id, bucket, mapping, resolved_names)
                for location_id, bucket in location_buckets.items()
            ]
            locations.sort(key=lambda group: (-group.totals.total, group.location_id))
            category_logs = [
                log for bucket in location_buckets.values() for log in bucket
            ]
            name, taxonomy_label = self._term_names(term)
            groups.append(
                CategoryGroup(
                    taxonomy=term.taxonomy,
                    term_id=term.term_id,
                    name=name,
                    taxonomy_label=taxonomy_label,
                    totals=self.compute_totals(category_logs, mapping),
                    locations=tuple(locations),
                )
            )
        groups.sort(
            key=lambda group: (-group.totals.total, group.taxonomy, group.term_id)
        )
        return tuple(groups)

    def _location_group(
        self,
        location_id: int,
        logs: list[LogEntry],
        mapping: IdentityMapping,
        names: dict[int, str],
    ) -> LocationGroup:
        return LocationGroup(
            location_id=location_id,
            name=names.get(location_id, UNKNOWN_LOCATION),
            totals=self.compute_totals(logs, mapping),
            logs=tuple(logs),
        )

    def _term_names(self, term: CategoryTerm) -> tuple[str, str]:
        label = self.filters.taxonomy.describe_term(term.taxonomy, term.term_id)
        if label is None:
            _logger.warning(
                "Missing term label: taxonomy=%s term_id=%s",
                term.taxonomy,
                term.term_id,
            )
            return UNKNOWN_CATEGORY, term.taxonomy
        return label.name, label.taxonomy_label


def _location_names(logs: list[LogEntry]) -> dict[int, str]:
    """Map location ids to their first non-blank name; logs arrive newest first."""
    names: dict[int, str] = {}
    for log in logs:
        name = log.location_name.strip()
        if name and log.location_id not in names:
            names[log.location_id] = name
    for location_id in {log.location_id for log in logs} - names.keys():
        _logger.warning("Logs without location name: location_id=%s", location_id)
        names[location_id] = UNKNOWN_LOCATION
    return names


def _most_active_location(logs: list[LogEntry], names: dict[int, str]) -> str | None:
    counts = Counter(log.location_id for log in logs)
    if not counts:
        return None
    location_id = min(counts, key=lambda key: (-counts[key], key))
    return names.get(location_id, UNKNOWN_LOCATION)
