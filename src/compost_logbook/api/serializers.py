"""JSON serialization of domain values for API responses."""

from compost_logbook.domain.logs import LogEntry
from compost_logbook.domain.reports import (
    AllLocations,
    CategoryFilter,
    LocationFilter,
    LocationIdSet,
    ReportSpec,
)
from compost_logbook.domain.stats import (
    ActivityTotals,
    CategoryGroup,
    LocationGroup,
    ReportResult,
)
from compost_logbook.services.logbook import LogListing


def serialize_log(log: LogEntry) -> dict[str, object]:
    """Serialize a log without its email fields."""
    return {
        "id": log.id,
        "date": log.log_date.isoformat(),
        "time": log.log_time.isoformat(),
        "location_id": log.location_id,
        "location_name": log.location_name,
        "activity": log.activity.value,
        "weight_kg": log.weight_kg,
    }


def serialize_listing(listing: LogListing) -> dict[str, object]:
    """Serialize a log for the admin listing with device id and masked email."""
    return {
        **serialize_log(listing.entry),
        "device_id": listing.entry.device_id,
        "email": listing.masked_email,
    }


def serialize_filter(location_filter: LocationFilter) -> dict[str, object]:
    """Serialize a location filter as a tagged dict."""
    match location_filter:
        case AllLocations():
            return {"type": "all"}
        case LocationIdSet(location_ids=location_ids):
            return {"type": "selected", "location_ids": sorted(location_ids)}
        case CategoryFilter(terms=terms):
            return {
                "type": "categories",
                "terms": [
                    {"taxonomy": term.taxonomy, "term_id": term.term_id}
                    for term in terms
                ],
            }
    raise TypeError(f"Unsupported location filter: {location_filter!r}")


def serialize_report(report: ReportSpec) -> dict[str, object]:
    """Serialize a saved report; open bounds are returned as null."""
    return {
        "id": report.id,
        "date_created": report.date_created.isoformat(),
        "date_from": None if report.is_open_start else report.date_from.isoformat(),
        "date_to": None if report.is_open_end else report.date_to.isoformat(),
        "filter": serialize_filter(report.location_filter),
    }


def serialize_totals(totals: ActivityTotals) -> dict[str, object]:
    """Serialize the activity totals of a report or group."""
    return {
        "total": totals.total,
        "input_count": totals.input_count,
        "output_count": totals.output_count,
        "total_input_weight": totals.total_input_weight,
        "total_output_weight": totals.total_output_weight,
        "unique_users": totals.unique_users,
    }


def _serialize_location_group(group: LocationGroup) -> dict[str, object]:
    return {
        "location_id": group.location_id,
        "name": group.name,
        "totals": serialize_totals(group.totals),
        "logs": [serialize_log(log) for log in group.logs],
    }


def _serialize_category_group(group: CategoryGroup) -> dict[str, object]:
    return {
        "taxonomy": group.taxonomy,
        "taxonomy_label": group.taxonomy_label,
        "term_id": group.term_id,
        "name": group.name,
        "totals": serialize_totals(group.totals),
        "locations": [_serialize_location_group(loc) for loc in group.locations],
    }


def serialize_result(result: ReportResult) -> dict[str, object]:
    """Serialize a report result with its grouped breakdown."""
    return {
        "totals": serialize_totals(result.totals),
        "location_names": list(result.location_names),
        "most_active_location_name": result.most_active_location_name,
        "grouping": result.grouping,
        "locations": [_serialize_location_group(group) for group in result.locations],
        "categories": [
            _serialize_category_group(group) for group in result.categories
        ],
        "first_log_date": result.first_log_date.isoformat()
        if result.first_log_date
        else None,
        "last_log_date": result.last_log_date.isoformat()
        if result.last_log_date
        else None,
    }
