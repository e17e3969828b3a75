"""Resolution of report location filters into location selectors."""

import logging
from dataclasses import dataclass
from typing import Protocol

from compost_logbook.domain.reports import (
    AllLocations,
    CategoryFilter,
    CategoryTerm,
    ExactSet,
    LocationFilter,
    LocationIdSet,
    LocationSelector,
    TermLabel,
    Unrestricted,
)

_logger = logging.getLogger(__name__)


class TaxonomyRepository(Protocol):
    """Read interface for location categories."""

    def terms_for_location(self, location_id: int, taxonomy: str) -> list[int]:
        """Return the term ids assigned to a location in a taxonomy."""

    def locations_for_terms(self, taxonomy: str, term_ids: list[int]) -> list[int]:
        """Return location ids carrying any of the term ids."""

    def describe_term(self, taxonomy: str, term_id: int) -> TermLabel | None:
        """Return display names for a term, if it exists."""


@dataclass
class FilterResolver:
    """Turns saved filters into concrete location selectors."""

    taxonomy: TaxonomyRepository

    def resolve_locations(self, location_filter: LocationFilter) -> LocationSelector:
        """Return the selector for a filter; categories resolve against current data."""
        match location_filter:
            case AllLocations():
                return Unrestricted()
            case LocationIdSet(location_ids=location_ids):
                return ExactSet(frozenset(location_ids))
            case CategoryFilter():
                return ExactSet(self._locations_for_categories(location_filter))
        raise TypeError(f"Unsupported location filter: {location_filter!r}")

    def matching_terms(
        self, location_id: int, location_filter: CategoryFilter
    ) -> list[CategoryTerm]:
        """Return the selected terms a location currently carries."""
        matches: list[CategoryTerm] = []
        for taxonomy, term_ids in location_filter.terms_by_taxonomy().items():
            assigned = set(self.taxonomy.terms_for_location(location_id, taxonomy))
            matches.extend(
                CategoryTerm(taxonomy=taxonomy, term_id=term_id)
                for term_id in term_ids
                if term_id in assigned
            )
        return matches

    def _locations_for_categories(
        self, location_filter: CategoryFilter
    ) -> frozenset[int]:
        location_ids: set[int] = set()
        for taxonomy, term_ids in location_filter.terms_by_taxonomy().items():
            location_ids.update(self.taxonomy.locations_for_terms(taxonomy, term_ids))
        if not location_ids:
            _logger.info(
                "Category filter matched no locations: terms=%s",
                len(location_filter.terms),
            )
        return frozenset(location_ids)
