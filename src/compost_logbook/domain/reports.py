"""Domain models for saved reports and location filters."""

from dataclasses import dataclass
from datetime import date

# Open report bounds are stored as literal dates so range queries stay uniform.
OPEN_START = date(1900, 1, 1)
OPEN_END = date(3025, 1, 1)


@dataclass(frozen=True)
class AllLocations:
    """Filter matching every location."""


@dataclass(frozen=True)
class LocationIdSet:
    """Filter matching an explicit set of location ids."""

    location_ids: frozenset[int]


@dataclass(frozen=True)
class CategoryTerm:
    """A single taxonomy term selected for a report."""

    taxonomy: str
    term_id: int


@dataclass(frozen=True)
class CategoryFilter:
    """Filter matching locations that carry any of the selected terms."""

    terms: tuple[CategoryTerm, ...]

    def terms_by_taxonomy(self) -> dict[str, list[int]]:
        """Group selected term ids per taxonomy, keeping first-seen order."""
        grouped: dict[str, list[int]] = {}
        for term in self.terms:
            term_ids = grouped.setdefault(term.taxonomy, [])
            if term.term_id not in term_ids:
                term_ids.append(term.term_id)
        return grouped


LocationFilter = AllLocations | LocationIdSet | CategoryFilter


@dataclass(frozen=True)
class Unrestricted:
    """Selector without a location predicate."""


@dataclass(frozen=True)
class ExactSet:
    """Selector restricted to the given location ids."""

    location_ids: frozenset[int]


LocationSelector = Unrestricted | ExactSet


@dataclass(frozen=True)
class ReportSpec:
    """Saved report definition."""

    id: int
    date_created: date
    date_from: date
    date_to: date
    location_filter: LocationFilter

    @property
    def is_open_start(self) -> bool:
        """Return True when the report starts at the first log."""
        return self.date_from == OPEN_START

    @property
    def is_open_end(self) -> bool:
        """Return True when the report runs until now."""
        return self.date_to == OPEN_END


@dataclass(frozen=True)
class TermLabel:
    """Display names for a taxonomy term."""

    taxonomy: str
    term_id: int
    name: str
    taxonomy_label: str
