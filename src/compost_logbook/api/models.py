"""Pydantic models for API request payloads."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from compost_logbook.domain.reports import (
    AllLocations,
    CategoryFilter,
    CategoryTerm,
    LocationFilter,
    LocationIdSet,
)


class LogSubmission(BaseModel):
    """Activity log submitted from the logging form."""

    location_id: int
    location_name: str
    activity: str
    weight_kg: float
    device_id: str
    email: str | None = None


class CategoryTermPayload(BaseModel):
    """Selected taxonomy term."""

    taxonomy: str
    term_id: int


class ReportCreateRequest(BaseModel):
    """Report definition submitted from the admin form."""

    locations: Literal["all", "selected", "categories"]
    location_ids: list[int] = Field(default_factory=list)
    terms: list[CategoryTermPayload] = Field(default_factory=list)
    date_from: date | None = None
    date_to: date | None = None

    def to_filter(self) -> LocationFilter:
        """Return the location filter described by the request."""
        if self.locations == "selected":
            return LocationIdSet(location_ids=frozenset(self.location_ids))
        if self.locations == "categories":
            return CategoryFilter(
                terms=tuple(
                    CategoryTerm(taxonomy=term.taxonomy, term_id=term.term_id)
                    for term in self.terms
                )
            )
        return AllLocations()
