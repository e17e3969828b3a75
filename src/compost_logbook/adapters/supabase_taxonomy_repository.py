"""Supabase repository for location categories."""

from dataclasses import dataclass

from supabase import Client

from compost_logbook.domain.reports import TermLabel
from compost_logbook.services.filters import TaxonomyRepository

LOCATION_TERMS_TABLE = "clb_location_terms"
TERMS_TABLE = "clb_terms"


@dataclass
class SupabaseTaxonomyRepository(TaxonomyRepository):
    """Reads term assignments and labels."""

    client: Client

    def terms_for_location(self, location_id: int, taxonomy: str) -> list[int]:
        """Return the term ids assigned to a location in a taxonomy."""
        response = (
            self.client.table(LOCATION_TERMS_TABLE)
            .select("term_id")
            .eq("location_id", location_id)
            .eq("taxonomy", taxonomy)
            .execute()
        )
        return [int(row["term_id"]) for row in response.data or []]

    def locations_for_terms(self, taxonomy: str, term_ids: list[int]) -> list[int]:
        """Return location ids carrying any of the term ids."""
        if not term_ids:
            return []
        response = (
            self.client.table(LOCATION_TERMS_TABLE)
            .select("location_id")
            .eq("taxonomy", taxonomy)
            .in_("term_id", term_ids)
            .execute()
        )
        location_ids: list[int] = []
        for row in response.data or []:
            location_id = int(row["location_id"])
            if location_id not in location_ids:
                location_ids.append(location_id)
        return location_ids

    def describe_term(self, taxonomy: str, term_id: int) -> TermLabel | None:
        """Return display names for a term, if it exists."""
        response = (
            self.client.table(TERMS_TABLE)
            .select("taxonomy, term_id, name, taxonomy_label")
            .eq("taxonomy", taxonomy)
            .eq("term_id", term_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return TermLabel(
            taxonomy=taxonomy,
            term_id=term_id,
            name=str(row.get("name") or ""),
            taxonomy_label=str(row.get("taxonomy_label") or taxonomy),
        )
