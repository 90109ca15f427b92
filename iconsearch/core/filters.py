# core/filters.py

from dataclasses import dataclass, field
from typing import List, Tuple

from iconsearch.core.models import IconEntry, SearchFilters
from iconsearch.core.query_parser import ParsedQuery


def searchable_fields(entry: IconEntry) -> Tuple[str, ...]:
    """Lower-cased text fields that query terms are matched against"""
    return (
        entry.name.lower(),
        (entry.tags or "").lower(),
        (entry.nucleo_tags or "").lower(),
        (entry.set_title or "").lower(),
        (entry.group_title or "").lower(),
    )


@dataclass(frozen=True)
class CandidateFilter:
    """
    Everything that decides whether an entry is a search candidate.

    The store translates the same value into SQL to narrow its fetch;
    matches() is the authoritative check applied to what comes back.
    """
    include: Tuple[str, ...] = ()
    exclude: Tuple[str, ...] = ()
    filters: SearchFilters = field(default_factory=SearchFilters)

    @classmethod
    def from_query(cls, parsed: ParsedQuery, filters: SearchFilters = None) -> 'CandidateFilter':
        return cls(
            include=tuple(parsed.include),
            exclude=tuple(parsed.exclude),
            filters=filters or SearchFilters(),
        )

    def matches(self, entry: IconEntry) -> bool:
        fields = searchable_fields(entry)

        if self.include and not any(term in text for term in self.include for text in fields):
            return False

        for term in self.exclude:
            if any(term in text for text in fields):
                return False

        return self.matches_structure(entry)

    def matches_structure(self, entry: IconEntry) -> bool:
        f = self.filters
        if f.set_name and f.set_name.lower() not in (entry.set_title or "").lower():
            return False
        if f.group_id is not None and entry.group_id != f.group_id:
            return False
        if f.set_id is not None and entry.set_id != f.set_id:
            return False
        return True
