# core/scoring.py

from typing import Sequence
from iconsearch.core.models import IconEntry

# Points awarded per term; only the best match for a term counts
EXACT_NAME_SCORE = 100
NAME_PREFIX_SCORE = 50
NAME_CONTAINS_SCORE = 30
TAG_SCORE = 10
COLLECTION_SCORE = 5


def score_term(entry: IconEntry, term: str) -> int:
    """Score a single lower-cased term against an entry"""
    name = entry.name.lower()

    if name == term:
        return EXACT_NAME_SCORE
    if name.startswith(term) or name.startswith(term + '-'):
        return NAME_PREFIX_SCORE
    if term in name:
        return NAME_CONTAINS_SCORE

    tags = (entry.tags or "").lower()
    nucleo_tags = (entry.nucleo_tags or "").lower()
    if term in tags or term in nucleo_tags:
        return TAG_SCORE

    set_title = (entry.set_title or "").lower()
    group_title = (entry.group_title or "").lower()
    if term in set_title or term in group_title:
        return COLLECTION_SCORE

    return 0


def score_entry(entry: IconEntry, terms: Sequence[str]) -> int:
    """
    Relevance of an entry to a list of inclusion terms.

    Per-term scores are summed. With several terms, the sum is multiplied
    by how many of them matched, so an entry hitting two terms weakly
    outranks one hitting a single term strongly.
    """
    total = 0
    matched = 0

    for term in terms:
        points = score_term(entry, term)
        if points:
            total += points
            matched += 1

    if len(terms) > 1 and matched > 0:
        total *= matched

    return total
