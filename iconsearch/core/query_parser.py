# core/query_parser.py

from dataclasses import dataclass, field
from typing import List


@dataclass
class ParsedQuery:
    """Query split into terms that must and must not match"""
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)


def parse_query(query: str) -> ParsedQuery:
    """
    Split a raw query into lower-cased inclusion and exclusion terms.

    A token prefixed with '-' excludes the rest of the token, so
    "arrow -circle" includes "arrow" and excludes "circle". A lone '-'
    has nothing to exclude and is kept as an inclusion term.
    """
    parsed = ParsedQuery()

    for token in (query or "").lower().split():
        if token.startswith('-') and len(token) > 1:
            parsed.exclude.append(token[1:])
        else:
            parsed.include.append(token)

    return parsed
