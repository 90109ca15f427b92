# core/models.py

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Mapping, Any


@dataclass
class IconEntry:
    """One catalog row: a single icon asset in one style variant"""
    id: int
    name: str
    tags: str = ""
    nucleo_tags: str = ""
    set_id: int = 0
    favourite: bool = False
    width: int = 0
    height: int = 0
    set_title: Optional[str] = None
    group_id: Optional[int] = None
    group_title: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'IconEntry':
        """Build an entry from a joined icons/sets/groups row"""
        return cls(
            id=row['id'],
            name=row['name'] or "",
            tags=row['tags'] or "",
            nucleo_tags=row['nucleo_tags'] or "",
            set_id=row['set_id'],
            favourite=bool(row['favourite']),
            width=row['width'] or 0,
            height=row['height'] or 0,
            set_title=row['set_title'],
            group_id=_optional_id(row['group_id']),
            group_title=row['group_title'],
        )


@dataclass
class IconSet:
    """Named collection of entries, usually one style at one size"""
    id: int
    title: str
    icons_count: int = 0  # cached by the vendor, not recounted
    local: bool = False
    demo: bool = False
    group_id: Optional[int] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'IconSet':
        return cls(
            id=row['id'],
            title=row['title'] or "",
            icons_count=row['icons_count'] or 0,
            local=bool(row['local']),
            demo=bool(row['demo']),
            group_id=_optional_id(row['group_id']),
        )


@dataclass
class IconGroup:
    """Style family spanning several sets"""
    id: int
    title: str
    sizes: str = ""
    icons_count: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'IconGroup':
        return cls(
            id=row['id'],
            title=row['title'] or "",
            sizes=row['sizes'] or "",
            icons_count=row['icons_count'] or 0,
        )


@dataclass
class ScoredEntry:
    """Catalog entry with its relevance to one query"""
    entry: IconEntry
    score: int = 0


@dataclass
class StyleDescriptor:
    """One style variant available for a clustered icon"""
    group_title: str
    set_title: str
    entry_id: int
    set_id: int
    asset_path: Path


@dataclass
class IconCluster:
    """Entries sharing one icon name, merged across style variants"""
    name: str
    tags: str = ""
    styles: List[StyleDescriptor] = field(default_factory=list)
    score: int = 0


@dataclass(frozen=True)
class SearchFilters:
    """Structural filters applied alongside query terms"""
    set_name: Optional[str] = None
    group_id: Optional[int] = None
    set_id: Optional[int] = None


@dataclass
class CatalogStats:
    total_icons: int
    total_sets: int


def _optional_id(value) -> Optional[int]:
    # ungrouped sets store either NULL or an empty string
    if value is None or value == '':
        return None
    return int(value)
