# components/icon_library.py

import logging
from pathlib import Path
from typing import List, Optional

from iconsearch.config import SystemConfig
from iconsearch.core.asset_paths import AssetResolver
from iconsearch.core.database import IconDatabase
from iconsearch.core.exceptions import AssetMissingError, UnknownFilterError
from iconsearch.core.models import (CatalogStats, IconCluster, IconEntry, IconGroup,
                                    IconSet, ScoredEntry, SearchFilters)
from iconsearch.core.search_engine import IconSearchEngine

logger = logging.getLogger(__name__)


class IconLibrary:
    """
    Entry point for commands: search, lookups, stats and asset paths

    Owns exactly one catalog handle, opened on construction and released
    by close() or on leaving a `with` block.
    """

    def __init__(self, config: Optional[SystemConfig] = None, database: Optional[IconDatabase] = None):
        self.config = config or SystemConfig()
        self.database = database or IconDatabase(self.config.catalog.database_file())
        self.resolver = AssetResolver(self.config.catalog.icons_dir(),
                                      self.config.catalog.asset_extension)
        self.engine = IconSearchEngine(self.database, self.resolver, self.config.search)

    def search(self, query: str, filters: Optional[SearchFilters] = None,
               limit: Optional[int] = None) -> List[ScoredEntry]:
        return self.engine.search(query, filters, limit)

    def search_clustered(self, query: str, filters: Optional[SearchFilters] = None,
                         limit: Optional[int] = None) -> List[IconCluster]:
        return self.engine.search_clustered(query, filters, limit)

    def resolve_asset_path(self, entry: IconEntry) -> Path:
        return self.resolver.resolve_entry(entry)

    def existing_asset_path(self, entry: IconEntry) -> Path:
        """Asset path for an entry, raising AssetMissingError if absent"""
        path = self.resolve_asset_path(entry)
        if not path.is_file():
            raise AssetMissingError(path)
        return path

    def stats(self, group_id: Optional[int] = None) -> CatalogStats:
        return self.database.get_stats(group_id)

    def resolve_group_filter(self, name: str) -> SearchFilters:
        """
        Turn a group/collection name into structural filters.

        Style families are matched first by title substring; failing that,
        specialty collections (sets without a group) are tried.
        """
        needle = name.lower()
        groups = self.database.get_groups()
        for group in groups:
            if needle in group.title.lower():
                return SearchFilters(group_id=group.id)

        specialty = self.database.get_ungrouped_sets()
        for icon_set in specialty:
            if needle in icon_set.title.lower():
                return SearchFilters(set_id=icon_set.id)

        raise UnknownFilterError(name,
                                 [g.title for g in groups],
                                 [s.title for s in specialty])

    def get_icon(self, name: str) -> Optional[IconEntry]:
        return self.database.get_icon_by_name(name)

    def get_icon_by_id(self, icon_id: int) -> Optional[IconEntry]:
        return self.database.get_icon_by_id(icon_id)

    def sets(self, group_id: Optional[int] = None) -> List[IconSet]:
        return self.database.get_sets(group_id)

    def groups(self) -> List[IconGroup]:
        return self.database.get_groups()

    def specialty_sets(self) -> List[IconSet]:
        return self.database.get_ungrouped_sets()

    def icons_in_set(self, set_id: int, limit: int = 100) -> List[IconEntry]:
        return self.database.get_icons_from_set(set_id, limit)

    def close(self):
        self.database.close()

    def __enter__(self) -> 'IconLibrary':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
