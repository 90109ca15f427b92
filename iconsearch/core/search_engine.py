# core/search_engine.py

import logging
from typing import List, Optional

from iconsearch.config import SearchConfig
from iconsearch.core.asset_paths import AssetResolver
from iconsearch.core.clustering import cluster_entries
from iconsearch.core.filters import CandidateFilter
from iconsearch.core.models import IconCluster, ScoredEntry, SearchFilters
from iconsearch.core.query_parser import parse_query
from iconsearch.core.scoring import score_entry

logger = logging.getLogger(__name__)


def rank_key(scored: ScoredEntry):
    """Score descending, then name and id ascending"""
    return (-scored.score, scored.entry.name, scored.entry.id)


class IconSearchEngine:
    """
    Ranked search over the icon catalog

    The store can only filter, so each query over-fetches candidates,
    scores them here and keeps the best `limit`.
    """

    def __init__(self, store, resolver: AssetResolver, config: Optional[SearchConfig] = None):
        self.store = store
        self.resolver = resolver
        self.config = config or SearchConfig()

    def search(self,
               query: str,
               filters: Optional[SearchFilters] = None,
               limit: Optional[int] = None) -> List[ScoredEntry]:
        """
        Flat ranked search

        Args:
            query: Free text; "-term" excludes entries mentioning term
            filters: Optional set name / group id / set id restrictions
            limit: Maximum number of results (config default when None)

        Returns:
            Entries ordered by score, ties by name
        """
        if limit is None:
            limit = self.config.default_limit
        if limit <= 0:
            return []

        parsed = parse_query(query)
        candidate = CandidateFilter.from_query(parsed, filters)

        fetch_cap = limit * max(self.config.search_overfetch, 1)
        rows = self.store.search_icons(candidate, fetch_cap)

        scored = [
            ScoredEntry(entry=entry, score=score_entry(entry, candidate.include))
            for entry in rows
            if candidate.matches(entry)
        ]
        scored.sort(key=rank_key)

        logger.info("search %r: %d candidates, returning %d",
                    query, len(scored), min(len(scored), limit))
        return scored[:limit]

    def search_clustered(self,
                         query: str,
                         filters: Optional[SearchFilters] = None,
                         limit: Optional[int] = None) -> List[IconCluster]:
        """
        Ranked search grouped by icon name across style variants

        Clustering collapses rows, so a larger ranked pool is gathered
        first. When the pool was full but still produced fewer than
        `limit` clusters, the pool is doubled and clustering repeated.
        """
        if limit is None:
            limit = self.config.default_limit
        if limit <= 0:
            return []

        pool_size = limit * max(self.config.cluster_overfetch, 1)
        clusters: List[IconCluster] = []

        for _ in range(max(self.config.cluster_widen_rounds, 0) + 1):
            pool = self.search(query, filters, pool_size)
            clusters = cluster_entries(pool, limit, self.resolver)

            if len(clusters) >= limit or len(pool) < pool_size:
                break

            logger.debug("Only %d clusters from a full pool of %d, widening",
                         len(clusters), pool_size)
            pool_size *= 2

        return clusters
