# core/clustering.py

from typing import Dict, Iterable, List, Tuple

from iconsearch.core.asset_paths import AssetResolver
from iconsearch.core.models import IconCluster, IconEntry, ScoredEntry, StyleDescriptor


def style_labels(entry: IconEntry) -> Tuple[str, str]:
    """(group label, set label) shown for an entry's style variant"""
    set_label = entry.set_title or f"Set {entry.set_id}"
    group_label = entry.group_title or set_label
    return group_label, set_label


def cluster_entries(ranked: Iterable[ScoredEntry],
                    limit: int,
                    resolver: AssetResolver) -> List[IconCluster]:
    """
    Merge ranked entries that share an icon name into clusters.

    The first entry seen for a name supplies the cluster's tags. Each
    distinct (group, set) style is listed once, in ranked order, and the
    cluster keeps the best score of its members. Clusters are ordered by
    that score, then by name.
    """
    clusters: Dict[str, IconCluster] = {}
    seen_styles: Dict[str, set] = {}

    for scored in ranked:
        entry = scored.entry
        cluster = clusters.get(entry.name)

        if cluster is None:
            cluster = IconCluster(
                name=entry.name,
                tags=entry.tags or entry.nucleo_tags or "",
                score=scored.score,
            )
            clusters[entry.name] = cluster
            seen_styles[entry.name] = set()

        group_label, set_label = style_labels(entry)
        if (group_label, set_label) not in seen_styles[entry.name]:
            seen_styles[entry.name].add((group_label, set_label))
            cluster.styles.append(StyleDescriptor(
                group_title=group_label,
                set_title=set_label,
                entry_id=entry.id,
                set_id=entry.set_id,
                asset_path=resolver.resolve_entry(entry),
            ))

        cluster.score = max(cluster.score, scored.score)

    ordered = sorted(clusters.values(), key=lambda c: (-c.score, c.name))
    return ordered[:max(limit, 0)]
