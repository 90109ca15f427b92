# core/database.py

import logging
import sqlite3
from pathlib import Path
from typing import Optional, List, Tuple

from iconsearch.core.exceptions import StoreUnavailableError
from iconsearch.core.filters import CandidateFilter
from iconsearch.core.models import IconEntry, IconSet, IconGroup, CatalogStats

logger = logging.getLogger(__name__)

ICON_COLUMNS = """
    i.id,
    i.name,
    i.tags,
    i.nucleo_tags,
    i.set_id,
    i.favourite,
    i.width,
    i.height,
    s.title AS set_title,
    s.group_id AS group_id,
    g.title AS group_title
"""

ICON_JOINS = """
    FROM icons i
    LEFT JOIN sets s ON i.set_id = s.id
    LEFT JOIN "groups" g ON s.group_id = g.id
"""

SET_COLUMNS = "id, title, icons_count, local, demo, group_id"

# Columns a query term is matched against, mirroring filters.searchable_fields
SEARCH_COLUMNS = ("i.name", "i.tags", "i.nucleo_tags", "s.title", "g.title")


def _fold(value):
    """Python-side lower-casing; SQLite's lower() folds ASCII only"""
    return None if value is None else str(value).lower()


def _contains(column: str) -> str:
    return f"instr(py_lower(COALESCE({column}, '')), ?) > 0"


def _any_column_contains() -> str:
    return "(" + " OR ".join(_contains(col) for col in SEARCH_COLUMNS) + ")"


def build_where(candidate: CandidateFilter) -> Tuple[str, list]:
    """
    Translate a candidate filter into a parameterized WHERE clause.

    Inclusion terms are OR-ed together, each exclusion term must miss
    every searchable column, and structural filters are AND-ed on.
    """
    clauses = []
    params = []

    if candidate.include:
        clauses.append("(" + " OR ".join(_any_column_contains() for _ in candidate.include) + ")")
        for term in candidate.include:
            params.extend([term] * len(SEARCH_COLUMNS))

    for term in candidate.exclude:
        clauses.append("NOT " + _any_column_contains())
        params.extend([term] * len(SEARCH_COLUMNS))

    f = candidate.filters
    if f.set_name:
        clauses.append(_contains("s.title"))
        params.append(f.set_name.lower())
    if f.group_id is not None:
        clauses.append("s.group_id = ?")
        params.append(f.group_id)
    if f.set_id is not None:
        clauses.append("i.set_id = ?")
        params.append(f.set_id)

    if not clauses:
        return "", params
    return "WHERE " + " AND ".join(clauses), params


class IconDatabase:
    """
    Read-only view of the vendor's SQLite icon catalog.

    One handle per command run; use it as a context manager so the
    connection is released on every exit path. The handle cannot be
    reused once closed.
    """

    def __init__(self, db_path):
        self.db_path = Path(db_path).expanduser()
        self.conn = None
        self._open()

    def _open(self):
        """Open the catalog read-only and check it looks like a catalog"""
        guidance = (
            f"Failed to open icon catalog at {self.db_path}. "
            "Make sure the Nucleo app is installed and you have downloaded the icon library."
        )
        if not self.db_path.is_file():
            raise StoreUnavailableError(guidance)

        try:
            uri = self.db_path.resolve().as_uri() + "?mode=ro"
            self.conn = sqlite3.connect(uri, uri=True)
            self.conn.row_factory = sqlite3.Row
            self.conn.create_function("py_lower", 1, _fold, deterministic=True)
            self.conn.execute("SELECT 1 FROM icons LIMIT 1").fetchone()
        except sqlite3.Error as e:
            self.close()
            raise StoreUnavailableError(f"{guidance} ({e})") from e

        logger.debug("Opened catalog %s", self.db_path)

    def _cursor(self) -> sqlite3.Cursor:
        if self.conn is None:
            raise StoreUnavailableError("Catalog database handle is already closed")
        return self.conn.cursor()

    def search_icons(self, candidate: CandidateFilter, limit: int = 50) -> List[IconEntry]:
        """Fetch up to limit entries passing the candidate filter, ordered by name"""
        where, params = build_where(candidate)
        cursor = self._cursor()

        cursor.execute(f"""
            SELECT {ICON_COLUMNS}
            {ICON_JOINS}
            {where}
            ORDER BY i.name, i.id
            LIMIT ?
        """, (*params, limit))

        entries = [IconEntry.from_row(row) for row in cursor.fetchall()]
        logger.debug("Fetched %d candidate rows (cap %d)", len(entries), limit)
        return entries

    def get_sets(self, group_id: Optional[int] = None) -> List[IconSet]:
        """Get all icon sets, optionally only those of one group"""
        cursor = self._cursor()

        if group_id is not None:
            cursor.execute(f"""
                SELECT {SET_COLUMNS}
                FROM sets
                WHERE group_id = ?
                ORDER BY title
            """, (group_id,))
        else:
            cursor.execute(f"""
                SELECT {SET_COLUMNS}
                FROM sets
                ORDER BY title
            """)

        return [IconSet.from_row(row) for row in cursor.fetchall()]

    def get_groups(self) -> List[IconGroup]:
        """Get all icon groups (style families)"""
        cursor = self._cursor()

        cursor.execute("""
            SELECT id, title, sizes, icons_count
            FROM "groups"
            ORDER BY title
        """)

        return [IconGroup.from_row(row) for row in cursor.fetchall()]

    def get_ungrouped_sets(self) -> List[IconSet]:
        """Get sets that don't belong to any group (specialty collections)"""
        cursor = self._cursor()

        cursor.execute(f"""
            SELECT {SET_COLUMNS}
            FROM sets
            WHERE group_id IS NULL OR group_id = ''
            ORDER BY title
        """)

        return [IconSet.from_row(row) for row in cursor.fetchall()]

    def get_icons_from_set(self, set_id: int, limit: int = 100) -> List[IconEntry]:
        """Get icons from a specific set"""
        cursor = self._cursor()

        cursor.execute(f"""
            SELECT {ICON_COLUMNS}
            {ICON_JOINS}
            WHERE i.set_id = ?
            ORDER BY i.name, i.id
            LIMIT ?
        """, (set_id, limit))

        return [IconEntry.from_row(row) for row in cursor.fetchall()]

    def get_icon_by_name(self, name: str) -> Optional[IconEntry]:
        """Get the first icon with exactly this name"""
        cursor = self._cursor()

        cursor.execute(f"""
            SELECT {ICON_COLUMNS}
            {ICON_JOINS}
            WHERE i.name = ?
            ORDER BY i.id
            LIMIT 1
        """, (name,))

        row = cursor.fetchone()
        return IconEntry.from_row(row) if row else None

    def get_icon_by_id(self, icon_id: int) -> Optional[IconEntry]:
        cursor = self._cursor()

        cursor.execute(f"""
            SELECT {ICON_COLUMNS}
            {ICON_JOINS}
            WHERE i.id = ?
        """, (icon_id,))

        row = cursor.fetchone()
        return IconEntry.from_row(row) if row else None

    def get_stats(self, group_id: Optional[int] = None) -> CatalogStats:
        """Count icons and sets, optionally scoped to one group"""
        cursor = self._cursor()

        if group_id is not None:
            cursor.execute("""
                SELECT COUNT(*) FROM icons i
                JOIN sets s ON i.set_id = s.id
                WHERE s.group_id = ?
            """, (group_id,))
            total_icons = cursor.fetchone()[0]
            cursor.execute("SELECT COUNT(*) FROM sets WHERE group_id = ?", (group_id,))
            total_sets = cursor.fetchone()[0]
        else:
            cursor.execute("SELECT COUNT(*) FROM icons")
            total_icons = cursor.fetchone()[0]
            cursor.execute("SELECT COUNT(*) FROM sets")
            total_sets = cursor.fetchone()[0]

        return CatalogStats(total_icons=total_icons, total_sets=total_sets)

    @property
    def closed(self) -> bool:
        return self.conn is None

    def close(self):
        """Close database connection"""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Closed catalog %s", self.db_path)

    def __enter__(self) -> 'IconDatabase':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
