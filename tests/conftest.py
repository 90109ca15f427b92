# tests/conftest.py

import sqlite3
import pytest
from pathlib import Path

from iconsearch.config import SystemConfig
from iconsearch.core.models import IconEntry

SCHEMA = """
CREATE TABLE "groups" (
    id INTEGER PRIMARY KEY,
    title TEXT,
    sizes TEXT,
    icons_count INTEGER
);
CREATE TABLE sets (
    id INTEGER PRIMARY KEY,
    title TEXT,
    icons_count INTEGER,
    local INTEGER,
    demo INTEGER,
    group_id INTEGER
);
CREATE TABLE icons (
    id INTEGER PRIMARY KEY,
    name TEXT,
    tags TEXT,
    nucleo_tags TEXT,
    set_id INTEGER,
    favourite INTEGER,
    width INTEGER,
    height INTEGER
);
"""

GROUPS = [
    (1, "Nucleo UI", "12, 16, 18", 4),
    (2, "Nucleo Core", "24, 32", 4),
]

# Set 30 has NULL group, set 31 the empty string the vendor sometimes stores
SETS = [
    (10, "UI Essential", 4, 1, 0, 1),
    (20, "Core Line", 3, 1, 0, 2),
    (21, "Core Fill", 1, 1, 1, 2),
    (30, "Nucleo Arcade", 1, 1, 0, None),
    (31, "Nucleo Flags", 1, 0, 0, ''),
]

# Icon 11 points at a set that does not exist
ICONS = [
    (1, "arrow-right", "direction,navigate", "", 10, 0, 18, 18),
    (2, "arrow-right", "direction", "", 20, 0, 24, 24),
    (3, "arrow-right", "direction", "", 21, 1, 24, 24),
    (4, "arrow-left", "direction", "", 10, 0, 18, 18),
    (5, "arrow-circle", "round", "", 10, 0, 18, 18),
    (6, "arrow-up", "circle,up", "", 20, 0, 24, 24),
    (7, "home", "house,building", "", 10, 1, 18, 18),
    (8, "house-garden", None, "home", 20, 0, 24, 24),
    (9, "joystick", "game,arcade", "", 30, 0, 32, 32),
    (10, "flag-france", "flag,country", "", 31, 0, 32, 24),
    (11, "orphan-icon", "lonely", "", 99, 0, 16, 16),
]

SVG = ('<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" width="24" height="24">'
       '<rect x="4" y="4" width="16" height="16" fill="black"/></svg>')


def build_catalog(path: Path, groups=GROUPS, sets=SETS, icons=ICONS) -> Path:
    """Write a vendor-style catalog database to path"""
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA)
    conn.executemany('INSERT INTO "groups" VALUES (?, ?, ?, ?)', groups)
    conn.executemany("INSERT INTO sets VALUES (?, ?, ?, ?, ?, ?)", sets)
    conn.executemany("INSERT INTO icons VALUES (?, ?, ?, ?, ?, ?, ?, ?)", icons)
    conn.commit()
    conn.close()
    return path


def make_entry(id, name, tags="", nucleo_tags="", set_id=1, set_title=None,
               group_title=None, group_id=None) -> IconEntry:
    return IconEntry(id=id, name=name, tags=tags, nucleo_tags=nucleo_tags,
                     set_id=set_id, set_title=set_title,
                     group_id=group_id, group_title=group_title)


class FakeStore:
    """In-memory store honouring the candidate filter, ordered by name"""

    def __init__(self, entries):
        self.entries = list(entries)
        self.calls = []

    def search_icons(self, candidate, limit=50):
        self.calls.append(limit)
        rows = [e for e in self.entries if candidate.matches(e)]
        rows.sort(key=lambda e: (e.name, e.id))
        return rows[:limit]


@pytest.fixture
def catalog_path(tmp_path):
    """Default catalog database"""
    return build_catalog(tmp_path / "data.sqlite3")


@pytest.fixture
def asset_root(tmp_path):
    """Asset tree with an SVG for every icon in the default catalog"""
    root = tmp_path / "sets"
    for icon in ICONS:
        icon_id, set_id = icon[0], icon[4]
        folder = root / str(set_id)
        folder.mkdir(parents=True, exist_ok=True)
        (folder / f"{icon_id}.svg").write_text(SVG)
    return root


@pytest.fixture
def config(catalog_path, asset_root):
    """Configuration pointing at the temporary catalog"""
    cfg = SystemConfig()
    cfg.catalog.database_path = str(catalog_path)
    cfg.catalog.icons_path = str(asset_root)
    return cfg
