# tests/test_icon_library.py

from pathlib import Path

import pytest
from iconsearch.components.icon_library import IconLibrary
from iconsearch.core.asset_paths import AssetResolver
from iconsearch.core.exceptions import AssetMissingError, UnknownFilterError
from iconsearch.core.models import SearchFilters


@pytest.fixture
def library(config):
    with IconLibrary(config) as lib:
        yield lib


def test_asset_resolver_layout():
    resolver = AssetResolver("/assets", "svg")
    assert resolver.resolve(10, 1) == Path("/assets/10/1.svg")

    png = AssetResolver("/assets", ".png")
    assert png.resolve(3, 7) == Path("/assets/3/7.png")


def test_resolve_group_by_family(library):
    assert library.resolve_group_filter("core") == SearchFilters(group_id=2)
    assert library.resolve_group_filter("Nucleo UI") == SearchFilters(group_id=1)


def test_resolve_group_falls_back_to_specialty_set(library):
    assert library.resolve_group_filter("arcade") == SearchFilters(set_id=30)
    assert library.resolve_group_filter("FLAGS") == SearchFilters(set_id=31)


def test_unknown_group_lists_alternatives(library):
    with pytest.raises(UnknownFilterError) as excinfo:
        library.resolve_group_filter("glyphs")

    error = excinfo.value
    assert error.groups == ["Nucleo Core", "Nucleo UI"]
    assert error.collections == ["Nucleo Arcade", "Nucleo Flags"]
    assert "Nucleo Arcade" in error.alternatives()


def test_search_through_library(library, asset_root):
    flat = library.search("home")
    assert [r.entry.name for r in flat] == ["home", "house-garden"]
    assert library.resolve_asset_path(flat[0].entry) == asset_root / "10" / "7.svg"

    clusters = library.search_clustered("arrow", library.resolve_group_filter("core"))
    assert [c.name for c in clusters] == ["arrow-right", "arrow-up"]


def test_existing_asset_path(library, asset_root):
    icon = library.get_icon("home")
    assert library.existing_asset_path(icon) == asset_root / "10" / "7.svg"

    (asset_root / "10" / "7.svg").unlink()
    with pytest.raises(AssetMissingError):
        library.existing_asset_path(icon)


def test_not_found_is_none(library):
    assert library.get_icon("nope") is None
    assert library.get_icon_by_id(999) is None


def test_listing_helpers(library):
    assert library.stats(group_id=1).total_icons == 4
    assert len(library.sets()) == 5
    assert len(library.groups()) == 2
    assert [s.id for s in library.specialty_sets()] == [30, 31]
    assert [i.id for i in library.icons_in_set(20)] == [2, 6, 8]


def test_library_releases_handle(config):
    with IconLibrary(config) as lib:
        database = lib.database
    assert database.closed
