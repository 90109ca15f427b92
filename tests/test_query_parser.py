# tests/test_query_parser.py

from iconsearch.core.query_parser import parse_query


def test_plain_terms_are_inclusions():
    """Whitespace separated words become lower-cased inclusion terms"""
    parsed = parse_query("  Arrow   RIGHT ")
    assert parsed.include == ["arrow", "right"]
    assert parsed.exclude == []


def test_dash_prefix_excludes():
    """A -term is moved to the exclusion list without its prefix"""
    parsed = parse_query("arrow -circle -Square")
    assert parsed.include == ["arrow"]
    assert parsed.exclude == ["circle", "square"]


def test_lone_dash_is_inclusion():
    """A bare '-' has nothing to exclude and stays an inclusion term"""
    parsed = parse_query("arrow -")
    assert parsed.include == ["arrow", "-"]
    assert parsed.exclude == []


def test_empty_query():
    parsed = parse_query("")
    assert parsed.include == []
    assert parsed.exclude == []

    parsed = parse_query("   \t\n ")
    assert parsed.include == []
    assert parsed.exclude == []


def test_order_is_preserved():
    parsed = parse_query("b -y a -x")
    assert parsed.include == ["b", "a"]
    assert parsed.exclude == ["y", "x"]
