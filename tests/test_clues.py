import json
import logging

import pytest

from torrent_title.clues import build_parser, load_clues, register_clues
from torrent_title.parser import ConfigurationError, Parser


def _write(tmp_path, clues):
    path = tmp_path / "clues.json"
    path.write_text(json.dumps(clues), encoding="utf-8")
    return path


def test_missing_file_is_empty_catalog(tmp_path):
    assert load_clues(tmp_path / "nope.json") == []
    assert build_parser(tmp_path / "nope.json").handlers == []


def test_catalog_registers_in_order(tmp_path):
    path = _write(tmp_path, [
        {"name": "resolution", "pattern": r"\b(\d{3,4}P)\b", "flags": "i",
         "transformer": "lowercase", "options": {"remove": True}},
        {"name": "year", "pattern": r"\b(19\d{2}|20\d{2})\b", "transformer": "integer"},
    ])
    parser = build_parser(path)
    assert [h.handler_name for h in parser.handlers] == ["resolution", "year"]
    r = parser.parse("Heat 1995 1080p")
    assert r.fields == {"resolution": "1080p", "year": 1995}
    assert r.title == "Heat"


def test_not_a_list(tmp_path):
    with pytest.raises(ConfigurationError):
        load_clues(_write(tmp_path, {"name": "year"}))


@pytest.mark.parametrize("entry", [
    {"name": "year"},
    {"name": "year", "pattern": "(\\d{4})", "transformer": "date"},
    {"name": "year", "pattern": "(\\d{4})", "flags": "q"},
    {"name": "year", "pattern": "(\\d{4"},
    {"name": "year", "pattern": "(\\d{4})", "options": ["remove"]},
    {"name": "year", "pattern": "(\\d{4})", "options": {"skipIfBefore": 5}},
])
def test_bad_entries(entry):
    with pytest.raises(ConfigurationError):
        register_clues(Parser(), [entry])


def test_default_catalog_is_packaged():
    parser = build_parser()
    assert len(parser.handlers) > 0
    r = parser.parse("The.Movie.2019.1080p.BluRay.x264-GROUP.mkv")
    assert r.title == "The Movie"
    assert r.fields == {
        "extension": "mkv",
        "resolution": "1080p",
        "year": 2019,
        "codec": "x264",
        "source": "BluRay",
        "group": "GROUP",
    }


def test_missing_catalog_warns(tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="torrent_title.clues"):
        assert load_clues(tmp_path / "nope.json") == []
    assert "No clues file" in caplog.text


def test_skip_if_before_single_name_in_catalog(tmp_path):
    path = _write(tmp_path, [
        {"name": "year", "pattern": r"\b(19\d{2})\b", "transformer": "integer"},
        {"name": "group", "pattern": r"^(\w+)", "options": {"skipIfBefore": "year"}},
    ])
    r = build_parser(path).parse("Grp Movie 1999")
    assert r.fields == {"year": 1999}
