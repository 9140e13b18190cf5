import pytest

from torrent_title.config import BASE_DIR, CLUES_FILE, resolve_log_level


@pytest.mark.parametrize("raw, expected", [
    (None, "WARNING"),
    ("debug", "DEBUG"),
    ("Info", "INFO"),
    ("verbose", "WARNING"),
    ("", "WARNING"),
])
def test_resolve_log_level(raw, expected):
    assert resolve_log_level(raw) == expected


def test_default_catalog_lives_in_package():
    assert CLUES_FILE.parent == BASE_DIR
    assert CLUES_FILE.exists()
