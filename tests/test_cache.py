"""
Tests for utils/cache.py.
"""

import json

import pytest

from docs_exporter.utils.cache import CacheError, load_url_cache, save_url_cache


URLS = ["https://x.test/docs/", "https://x.test/docs/a"]


def test_missing_file(tmp_path):
    assert load_url_cache(str(tmp_path / "urls.json")) is None


def test_round_trip(tmp_path):
    path = str(tmp_path / "urls.json")
    save_url_cache(path, URLS)
    assert load_url_cache(path) == URLS


def test_written_as_pretty_json_array(tmp_path):
    path = tmp_path / "urls.json"
    save_url_cache(str(path), URLS)
    text = path.read_text(encoding="utf-8")
    assert json.loads(text) == URLS
    assert "\n  " in text


def test_creates_parent_directory(tmp_path):
    path = tmp_path / "state" / "urls.json"
    save_url_cache(str(path), URLS)
    assert path.exists()


def test_empty_list_is_a_valid_cache(tmp_path):
    path = str(tmp_path / "urls.json")
    save_url_cache(path, [])
    assert load_url_cache(path) == []


@pytest.mark.parametrize("content", [
    "{not json",
    '{"urls": []}',
    '["https://x.test/docs/", 3]',
    "",
])
def test_malformed_cache_ignored(tmp_path, content):
    path = tmp_path / "urls.json"
    path.write_text(content, encoding="utf-8")
    assert load_url_cache(str(path)) is None


def test_write_failure_raises(tmp_path):
    # a directory where the file should be
    path = tmp_path / "urls.json"
    path.mkdir()
    with pytest.raises(CacheError):
        save_url_cache(str(path), URLS)
