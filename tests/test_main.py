"""
Tests for main.py: exit codes and renderer ownership of a whole run.
"""

import asyncio
import json
import os

import pytest
from playwright.async_api import Error as PlaywrightError

from docs_exporter import main as cli
from docs_exporter.crawler import PageRenderer


ROOT = "https://x.test/docs/"


@pytest.fixture
def fake_renderer(clean_env, browser):
    """Make main() build its renderer around the fake browser."""
    created = []

    def factory(headless=True):
        renderer = PageRenderer(headless=headless, browser=browser)
        created.append(renderer)
        return renderer

    clean_env.setattr(cli, "PageRenderer", factory)
    clean_env.setenv("SEED_PATHS", "")
    return created


def run_main(argv):
    return asyncio.run(cli.main(argv))


def test_successful_run(site, browser, fake_renderer, tmp_path):
    site.add(ROOT, links=["/docs/a"], title="Docs Home")
    site.add("https://x.test/docs/a", title="Page A")
    output = tmp_path / "pdf-out"
    cache = tmp_path / "urls.json"

    code = run_main(["-q", "--url", ROOT, "--output", str(output),
                     "--cache", str(cache), "--pause-ms", "0"])

    assert code == 0
    assert len(fake_renderer) == 1
    assert (output / "docs" / "docs-home.pdf").is_file()
    assert (output / "docs_a" / "page-a.pdf").is_file()
    assert json.loads(cache.read_text(encoding="utf-8")) == [ROOT, "https://x.test/docs/a"]
    assert browser.closed
    assert browser.open_contexts == 0


def test_unwritable_cache_fails_run(site, browser, fake_renderer, tmp_path):
    site.add(ROOT, title="Docs Home")
    cache_dir = tmp_path / "urls.json"
    cache_dir.mkdir()

    code = run_main(["-q", "--url", ROOT, "--output", str(tmp_path / "pdf-out"),
                     "--cache", str(cache_dir), "--pause-ms", "0"])

    assert code == 1
    assert os.listdir(cache_dir) == []
    assert browser.closed


def test_browser_launch_failure_stops_renderer(clean_env, monkeypatch, tmp_path):
    stopped = []

    async def failing_start(self):
        raise PlaywrightError("Executable doesn't exist at /ms-playwright/chromium")

    async def recording_stop(self):
        stopped.append(self)

    monkeypatch.setattr(PageRenderer, "start", failing_start)
    monkeypatch.setattr(PageRenderer, "stop", recording_stop)

    code = run_main(["-q", "--url", ROOT, "--output", str(tmp_path / "pdf-out"),
                     "--cache", str(tmp_path / "urls.json")])

    assert code == 1
    assert len(stopped) == 1
    assert not (tmp_path / "urls.json").exists()


@pytest.mark.parametrize("name, value", [
    ("CONCURRENCY", "three"),
    ("PAUSE_MS", "1.5"),
    ("TRAVERSAL", "everywhere"),
    ("START_URL", "knowledgecenter/docs"),
])
def test_invalid_environment_fails_before_browser_starts(fake_renderer, monkeypatch, name, value,
                                                         tmp_path):
    monkeypatch.setenv(name, value)

    code = run_main(["-q", "--output", str(tmp_path / "pdf-out"),
                     "--cache", str(tmp_path / "urls.json")])

    assert code == 1
    assert fake_renderer == []


def test_flag_wins_over_invalid_environment(site, browser, fake_renderer, monkeypatch, tmp_path):
    site.add(ROOT, title="Docs Home")
    monkeypatch.setenv("START_URL", "not a url")
    monkeypatch.setenv("CONCURRENCY", "three")

    code = run_main(["-q", "--url", ROOT, "-c", "1", "--output", str(tmp_path / "pdf-out"),
                     "--cache", str(tmp_path / "urls.json"), "--pause-ms", "0"])

    assert code == 0
    assert (tmp_path / "pdf-out" / "docs" / "docs-home.pdf").is_file()
