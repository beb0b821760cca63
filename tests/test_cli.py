"""
Tests for the command-line entry point.
"""

import json

import pytest
from loguru import logger

import sync
from autosaver.sync import SyncSummary


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # main() points handlers at the captured streams of this test
    logger.remove()


@pytest.fixture
def settings_file(temp_dir, monkeypatch):
    monkeypatch.delenv("GEOGUESSR_NCFA", raising=False)
    monkeypatch.delenv("AUTOSAVE_DIR", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FILE", raising=False)
    return temp_dir / "settings.json"


def cli(settings_file, *extra):
    return sync.main(["--settings", str(settings_file), "--no-network-check", *extra])


class TestMain:
    """Tests for main()."""

    def test_missing_cookie(self, settings_file, capsys):
        assert cli(settings_file) == 1
        assert "No GeoGuessr session cookie" in capsys.readouterr().out

    def test_network_check_failure(self, settings_file, monkeypatch):
        monkeypatch.setenv("GEOGUESSR_NCFA", "token")
        monkeypatch.setattr(sync, "check_network", lambda: (False, "No internet connection"))
        assert sync.main(["--settings", str(settings_file)]) == 1

    def test_successful_run_saves_destination(self, settings_file, temp_dir, monkeypatch, capsys):
        monkeypatch.setenv("GEOGUESSR_NCFA", "token")
        dest = temp_dir / "games"
        dest.mkdir()
        captured = {}

        async def fake_run_sync(settings, folder, notifier):
            captured["folder"] = folder
            captured["cookie"] = settings.ncfa_cookie
            return SyncSummary(saved=2, skipped=1)

        monkeypatch.setattr(sync, "run_sync", fake_run_sync)
        assert cli(settings_file, "--dest", str(dest), "--yes") == 0

        assert captured == {"folder": dest, "cookie": "token"}
        assert "2 saved, 1 skipped" in capsys.readouterr().out
        data = json.loads(settings_file.read_text())
        assert data["destination"] == str(dest)
        # Cookie came from the environment and is not written back
        assert data["ncfa_cookie"] == ""

    def test_failed_run(self, settings_file, temp_dir, monkeypatch):
        monkeypatch.setenv("GEOGUESSR_NCFA", "token")

        async def fake_run_sync(settings, folder, notifier):
            return SyncSummary(status="failed", error="boom")

        monkeypatch.setattr(sync, "run_sync", fake_run_sync)
        assert cli(settings_file, "--dest", str(temp_dir), "--yes") == 1

    def test_max_pages_zero_means_unlimited(self, settings_file, temp_dir, monkeypatch):
        monkeypatch.setenv("GEOGUESSR_NCFA", "token")
        captured = {}

        async def fake_run_sync(settings, folder, notifier):
            captured["max_pages"] = settings.max_pages
            return SyncSummary()

        monkeypatch.setattr(sync, "run_sync", fake_run_sync)
        cli(settings_file, "--dest", str(temp_dir), "--yes", "--max-pages", "0")
        assert captured["max_pages"] is None
