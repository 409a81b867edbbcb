"""Tests for gridpull.app – save location and startup helpers."""

from __future__ import annotations

from pathlib import Path

import pytest

from gridpull import app
from gridpull.core.resources import BEGINNER_LEVELS, load_bundled_bytes


class FakeStandardPaths:
    """Stand-in for QStandardPaths pointing at a temp directory."""

    class StandardLocation:
        AppDataLocation = "AppDataLocation"

    location = ""

    @classmethod
    def writableLocation(cls, kind):
        assert kind == cls.StandardLocation.AppDataLocation
        return cls.location


@pytest.fixture()
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    d = tmp_path / "appdata"
    monkeypatch.setattr(FakeStandardPaths, "location", str(d))
    monkeypatch.setattr(app, "QStandardPaths", FakeStandardPaths)
    return d


class TestDefaultSavePath:
    def test_in_app_data_dir(self, data_dir: Path):
        assert app.default_save_path() == data_dir / "SavedLevels.yaml"

    def test_no_data_dir(self, data_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr(FakeStandardPaths, "location", "")
        with pytest.raises(RuntimeError, match="No writable application data directory"):
            app.default_save_path()

    def test_no_data_dir_writes_nothing(
        self, data_dir: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        monkeypatch.setattr(FakeStandardPaths, "location", "")
        monkeypatch.chdir(tmp_path)
        with pytest.raises(RuntimeError):
            app.create_level_store(lambda level: level)
        assert not (tmp_path / "SavedLevels.yaml").exists()


class TestCreateLevelStore:
    def test_uses_default_save_path(self, data_dir: Path):
        store = app.create_level_store(lambda level: level.name)
        assert (data_dir / "SavedLevels.yaml").read_bytes() == load_bundled_bytes(BEGINNER_LEVELS)
        assert store.build_level(0) == "Tutorial"

    def test_explicit_save_path(self, tmp_path: Path, data_dir: Path):
        saved = tmp_path / "elsewhere.yaml"
        app.create_level_store(lambda level: level, save_path=saved)
        assert saved.exists()
        assert not (data_dir / "SavedLevels.yaml").exists()


class TestRun:
    def test_run_logs_levels(self, data_dir: Path, caplog: pytest.LogCaptureFixture):
        caplog.set_level("INFO")
        assert app.run() == 0
        assert "Tutorial" in caplog.text
        assert (data_dir / "SavedLevels.yaml").exists()
