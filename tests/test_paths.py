"""Tests for platform-specific paths."""

from __future__ import annotations

from pathlib import Path

import digirain.paths as paths


class FakeAppDirs:
    """Minimal AppDirs stand-in used to control path roots during tests."""

    def __init__(self, data_dir: Path) -> None:
        self.user_data_dir = str(data_dir)


def test_paths_use_platformdirs_and_create_dirs(tmp_path, monkeypatch) -> None:
    data_dir = tmp_path / "data"

    def fake_app_dirs(app_name: str, appauthor: bool | None = None) -> FakeAppDirs:
        assert app_name == "digirain"
        assert appauthor is False
        return FakeAppDirs(data_dir)

    monkeypatch.setattr(paths, "AppDirs", fake_app_dirs)
    paths.get_app_dirs.cache_clear()
    try:
        assert paths.data_dir() == data_dir
        assert paths.log_dir() == data_dir / "logs"
        assert (data_dir / "logs").exists()
    finally:
        paths.get_app_dirs.cache_clear()
