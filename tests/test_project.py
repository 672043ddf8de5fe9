"""Tests for SF32 project detection."""

from pathlib import Path

import pytest

from sf32_toolkit.project import (
    ProjectNotFoundError,
    expand_path,
    find_project,
    is_sf32_project,
    resolve_project_path,
)


def _make_project(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    (path / "SConstruct").write_text("")
    (path / "Kconfig").write_text("")
    (path / "rtconfig.py").write_text("")
    return path


class TestDetection:
    def test_project_at_root(self, tmp_path):
        _make_project(tmp_path)
        assert is_sf32_project(tmp_path) is True
        assert find_project(tmp_path) == tmp_path

    def test_project_in_subdir(self, tmp_path):
        sub = _make_project(tmp_path / "project")
        assert find_project(tmp_path) == sub

    def test_root_wins_over_subdir(self, tmp_path):
        _make_project(tmp_path)
        _make_project(tmp_path / "project")
        assert find_project(tmp_path) == tmp_path

    def test_all_markers_required(self, tmp_path):
        (tmp_path / "SConstruct").write_text("")
        (tmp_path / "Kconfig").write_text("")
        assert is_sf32_project(tmp_path) is False
        assert find_project(tmp_path) is None

    def test_empty_dir(self, tmp_path):
        assert find_project(tmp_path) is None


class TestExpandPath:
    def test_tilde_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        assert expand_path("~/sdk") == tmp_path / "sdk"

    def test_relative_resolved_against_base(self, tmp_path):
        assert expand_path("project", tmp_path) == tmp_path / "project"

    def test_absolute_kept(self, tmp_path):
        target = tmp_path / "elsewhere"
        assert expand_path(str(target), Path("/ignored")) == target


class TestResolveProjectPath:
    def test_configured_path_wins(self, tmp_path):
        _make_project(tmp_path)
        assert resolve_project_path(tmp_path, "app") == tmp_path / "app"

    def test_auto_detected(self, tmp_path):
        sub = _make_project(tmp_path / "project")
        assert resolve_project_path(tmp_path) == sub

    def test_not_found_raises(self, tmp_path):
        with pytest.raises(ProjectNotFoundError) as exc:
            resolve_project_path(tmp_path)
        assert "project.path" in exc.value.message
        assert exc.value.to_dict()["exit_code"] == 1
