"""SF32 project detection and path resolution."""

from __future__ import annotations

import os
from pathlib import Path

# An SCons-based SF32 project has all three of these at its root.
PROJECT_MARKERS = ("SConstruct", "Kconfig", "rtconfig.py")

# Checked when the workspace root itself is not a project.
PROJECT_SUBDIR = "project"


class ProjectNotFoundError(Exception):
    """Raised when no SF32 project can be located."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def to_dict(self) -> dict:
        return {"error": self.message, "exit_code": self.exit_code}


def is_sf32_project(path: Path) -> bool:
    """Return True if every project marker file exists in path."""
    return all((path / marker).exists() for marker in PROJECT_MARKERS)


def find_project(workspace: Path) -> Path | None:
    """Detect the project in the workspace root, then in its project/ subdirectory."""
    workspace = Path(workspace)
    for candidate in (workspace, workspace / PROJECT_SUBDIR):
        if is_sf32_project(candidate):
            return candidate
    return None


def expand_path(value: str, base: Path | None = None) -> Path:
    """Expand a leading ~ and resolve relative paths against base."""
    path = Path(os.path.expanduser(value)) if value.startswith("~") else Path(value)
    if base is not None and not path.is_absolute():
        path = Path(base) / path
    return path


def resolve_project_path(workspace: Path, configured: str | None = None) -> Path:
    """Resolve the project directory.

    A configured path (project.path in sf32.toml) wins. Otherwise the
    workspace is probed with find_project().
    """
    workspace = Path(workspace)
    if configured:
        return expand_path(configured, workspace)

    found = find_project(workspace)
    if found is None:
        raise ProjectNotFoundError(
            f"No SF32 project found in {workspace} or its '{PROJECT_SUBDIR}' subdirectory "
            f"(looking for {', '.join(PROJECT_MARKERS)}). Set project.path in sf32.toml."
        )
    return found
