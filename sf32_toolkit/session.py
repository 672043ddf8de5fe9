"""Shell session for running SDK commands in an SF32 project."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from sf32_toolkit.commands import export_script_name, setup_env_command


class SessionError(Exception):
    """Structured session error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def to_dict(self) -> dict:
        return {"error": self.message, "exit_code": self.exit_code}


class ShellSession:
    """Runs commands in the project directory with the SDK environment applied.

    The session must be opened before use and closed afterwards, either
    explicitly or as a context manager::

        with ShellSession(project_dir, sdk_path=sdk) as session:
            session.run("scons --board=sf32lb52-lcd_n16r8 -j16")
    """

    def __init__(self, project_dir: Path | str, sdk_path: Path | str | None = None, platform: str | None = None):
        self.project_dir = Path(project_dir)
        self.sdk_path = Path(sdk_path) if sdk_path else None
        self.platform = platform or sys.platform
        self.is_open = False

    def open(self) -> ShellSession:
        if not self.project_dir.is_dir():
            raise SessionError(f"Project directory not found: {self.project_dir}")
        if self.sdk_path is not None:
            export_script = self.sdk_path / export_script_name(self.platform)
            if not export_script.exists():
                raise SessionError(f"SDK export script not found: {export_script}")
        self.is_open = True
        return self

    def close(self) -> None:
        self.is_open = False

    def __enter__(self) -> ShellSession:
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def wrap(self, command: str, cwd: Path | str | None = None) -> str:
        """Prefix the SDK environment setup, if an SDK is configured.

        The setup ends by changing into cwd (default: the project directory),
        since export.sh is sourced from the SDK directory.
        """
        if self.sdk_path is None:
            return command
        target = Path(cwd or self.project_dir).resolve()
        setup = setup_env_command(self.sdk_path, target, self.platform)
        if self.platform == "win32":
            return f"{setup}; {command}"
        return f"{setup} && {command}"

    def argv(self, command: str, cwd: Path | str | None = None) -> list[str]:
        if self.platform == "win32":
            return ["powershell", "-NoProfile", "-Command", self.wrap(command, cwd)]
        return ["bash", "-c", self.wrap(command, cwd)]

    def run(self, command: str, cwd: Path | str | None = None, check: bool = False) -> int:
        """Run a command and return its exit code.

        Exit codes:
            127: shell could not be started
        """
        if not self.is_open:
            raise SessionError("Session is not open")
        try:
            result = subprocess.run(self.argv(command, cwd), cwd=cwd or self.project_dir)
        except FileNotFoundError as e:
            raise SessionError(f"Could not start shell: {e}", exit_code=127) from e
        if check and result.returncode != 0:
            raise SessionError(f"Command failed ({result.returncode}): {command}", exit_code=result.returncode)
        return result.returncode
