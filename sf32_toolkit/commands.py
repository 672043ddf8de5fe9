"""Shell command templates for the SF32 SDK tools."""

from __future__ import annotations

import sys
from pathlib import Path

from sf32_toolkit.flash_params import WRITE_FLASH, format_parameters


def _is_windows(platform: str | None) -> bool:
    return (platform or sys.platform) == "win32"


def setup_env_command(sdk_path: Path | str, project_path: Path | str, platform: str | None = None) -> str:
    """Return the command that activates the SDK and enters the project."""
    if _is_windows(platform):
        return f'Set-Location -Path "{sdk_path}"; .\\export.ps1; Set-Location -Path "{project_path}"'
    return f'cd "{sdk_path}" && . ./export.sh && cd "{project_path}"'


def export_script_name(platform: str | None = None) -> str:
    return "export.ps1" if _is_windows(platform) else "export.sh"


def build_command(board: str, jobs: int = 16) -> str:
    return f"scons --board={board} -j{jobs}"


def menuconfig_command(board: str) -> str:
    return f"scons --board={board} --menuconfig"


def clean_command(board: str) -> str:
    return f"scons --board={board} -c"


def build_dir_name(board: str) -> str:
    # Download scripts are generated for the HCPU image
    return f"build_{board}_hcpu"


def download_script_name(platform: str | None = None) -> str:
    return "uart_download.bat" if _is_windows(platform) else "uart_download.sh"


def download_script_path(project_path: Path | str, board: str, platform: str | None = None) -> Path:
    return Path(project_path) / build_dir_name(board) / download_script_name(platform)


def download_script_command(board: str, platform: str | None = None) -> str:
    return f"./{build_dir_name(board)}/{download_script_name(platform)}"


def sftool_command(port: str, chip: str, params, tool: str = "sftool") -> str:
    """Return the flashing command for the given FlashParameters."""
    return f"{tool} -p {port} -c {chip} {WRITE_FLASH} {format_parameters(params)}"
