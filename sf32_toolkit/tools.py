"""External tool detection for sf32-toolkit."""

import shutil
from pathlib import Path

from sf32_toolkit.commands import export_script_name


def detect_tools(flash_tool: str = "sftool") -> dict[str, str | None]:
    """Locate the build and flashing tools on PATH.

    Returns a mapping of tool name to its path, or None if missing.
    """
    return {name: shutil.which(name) for name in ("scons", flash_tool)}


def check_sdk(sdk_path: Path | str | None, platform: str | None = None) -> dict:
    """Check the SDK export script. Returns {"ok": bool, "message": str}."""
    if not sdk_path:
        return {"ok": False, "message": "SDK path not set. Run: sf32 config sdk.path <path>"}
    script = Path(sdk_path) / export_script_name(platform)
    if script.exists():
        return {"ok": True, "message": f"SDK export script found: {script}"}
    return {"ok": False, "message": f"SDK export script not found: {script}"}
