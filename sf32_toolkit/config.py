"""Project configuration for sf32-toolkit (sf32.toml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    try:
        import tomli as tomllib  # type: ignore[no-redef]
    except ImportError:
        tomllib = None  # type: ignore[assignment]

CONFIG_FILE = "sf32.toml"
DEFAULT_BOARD_MODEL = "sf32lb52-lcd_n16r8"
DEFAULT_JOBS = 16
DEFAULT_FLASH_TOOL = "sftool"


@dataclass
class SdkConfig:
    path: str | None = None


@dataclass
class BoardConfig:
    model: str = DEFAULT_BOARD_MODEL
    custom_models: list[str] = field(default_factory=list)


@dataclass
class BuildConfig:
    jobs: int = DEFAULT_JOBS


@dataclass
class SerialConfig:
    port: str | None = None


@dataclass
class FlashConfig:
    tool: str = DEFAULT_FLASH_TOOL
    chip: str | None = None


@dataclass
class ProjectConfig:
    sdk: SdkConfig = field(default_factory=SdkConfig)
    project_path: str | None = None
    board: BoardConfig = field(default_factory=BoardConfig)
    build: BuildConfig = field(default_factory=BuildConfig)
    serial: SerialConfig = field(default_factory=SerialConfig)
    flash: FlashConfig = field(default_factory=FlashConfig)


# Keys stored as TOML arrays; a string value is split on commas.
LIST_KEYS = {"board.custom_models"}

# Keys that must hold integers.
INT_KEYS = {"build.jobs"}


def _list_value(value) -> list[str]:
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    return list(value)


def _int_value(value, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got: {value!r}")
    return value


def _read_toml(toml_path: Path) -> dict:
    with open(toml_path, "rb") as f:
        return tomllib.load(f)


def load_project_config(project_dir: Path | str) -> ProjectConfig:
    """Parse sf32.toml and return a typed ProjectConfig."""
    project_dir = Path(project_dir)
    toml_path = project_dir / CONFIG_FILE
    if not toml_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILE} not found in {project_dir}")

    if tomllib is None:
        raise ImportError("No TOML parser available (need Python 3.11+ or tomli)")

    data = _read_toml(toml_path)

    board_data = data.get("board", {})
    flash_data = data.get("flash", {})

    return ProjectConfig(
        sdk=SdkConfig(path=data.get("sdk", {}).get("path")),
        project_path=data.get("project", {}).get("path"),
        board=BoardConfig(
            model=board_data.get("model", DEFAULT_BOARD_MODEL),
            custom_models=_list_value(board_data.get("custom_models", [])),
        ),
        build=BuildConfig(jobs=_int_value(data.get("build", {}).get("jobs", DEFAULT_JOBS), "build.jobs")),
        serial=SerialConfig(port=data.get("serial", {}).get("port")),
        flash=FlashConfig(
            tool=flash_data.get("tool", DEFAULT_FLASH_TOOL),
            chip=flash_data.get("chip"),
        ),
    )


def load_project_config_or_default(project_dir: Path | str) -> ProjectConfig:
    """Like load_project_config, but a missing sf32.toml gives the defaults."""
    try:
        return load_project_config(project_dir)
    except FileNotFoundError:
        return ProjectConfig()


def get_config_value(project_dir: Path | str, key: str):
    """Dotted key lookup, e.g. 'board.model', 'serial.port'."""
    toml_path = Path(project_dir) / CONFIG_FILE
    if not toml_path.exists() or tomllib is None:
        return None

    data = _read_toml(toml_path)

    parts = key.split(".", 1)
    if len(parts) == 2:
        section, k = parts
        return data.get(section, {}).get(k)
    return data.get(key)


def set_config_value(project_dir: Path | str, key: str, value) -> None:
    """Write a value to sf32.toml using line-based editing."""
    toml_path = Path(project_dir) / CONFIG_FILE

    # Coerce integer-like strings
    if isinstance(value, str) and key not in LIST_KEYS:
        try:
            value = int(value)
        except ValueError:
            pass

    parts = key.split(".", 1)
    if len(parts) != 2:
        raise ValueError(f"Key must be dotted (section.key), got: {key}")
    section, k = parts

    if key in LIST_KEYS:
        value = _list_value(value)
    elif key in INT_KEYS:
        value = _int_value(value, key)

    if isinstance(value, bool):
        val_str = "true" if value else "false"
    elif isinstance(value, int):
        val_str = str(value)
    elif isinstance(value, (list, tuple)):
        val_str = "[" + ", ".join(f'"{v}"' for v in value) + "]"
    else:
        # TOML basic strings need backslashes escaped (Windows paths)
        escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
        val_str = f'"{escaped}"'

    if toml_path.exists():
        lines = toml_path.read_text().splitlines(keepends=True)
    else:
        lines = []

    section_header = f"[{section}]"
    section_idx = None
    key_idx = None
    next_section_idx = None

    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped == section_header:
            section_idx = i
        elif section_idx is not None and next_section_idx is None:
            if stripped.startswith("[") and stripped.endswith("]"):
                next_section_idx = i
            elif re.match(rf"^{re.escape(k)}\s*=", stripped):
                key_idx = i

    if key_idx is not None:
        lines[key_idx] = f"{k} = {val_str}\n"
    elif section_idx is not None:
        insert_at = next_section_idx if next_section_idx is not None else len(lines)
        if insert_at == len(lines) and lines and not lines[-1].endswith("\n"):
            lines[-1] += "\n"
        lines.insert(insert_at, f"{k} = {val_str}\n")
    else:
        if lines and not lines[-1].endswith("\n"):
            lines.append("\n")
        if lines:
            lines.append("\n")
        lines.append(f"{section_header}\n")
        lines.append(f"{k} = {val_str}\n")

    toml_path.write_text("".join(lines))


def list_config(project_dir: Path | str) -> dict:
    """Return a flat dotted-key dict of all config values."""
    toml_path = Path(project_dir) / CONFIG_FILE
    if not toml_path.exists() or tomllib is None:
        return {}

    data = _read_toml(toml_path)

    result = {}
    for section, values in data.items():
        if isinstance(values, dict):
            for k, v in values.items():
                result[f"{section}.{k}"] = v
        else:
            result[section] = values
    return result
