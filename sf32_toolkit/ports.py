"""Serial port utilities for sf32-toolkit."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import click
from serial.tools.list_ports import comports

from sf32_toolkit.config import load_project_config


@dataclass
class PortInfo:
    device: str
    description: str
    hwid: str


def list_serial_ports() -> list[PortInfo]:
    """List available serial ports."""
    return [PortInfo(device=p.device, description=p.description, hwid=p.hwid) for p in comports()]


def resolve_port(cli_port: str | None, project_dir: Path | str) -> str:
    """Resolve the download port.

    Resolution order: CLI flag > sf32.toml > error.
    """
    port = cli_port
    if port is None:
        try:
            port = load_project_config(project_dir).serial.port
        except FileNotFoundError:
            pass

    if port is None:
        raise click.UsageError(
            "No serial port specified. Use --port or set serial.port in sf32.toml"
        )
    return port
