"""Flash parameter extraction from generated download scripts.

The SF32 build writes ``uart_download.sh`` / ``uart_download.bat`` next to
the firmware images. Both contain one ``sftool ... write_flash`` line with
quoted ``"path@0xADDR"`` tokens; this module pulls those tokens out so the
flashing command can be rebuilt with a different port or chip.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

MISSING_COMMAND_LINE = "missing_command_line"
MALFORMED_COMMAND = "malformed_command"
NO_PARAMETERS_FOUND = "no_parameters_found"

_MESSAGES = {
    MISSING_COMMAND_LINE: "No flashing tool invocation with 'write_flash' found in download script.",
    MALFORMED_COMMAND: "Could not locate 'write_flash' in the flashing command line.",
    NO_PARAMETERS_FOUND: 'No "path@0x..." parameters found after write_flash.',
}

WRITE_FLASH = "write_flash"

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")

# Tool invocation: bare name (sftool, sftool.exe) or quoted relative path (".\sftool", "./sftool")
_INVOCATION_RE = re.compile(r'^(?:[A-Za-z_][\w.\-]*|"\.{1,2}[\\/][^"]*")(?=\s|$)')

# "path@0xADDR"; greedy path so the last @0x<hex> before the closing quote wins
_PARAM_RE = re.compile(r'"([^"]+)@0x([0-9a-fA-F]+)"')


@dataclass(frozen=True)
class FlashParameter:
    path: str
    address: str

    def to_token(self) -> str:
        return f'"{self.path}@{self.address}"'

    def to_dict(self) -> dict:
        return {"path": self.path, "address": self.address}


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of one extraction: parameters in source order, or an error kind."""
    params: tuple[FlashParameter, ...] = field(default_factory=tuple)
    error: str | None = None
    command_line: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.params)

    @property
    def message(self) -> str:
        if self.error:
            return _MESSAGES[self.error]
        return f"Found {len(self.params)} flash parameter(s)."

    def tokens(self) -> list[str]:
        return [p.to_token() for p in self.params]

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error, "message": self.message}
        return {"params": [p.to_dict() for p in self.params]}


def split_lines(text: str) -> list[str]:
    """Split on \\r\\n, \\n or a bare \\r."""
    return _LINE_SPLIT_RE.split(text)


def is_command_line(line: str) -> bool:
    """Return True if the line invokes the flashing tool with write_flash."""
    stripped = line.strip()
    return bool(_INVOCATION_RE.match(stripped)) and WRITE_FLASH in stripped


def find_command_line(script_text: str) -> str | None:
    for line in split_lines(script_text):
        if is_command_line(line):
            return line.strip()
    return None


def parse_parameters(region: str) -> list[FlashParameter]:
    """Parse every quoted path@0xADDR token in region, left to right."""
    params = []
    for m in _PARAM_RE.finditer(region):
        params.append(FlashParameter(path=m.group(1), address="0x" + m.group(2)))
    return params


def extract(script_text: str) -> ExtractionResult:
    """Extract the ordered flash parameters from a download script.

    Only the first line that invokes the flashing tool with ``write_flash``
    is examined. Failures are returned on ``ExtractionResult.error``; no
    partial results are returned.
    """
    line = find_command_line(script_text)
    if line is None:
        return ExtractionResult(error=MISSING_COMMAND_LINE)

    idx = line.find(WRITE_FLASH)
    if idx < 0:
        return ExtractionResult(error=MALFORMED_COMMAND, command_line=line)

    params = parse_parameters(line[idx + len(WRITE_FLASH):])
    if not params:
        return ExtractionResult(error=NO_PARAMETERS_FOUND, command_line=line)

    return ExtractionResult(params=tuple(params), command_line=line)


def format_parameters(params) -> str:
    """Render parameters as space-separated quoted tokens."""
    return " ".join(p.to_token() for p in params)
