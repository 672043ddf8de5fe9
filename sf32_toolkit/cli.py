"""CLI entry point for sf32-toolkit."""

import json as jsonmod
from pathlib import Path

import click

from sf32_toolkit.boards import list_boards, get_board, resolve_board
from sf32_toolkit.commands import (
    setup_env_command, build_command, menuconfig_command, clean_command,
    download_script_path, download_script_command, sftool_command,
)
from sf32_toolkit.config import (
    load_project_config_or_default, get_config_value, set_config_value, list_config,
)
from sf32_toolkit.flash_params import extract
from sf32_toolkit.ports import list_serial_ports, resolve_port
from sf32_toolkit.project import ProjectNotFoundError, expand_path, find_project, resolve_project_path
from sf32_toolkit.session import ShellSession, SessionError
from sf32_toolkit.tools import detect_tools, check_sdk


@click.group()
def main():
    """Build, configure and flash SF32 projects."""
    pass


def _fail(message, use_json=False, exit_code=1):
    if use_json:
        click.echo(jsonmod.dumps({"error": message}), err=True)
    else:
        click.echo(f"Error: {message}", err=True)
    raise SystemExit(exit_code)


def _project_dir(workspace, config, use_json=False):
    try:
        return resolve_project_path(workspace, config.project_path)
    except ProjectNotFoundError as e:
        _fail(e.message, use_json, e.exit_code)


def _load_config(workspace, use_json=False):
    try:
        return load_project_config_or_default(workspace)
    except ValueError as e:
        _fail(f"Invalid sf32.toml: {e}", use_json)


def _sdk_path(workspace, config):
    return expand_path(config.sdk.path, workspace) if config.sdk.path else None


def _run_in_project(command, board_override=None):
    """Run a scons command for the selected board inside a shell session."""
    workspace = Path.cwd()
    config = _load_config(workspace)
    project_dir = _project_dir(workspace, config)
    board = board_override or config.board.model
    cmd = command(board, config)

    click.echo(f"[{board}] {cmd}")
    try:
        with ShellSession(project_dir, sdk_path=_sdk_path(workspace, config)) as session:
            code = session.run(cmd)
    except SessionError as e:
        _fail(e.message, exit_code=e.exit_code)
    if code != 0:
        raise SystemExit(code)


@main.command()
def detect():
    """Show the detected SF32 project."""
    workspace = Path.cwd()
    found = find_project(workspace)
    if found is None:
        click.echo("No SF32 project detected (need SConstruct, Kconfig and rtconfig.py).")
        raise SystemExit(1)
    click.echo(f"SF32 project: {found}")


@main.command()
def boards():
    """List board models."""
    config = _load_config(Path.cwd())
    all_boards = list_boards(config.board.custom_models)
    click.echo(f"Board models ({len(all_boards)}):\n")
    for b in all_boards:
        marker = "*" if b.slug == config.board.model else " "
        click.echo(f"  {marker} {b.slug:<24} {b.chip:<10} {b.description}")


@main.command()
@click.argument("model", required=False)
def board(model):
    """Show or select the board model."""
    workspace = Path.cwd()
    config = _load_config(workspace)

    if not model:
        b = resolve_board(config.board.model, config.board.custom_models)
        click.echo(f"SF32 board: {b.slug} ({b.description})")
        return

    if get_board(model, config.board.custom_models) is None:
        click.echo(f"Note: {model} is not a known board model, using it as a custom board.")
    set_config_value(workspace, "board.model", model)
    click.echo(f"SF32 board set to {model}")


@main.command()
def env():
    """Print the SDK environment setup command."""
    workspace = Path.cwd()
    config = _load_config(workspace)
    sdk = _sdk_path(workspace, config)
    if sdk is None:
        _fail("SDK path not set. Run: sf32 config sdk.path <path>")
    project_dir = _project_dir(workspace, config)
    click.echo(setup_env_command(sdk, project_dir))


@main.command()
@click.option("--board", "board_model", type=str, help="Board model (defaults to board.model).")
@click.option("--jobs", "-j", type=int, help="Parallel build jobs.")
def build(board_model, jobs):
    """Build the project with scons."""
    _run_in_project(lambda b, config: build_command(b, jobs or config.build.jobs), board_model)


@main.command()
@click.option("--board", "board_model", type=str, help="Board model (defaults to board.model).")
def menuconfig(board_model):
    """Open the Kconfig menu configuration."""
    _run_in_project(lambda b, config: menuconfig_command(b), board_model)


@main.command()
@click.option("--board", "board_model", type=str, help="Board model (defaults to board.model).")
def clean(board_model):
    """Remove build output."""
    _run_in_project(lambda b, config: clean_command(b), board_model)


def _read_script(path, use_json=False):
    try:
        return Path(path).read_text(errors="ignore")
    except FileNotFoundError:
        _fail(f"Download script not found: {path}. Build the project first.", use_json)


@main.command("flash-params")
@click.argument("script", required=False, type=click.Path(dir_okay=False))
@click.option("--board", "board_model", type=str, help="Board model (defaults to board.model).")
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def flash_params_cmd(script, board_model, use_json):
    """Show the flash parameters in a download script."""
    if script:
        script_path = Path(script)
    else:
        workspace = Path.cwd()
        config = _load_config(workspace, use_json)
        project_dir = _project_dir(workspace, config, use_json)
        script_path = download_script_path(project_dir, board_model or config.board.model)

    result = extract(_read_script(script_path, use_json))
    if not result.ok:
        if use_json:
            click.echo(jsonmod.dumps(result.to_dict()), err=True)
            raise SystemExit(1)
        _fail(result.message)

    if use_json:
        click.echo(jsonmod.dumps(result.to_dict(), indent=2))
    else:
        for p in result.params:
            click.echo(f"  {p.address:<12} {p.path}")


@main.command()
@click.option("--board", "board_model", type=str, help="Board model (defaults to board.model).")
@click.option("--port", type=str, help="Serial port (e.g. COM3, /dev/ttyUSB0).")
@click.option("--chip", type=str, help="Chip name for sftool (defaults to the board's chip).")
@click.option("--script", "use_script", is_flag=True, help="Run the generated download script as-is.")
@click.option("--dry-run", is_flag=True, help="Print the command without running it.")
def download(board_model, port, chip, use_script, dry_run):
    """Flash the built firmware over UART."""
    workspace = Path.cwd()
    config = _load_config(workspace)
    project_dir = _project_dir(workspace, config)
    b = resolve_board(board_model or config.board.model, config.board.custom_models)
    script_path = download_script_path(project_dir, b.slug)

    if use_script:
        if not script_path.exists():
            _fail(f"Download script not found: {script_path}. Build the project first.")
        cmd = download_script_command(b.slug)
        cwd = project_dir
    else:
        result = extract(_read_script(script_path))
        if not result.ok:
            _fail(result.message)
        port = resolve_port(port, workspace)
        cmd = sftool_command(port, chip or config.flash.chip or b.chip, result.params, tool=config.flash.tool)
        # Image paths in the script are relative to its own directory
        cwd = script_path.parent

    if dry_run:
        click.echo(cmd)
        return

    click.echo(f"[{b.slug}] {cmd}")
    try:
        with ShellSession(project_dir, sdk_path=_sdk_path(workspace, config)) as session:
            code = session.run(cmd, cwd=cwd)
    except SessionError as e:
        _fail(e.message, exit_code=e.exit_code)
    if code != 0:
        raise SystemExit(code)


@main.command()
@click.option("--json", "use_json", is_flag=True, help="Output JSON.")
def ports(use_json):
    """List available serial ports."""
    found = list_serial_ports()
    if use_json:
        data = [{"device": p.device, "description": p.description, "hwid": p.hwid} for p in found]
        click.echo(jsonmod.dumps(data, indent=2))
        return
    if not found:
        click.echo("No serial ports found.")
        return
    for p in found:
        click.echo(f"  {p.device:<25} {p.description}")


@main.command()
def doctor():
    """Check your environment for SF32 development."""
    workspace = Path.cwd()
    config = _load_config(workspace)
    ok = True

    for name, path in detect_tools(config.flash.tool).items():
        if path:
            click.echo(f"[OK] {name}: {path}")
        else:
            click.echo(f"[!!] {name} not found on PATH")
            ok = False

    sdk = check_sdk(_sdk_path(workspace, config))
    click.echo(f"[{'OK' if sdk['ok'] else '!!'}] {sdk['message']}")
    ok = ok and sdk["ok"]

    found = find_project(workspace)
    if config.project_path or found:
        click.echo(f"[OK] Project: {expand_path(config.project_path, workspace) if config.project_path else found}")
    else:
        click.echo("[!!] No SF32 project detected. Set project.path in sf32.toml.")
        ok = False

    try:
        import serial
        click.echo(f"[OK] pyserial installed: {serial.__version__}")
    except ImportError:
        click.echo("[!!] pyserial not installed. Run: pip install pyserial")
        ok = False

    if ok:
        click.echo("\nAll checks passed. Ready for SF32 development.")
    else:
        click.echo("\nSome checks failed. Fix the issues above.")


@main.command("config")
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--list", "show_list", is_flag=True, help="Show all config values.")
def config_cmd(key, value, show_list):
    """Get or set sf32.toml configuration values."""
    workspace = Path.cwd()

    if show_list:
        values = list_config(workspace)
        if not values:
            click.echo("No configuration found.")
            return
        for k, v in sorted(values.items()):
            click.echo(f"  {k} = {v}")
        return

    if key and value:
        try:
            set_config_value(workspace, key, value)
        except ValueError as e:
            _fail(str(e))
        click.echo(f"Set {key} = {value}")
        return

    if key:
        val = get_config_value(workspace, key)
        if val is None:
            click.echo(f"{key} is not set.")
        else:
            click.echo(f"{key} = {val}")
        return

    click.echo("Usage: sf32 config <KEY> [VALUE] or sf32 config --list")
