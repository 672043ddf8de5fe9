"""Tests for SDK command templates."""

from pathlib import Path

from sf32_toolkit.commands import (
    setup_env_command,
    export_script_name,
    build_command,
    menuconfig_command,
    clean_command,
    build_dir_name,
    download_script_name,
    download_script_path,
    download_script_command,
    sftool_command,
)
from sf32_toolkit.flash_params import FlashParameter

BOARD = "sf32lb52-lcd_n16r8"


class TestSetupEnv:
    def test_posix(self):
        cmd = setup_env_command("/opt/sdk", "/work/project", platform="linux")
        assert cmd == 'cd "/opt/sdk" && . ./export.sh && cd "/work/project"'

    def test_windows(self):
        cmd = setup_env_command("C:\\sdk", "C:\\work", platform="win32")
        assert cmd == 'Set-Location -Path "C:\\sdk"; .\\export.ps1; Set-Location -Path "C:\\work"'

    def test_export_script_name(self):
        assert export_script_name("linux") == "export.sh"
        assert export_script_name("darwin") == "export.sh"
        assert export_script_name("win32") == "export.ps1"


class TestSconsCommands:
    def test_build(self):
        assert build_command(BOARD) == "scons --board=sf32lb52-lcd_n16r8 -j16"

    def test_build_jobs(self):
        assert build_command(BOARD, jobs=4) == "scons --board=sf32lb52-lcd_n16r8 -j4"

    def test_menuconfig(self):
        assert menuconfig_command(BOARD) == "scons --board=sf32lb52-lcd_n16r8 --menuconfig"

    def test_clean(self):
        assert clean_command(BOARD) == "scons --board=sf32lb52-lcd_n16r8 -c"


class TestDownload:
    def test_build_dir(self):
        assert build_dir_name(BOARD) == "build_sf32lb52-lcd_n16r8_hcpu"

    def test_script_name(self):
        assert download_script_name("linux") == "uart_download.sh"
        assert download_script_name("win32") == "uart_download.bat"

    def test_script_path(self):
        path = download_script_path(Path("/work"), BOARD, platform="linux")
        assert path == Path("/work/build_sf32lb52-lcd_n16r8_hcpu/uart_download.sh")

    def test_script_command(self):
        assert download_script_command(BOARD, "linux") == "./build_sf32lb52-lcd_n16r8_hcpu/uart_download.sh"
        assert download_script_command(BOARD, "win32") == "./build_sf32lb52-lcd_n16r8_hcpu/uart_download.bat"

    def test_sftool_command(self):
        params = [FlashParameter("boot.bin", "0x12010000"), FlashParameter("main.bin", "0x12020000")]
        cmd = sftool_command("/dev/ttyUSB0", "SF32LB52", params)
        assert cmd == 'sftool -p /dev/ttyUSB0 -c SF32LB52 write_flash "boot.bin@0x12010000" "main.bin@0x12020000"'

    def test_sftool_custom_tool(self):
        cmd = sftool_command("COM3", "SF32LB52", [FlashParameter("a.bin", "0x1")], tool="sftool.exe")
        assert cmd.startswith("sftool.exe -p COM3")
