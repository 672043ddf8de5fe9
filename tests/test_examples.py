"""Tests for the example download scripts."""

from pathlib import Path

from sf32_toolkit.flash_params import extract

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
UART_DIR = EXAMPLES_DIR / "uart-download"

EXPECTED_ADDRESSES = ["0x12010000", "0x12020000", "0x12000000"]


class TestUartDownloadExamples:
    def test_shell_script_exists(self):
        assert (UART_DIR / "uart_download.sh").exists()

    def test_batch_script_exists(self):
        assert (UART_DIR / "uart_download.bat").exists()

    def test_batch_script_uses_crlf(self):
        assert b"\r\n" in (UART_DIR / "uart_download.bat").read_bytes()

    def test_shell_script_extracts(self):
        result = extract((UART_DIR / "uart_download.sh").read_text())
        assert result.ok
        assert [p.address for p in result.params] == EXPECTED_ADDRESSES
        assert result.params[0].path == "bootloader/bootloader.bin"

    def test_batch_script_extracts_raw_bytes(self):
        # Decode without newline translation so \r\n reaches the extractor
        text = (UART_DIR / "uart_download.bat").read_bytes().decode("utf-8")
        result = extract(text)
        assert result.ok
        assert [p.address for p in result.params] == EXPECTED_ADDRESSES
        assert result.params[0].path == "bootloader\\bootloader.bin"

    def test_dialects_agree(self):
        sh = extract((UART_DIR / "uart_download.sh").read_text())
        bat = extract((UART_DIR / "uart_download.bat").read_bytes().decode("utf-8"))
        assert [(p.path, p.address) for p in sh.params] == [
            (p.path.replace("\\", "/"), p.address) for p in bat.params
        ]
