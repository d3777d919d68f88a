# =============================================================================
# test_cli.py - Command-Line Interface Tests
# =============================================================================
# Tests for the octasm command, run through click's CliRunner.
# =============================================================================

import pytest
from click.testing import CliRunner

from octasm.cli.errors import ExitCode
from octasm.cli.octasm import main


@pytest.fixture
def runner(monkeypatch):
    for name in ("OCTASM_STRICT", "OCTASM_FORMAT", "OCTASM_DEFINITIONS", "OCTASM_MAX_DEPTH"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "prog.asm"
    path.write_text("add r5, 4\n\njz 10\n")
    return path


class TestCli:
    """Test the octasm command."""

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "Assemble source code for the octasm 8-bit CPU" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_missing_input(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_hex_output(self, runner, source):
        result = runner.invoke(main, [str(source)])
        assert result.exit_code == 0
        assert result.output.strip() == "84 48 8a 78 68"

    def test_bits_output(self, runner, source):
        result = runner.invoke(main, [str(source), "-f", "bits"])
        assert result.exit_code == 0
        assert result.output.strip() == (
            "10000100 01001000 10001010 01111000 01101000"
        )

    def test_binary_output(self, runner, source, tmp_path):
        out = tmp_path / "prog.bin"
        result = runner.invoke(main, [str(source), "-o", str(out)])
        assert result.exit_code == 0
        assert out.read_bytes() == bytes([0x84, 0x48, 0x8A, 0x78, 0x68])

    def test_unmatched_line_keeps_going(self, runner, tmp_path):
        path = tmp_path / "bad.asm"
        path.write_text("rtn\nadd r12\nnop\n")
        result = runner.invoke(main, [str(path)])
        assert result.exit_code == 0
        assert "6a 2e" in result.output

    def test_strict_fails(self, runner, tmp_path):
        path = tmp_path / "bad.asm"
        path.write_text("rtn\nadd r12\n")
        result = runner.invoke(main, [str(path), "--strict"])
        assert result.exit_code == ExitCode.BUILD_ERROR

    def test_self_test(self, runner):
        result = runner.invoke(main, ["--test"])
        assert result.exit_code == 0
        assert "jz 10" in result.output
        assert "✓" in result.output
        assert "is wrong!" not in result.output

    def test_custom_definitions(self, runner, tmp_path):
        defs = tmp_path / "cpu.def"
        defs.write_text("beep n ; #1nnnnnnn + #00000001\n")
        path = tmp_path / "prog.asm"
        path.write_text("beep 3\n")
        result = runner.invoke(main, [str(path), "-d", str(defs)])
        assert result.exit_code == 0
        assert result.output.strip() == "83 01"

    def test_bad_definitions(self, runner, tmp_path, source):
        defs = tmp_path / "cpu.def"
        defs.write_text("beep x ; #000000xx\n")
        result = runner.invoke(main, [str(source), "-d", str(defs)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Definition error" in result.output
        assert "unknown placeholder 'x'" in result.output

    def test_self_referencing_definitions(self, runner, tmp_path, source):
        defs = tmp_path / "cpu.def"
        defs.write_text("loop n ; loop n\n")
        result = runner.invoke(main, [str(source), "-d", str(defs), "--max-depth", "3"])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "exceeds nesting depth 3" in result.output

    def test_encoding_error_fails(self, runner, tmp_path):
        """A matched line that cannot be encoded fails even without --strict."""
        defs = tmp_path / "cpu.def"
        defs.write_text("foo 0 ; #00000001\nbar n ; foo n\n")
        path = tmp_path / "prog.asm"
        path.write_text("bar 5\nfoo 0\n")
        result = runner.invoke(main, [str(path), "-d", str(defs)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "sub-statement 'foo n' with n = 5 matches no instruction" in result.output
        assert "is not a valid instruction" not in result.output

    def test_unwritable_output(self, runner, source, tmp_path):
        out = tmp_path / "missing" / "prog.bin"
        result = runner.invoke(main, [str(source), "-o", str(out)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "No such file or directory" in result.output
