# =============================================================================
# test_cli.py - Command-Line Interface Tests
# =============================================================================
# Tests for the c8asm command.
#
# Test coverage includes:
#   - Successful assembly and console echo
#   - Exit codes for assembly errors and unreadable/unwritable files
#   - No output file on failure
#   - Listing and symbol files
# =============================================================================

import pytest

from cpu8_asm.cli.errors import ExitCode


STORE_PROGRAM = "sec\nlda #$0a\nsta $20\nrts\n"
STORE_IMAGE = "v2.0 raw\na0 00 06 0a 2c 20 d1 00\n"


class TestAssembleCommand:
    """Tests for successful runs of c8asm."""

    def test_cli_help(self):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        runner = CliRunner()
        result = runner.invoke(main, ["--help"])

        assert result.exit_code == 0
        assert "Logisim memory image" in result.output

    def test_cli_version(self):
        from click.testing import CliRunner
        from cpu8_asm import __version__
        from cpu8_asm.cli.c8asm import main

        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_cli_basic_assembly(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file(STORE_PROGRAM)
        out = tmp_path / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, [str(src), str(out)])

        assert result.exit_code == ExitCode.SUCCESS
        assert out.read_text() == STORE_IMAGE
        assert "8bit cpu assembler" in result.output
        assert "Successfully compiled program (8 bytes):" in result.output
        assert f"Write output to '{out}'." in result.output

    def test_cli_echoes_image(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file(STORE_PROGRAM)
        out = tmp_path / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, [str(src), str(out)])

        assert STORE_IMAGE in result.output

    def test_cli_quiet(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file(STORE_PROGRAM)
        out = tmp_path / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, ["-q", str(src), str(out)])

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == ""
        assert out.read_text() == STORE_IMAGE

    def test_cli_listing_and_symbols(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file("start: sec\njmp start\n")
        out = tmp_path / "program.out"
        lst = tmp_path / "program.lst"
        sym = tmp_path / "program.sym"

        runner = CliRunner()
        result = runner.invoke(main, [
            str(src), str(out), "-l", str(lst), "-s", str(sym),
        ])

        assert result.exit_code == ExitCode.SUCCESS
        assert "8bit CPU Assembler Listing" in lst.read_text()
        assert "start $00" in sym.read_text()

    def test_cli_env_overrides(self, source_file, tmp_path, monkeypatch):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        monkeypatch.setenv("CPU8ASM_MEMORY_SIZE", "2")
        src = source_file("sec\nsec\n")
        out = tmp_path / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, [str(src), str(out)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "program exceeds memory size (2 bytes)" in result.output


class TestAssembleCommandErrors:
    """Tests for failing runs of c8asm."""

    def test_cli_assembly_error(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file("sec\njmp nowhere\n")
        out = tmp_path / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, [str(src), str(out)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "Assembly error:" in result.output
        assert "could not find label 'nowhere'" in result.output
        assert not out.exists()

    def test_cli_error_keeps_existing_output(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file("nop\n")
        out = tmp_path / "program.out"
        out.write_text("previous image\n")

        runner = CliRunner()
        result = runner.invoke(main, [str(src), str(out)])

        assert result.exit_code == ExitCode.BUILD_ERROR
        assert out.read_text() == "previous image\n"

    def test_cli_missing_input(self, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        out = tmp_path / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, [str(tmp_path / "missing.asm"), str(out)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "cannot read source file" in result.output
        assert not out.exists()

    def test_cli_unwritable_output(self, source_file, tmp_path):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        src = source_file(STORE_PROGRAM)
        out = tmp_path / "no_such_dir" / "program.out"

        runner = CliRunner()
        result = runner.invoke(main, [str(src), str(out)])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Error:" in result.output

    def test_cli_missing_arguments(self):
        from click.testing import CliRunner
        from cpu8_asm.cli.c8asm import main

        runner = CliRunner()
        result = runner.invoke(main, [])

        assert result.exit_code == ExitCode.INVALID_ARGS


class TestExitCodes:
    """Tests for the exception-to-exit-code mapping."""

    def test_internal_error(self):
        from cpu8_asm.cli.errors import handle_cli_exception

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR

    def test_assembly_error(self):
        from cpu8_asm.cli.errors import handle_cli_exception
        from cpu8_asm.errors import AssemblerError

        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(AssemblerError("bad"))
        assert exc_info.value.code == ExitCode.BUILD_ERROR
