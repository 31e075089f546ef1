"""
8-bit CPU Assembler - Main Interface
====================================

This module provides the Assembler class, the primary interface for
assembling 8-bit CPU source code. It coordinates the scanner, code
generator and writers.

Example Usage
-------------
>>> from cpu8_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
...     sec
...     lda #$0a     ; load ten
...     sta $20
...     rts
... ''')
b'\\xa0\\x00\\x06\\n, \\xd1\\x00'
>>>
>>> asm.write_image("program.out")

Command-Line Usage
------------------
    $ c8asm program.asm program.out -l program.lst -s program.sym
"""

from pathlib import Path
from typing import Optional, TextIO
import logging

from cpu8_asm.config import AssemblerConfig
from cpu8_asm.errors import AssemblerError, SourceFileError
from cpu8_asm.assembler.codegen import CodeGenerator
from cpu8_asm.assembler.scanner import Scanner
from cpu8_asm.assembler.writer import (
    format_image,
    format_listing,
    format_symbols,
    write_image,
)

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main 8-bit CPU assembler class.

    Each assemble_* call starts a fresh assembly session, so one
    Assembler can be reused for several programs. The outputs of the
    last successful assembly stay available through the get_* and
    write_* methods.

    Attributes:
        config: Bounds and output settings
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        """
        Initialize the assembler.

        Args:
            config: Assembler settings (default: AssemblerConfig())
        """
        self.config = config or AssemblerConfig()
        self.config.validate()
        self._codegen: Optional[CodeGenerator] = None
        self._scanner: Optional[Scanner] = None
        self._code: Optional[bytes] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> bytes:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            The assembled program bytes

        Raises:
            AssemblerError: On the first assembly error
        """
        self._code = None
        scanner = Scanner(source, filename)
        codegen = CodeGenerator(self.config)

        try:
            code = codegen.generate(scanner.tokenize())
        except AssemblerError as e:
            if e.location is not None and e.source_line is None:
                e.with_source_line(scanner.line_text(e.location.line))
            raise

        self._scanner = scanner
        self._codegen = codegen
        self._code = code
        logger.info(f"Assembled {filename}: {len(code)} bytes")
        return code

    def assemble_file(self, filepath: str | Path) -> bytes:
        """
        Assemble source code from a file.

        Args:
            filepath: Path to assembly source file

        Returns:
            The assembled program bytes

        Raises:
            SourceFileError: If the file cannot be read
            AssemblerError: On the first assembly error
        """
        filepath = Path(filepath)

        try:
            source = filepath.read_text(encoding="ascii", errors="replace")
        except OSError as e:
            raise SourceFileError(str(filepath), e.strerror or str(e)) from e

        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _require_result(self) -> CodeGenerator:
        if self._codegen is None or self._code is None:
            raise AssemblerError("no program has been assembled")
        return self._codegen

    def get_code(self) -> bytes:
        """Return the assembled program bytes."""
        self._require_result()
        return self._code

    def get_labels(self) -> dict[str, int]:
        """Return label names mapped to addresses."""
        return self._require_result().get_labels()

    def get_image(self) -> str:
        """Return the hex dump of the program."""
        self._require_result()
        return format_image(self._code, self.config.header, self.config.bytes_per_line)

    def get_listing(self) -> str:
        """Return the assembly listing."""
        codegen = self._require_result()
        source_lines = [
            self._scanner.line_text(n) for n in range(1, self._scanner.line_count + 1)
        ]
        return format_listing(codegen.listing, self._code, codegen.labels, source_lines)

    def get_symbols(self) -> str:
        """Return the symbol file contents."""
        return format_symbols(self._require_result().labels)

    def write_image(self, filepath: str | Path, mirror: Optional[TextIO] = None) -> None:
        """
        Write the hex dump file.

        Args:
            filepath: Output file path (created or truncated)
            mirror: Optional stream receiving a copy of the dump
        """
        self._require_result()
        with open(filepath, "w") as f:
            write_image(f, self._code, mirror, self.config.header,
                        self.config.bytes_per_line)
        logger.debug(f"Wrote {len(self._code)} bytes to {filepath}")

    def write_listing(self, filepath: str | Path) -> None:
        """Write the assembly listing file."""
        Path(filepath).write_text(self.get_listing())

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the symbol file."""
        Path(filepath).write_text(self.get_symbols())


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>",
             config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Convenience function to assemble source code.

    Raises:
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_string(source, filename)


def assemble_file(filepath: str | Path,
                  config: Optional[AssemblerConfig] = None) -> bytes:
    """
    Convenience function to assemble a file.

    Raises:
        SourceFileError: If the file cannot be read
        AssemblerError: If assembly fails
    """
    return Assembler(config).assemble_file(filepath)
