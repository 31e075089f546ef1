"""
cpu8-asm - Assembler for the 8-bit Teaching CPU
===============================================

This package assembles mnemonic source for a small 8-bit CPU into a
256-byte memory image. The image is written as a Logisim "v2.0 raw" hex
dump that can be loaded into the simulated CPU's program memory.

Every instruction occupies two bytes: a control-unit microcode address
and an operand byte.

Main Components
---------------
- **cpu**: Instruction set definition (mnemonics, addressing modes)
- **assembler**: Scanner, two-pass code generator, output writers
- **cli**: The c8asm command-line tool

Quick Start
-----------
Assemble a program:
    >>> from cpu8_asm import Assembler
    >>> asm = Assembler()
    >>> code = asm.assemble_file("count.asm")
    >>> asm.write_image("count.out")

Or use the command-line tool:
    $ c8asm count.asm count.out

Version History
---------------
0.2.0 - Label references, forward resolution, Logisim output
"""

__version__ = "0.2.0"

# =============================================================================
# Public API Exports
# =============================================================================

from cpu8_asm.assembler import Assembler, assemble, assemble_file
from cpu8_asm.config import AssemblerConfig
from cpu8_asm.errors import (
    Cpu8AsmError,
    SourceFileError,
    AssemblerError,
    AssemblySyntaxError,
    UnknownMnemonicError,
    InvalidOperandError,
    MissingOperandError,
    InvalidLabelError,
    AddressingModeError,
    AddressFormatError,
    AddressRangeError,
    LabelTooLongError,
    LabelTableFullError,
    JumpTableFullError,
    DuplicateLabelError,
    ProgramTooLargeError,
    UndefinedLabelError,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Exception hierarchy
    "Cpu8AsmError",
    "SourceFileError",
    "AssemblerError",
    "AssemblySyntaxError",
    "UnknownMnemonicError",
    "InvalidOperandError",
    "MissingOperandError",
    "InvalidLabelError",
    "AddressingModeError",
    "AddressFormatError",
    "AddressRangeError",
    "LabelTooLongError",
    "LabelTableFullError",
    "JumpTableFullError",
    "DuplicateLabelError",
    "ProgramTooLargeError",
    "UndefinedLabelError",
]
