"""
8-bit CPU Assembler
===================

Two-pass assembler for the 8-bit teaching CPU. Source files are turned
into a 256-byte memory image written as a Logisim "v2.0 raw" hex dump.

Main Components
---------------
- **Assembler**: Main class that orchestrates the assembly process
- **Scanner**: Splits source into whitespace-delimited tokens
- **classify / encode**: Addressing-mode recognition and operand encoding
- **CodeGenerator**: The assembly pass and label resolution
- **write_image**: Hex dump writer

Assembly Process
----------------
1. **Scanning**: strip ';' comments, split lines into tokens
2. **Pass 1 (CodeGenerator)**: emit two bytes per instruction, bind labels,
   record label references
3. **Pass 2 (resolve_references)**: patch label addresses into the image
4. **Output (write_image)**: hex dump, optionally listing and symbols

Example Usage
-------------
>>> from cpu8_asm.assembler import assemble
>>> assemble("jmp loop\\nloop: clc").hex()
'b802a200'

Source Syntax
-------------
- Mnemonics are three lowercase letters: lda, sta, jmp, ...
- Operands: #$nn, $nn, $nn,a, ($nn), ($nn,a), ($nn),a or a label name
- Labels are declared as "name:" and bound to the next instruction
- Comments start with ';'
"""

from cpu8_asm.assembler.assembler import Assembler, assemble, assemble_file
from cpu8_asm.assembler.scanner import Scanner, Token
from cpu8_asm.assembler.modes import classify, split_operand, is_feasible
from cpu8_asm.assembler.encoder import encode
from cpu8_asm.assembler.image import ProgramImage
from cpu8_asm.assembler.symbols import (
    Label,
    LabelTable,
    ForwardReference,
    ForwardReferenceTable,
)
from cpu8_asm.assembler.codegen import CodeGenerator, ListingEntry, PassState
from cpu8_asm.assembler.resolver import resolve_references
from cpu8_asm.assembler.writer import (
    write_image,
    format_image,
    format_listing,
    format_symbols,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    # Scanner
    "Scanner",
    "Token",
    # Operands
    "classify",
    "split_operand",
    "is_feasible",
    "encode",
    # Program state
    "ProgramImage",
    "Label",
    "LabelTable",
    "ForwardReference",
    "ForwardReferenceTable",
    # Passes
    "CodeGenerator",
    "ListingEntry",
    "PassState",
    "resolve_references",
    # Output
    "write_image",
    "format_image",
    "format_listing",
    "format_symbols",
]
