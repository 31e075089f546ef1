"""
cpu8-asm CPU Package
====================

Instruction set definitions of the 8-bit CPU, shared by the assembler
passes, the operand encoder and the listing writer.

Modules:
    isa: Mnemonics, addressing modes and the opcode table.

Usage:
    from cpu8_asm.cpu import AddressingMode, lookup

    desc = lookup("lda")
    desc.opcode_for(AddressingMode.IMMEDIATE)   # 0x06
"""

from cpu8_asm.cpu.isa import (
    # Core types
    AddressingMode,
    OpcodeDescriptor,
    OPERAND_MODES,
    # Master instruction database
    OPCODE_TABLE,
    # Instruction set reference lists
    MNEMONICS,
    IMPLICIT_INSTRUCTIONS,
    LABEL_INSTRUCTIONS,
    # Lookup functions
    lookup,
    is_valid_mnemonic,
    get_supported_modes,
)

__all__ = [
    "AddressingMode",
    "OpcodeDescriptor",
    "OPERAND_MODES",
    "OPCODE_TABLE",
    "MNEMONICS",
    "IMPLICIT_INSTRUCTIONS",
    "LABEL_INSTRUCTIONS",
    "lookup",
    "is_valid_mnemonic",
    "get_supported_modes",
]
