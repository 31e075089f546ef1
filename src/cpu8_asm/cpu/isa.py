"""
8-bit CPU Instruction Set Definition
====================================

This module defines the instruction set of the 8-bit teaching CPU: its
mnemonics, addressing modes and the byte emitted for each supported
combination.

The bytes are not opcodes in the usual sense: each one is the address of
the instruction's first microcode step in the control unit (CU). Every
instruction occupies two bytes in program memory: the microcode address
followed by an operand byte (0x00 when the instruction takes no operand).

Addressing Modes
----------------
1. **IMPLICIT**: No operand (e.g., clc, rts, tab)
   - Example: rts -> $d1 $00

2. **ABSOLUTE**: Memory address ($nn)
   - Example: sta $20 -> $2c $20

3. **IMMEDIATE**: Literal value (#$nn)
   - Example: lda #$0a -> $06 $0a

4. **INDEXED**: Address plus index register ($nn,a)
   - Example: ldb $10,a -> $d9 $10

5. **INDEXED_INDIRECT**: Pointer at address plus index (($nn,a))
   - Example: ldb ($10,a) -> $25 $10

6. **INDIRECT**: Pointer at address (($nn))
   - Example: lda ($10) -> $0c $10

7. **INDIRECT_INDEXED**: Pointer at address, then plus index (($nn),a)
   - Example: ldb ($10),a -> $1e $10

8. **LABEL**: Symbolic branch/jump target, patched in the second pass
   - Example: jmp loop -> $b8 <address of loop>
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Addressing Mode Enumeration
# =============================================================================

class AddressingMode(Enum):
    """
    Addressing modes of the 8-bit CPU.

    IMPLICIT and LABEL are not written with operand syntax; the other six
    are recognized from the decoration around a hexadecimal literal.
    """
    IMPLICIT = auto()           # No operand
    ABSOLUTE = auto()           # $nn
    IMMEDIATE = auto()          # #$nn
    INDEXED = auto()            # $nn,a
    INDEXED_INDIRECT = auto()   # ($nn,a)
    INDIRECT = auto()           # ($nn)
    INDIRECT_INDEXED = auto()   # ($nn),a
    LABEL = auto()              # name (resolved to an address)

    def __str__(self) -> str:
        """Return human-readable name for error messages."""
        return {
            AddressingMode.IMPLICIT: "implicit",
            AddressingMode.ABSOLUTE: "absolute",
            AddressingMode.IMMEDIATE: "immediate",
            AddressingMode.INDEXED: "indexed",
            AddressingMode.INDEXED_INDIRECT: "indexed indirect",
            AddressingMode.INDIRECT: "indirect",
            AddressingMode.INDIRECT_INDEXED: "indirect indexed",
            AddressingMode.LABEL: "label",
        }[self]


# Modes written as a decorated hexadecimal literal
OPERAND_MODES: tuple[AddressingMode, ...] = (
    AddressingMode.IMMEDIATE,
    AddressingMode.INDEXED,
    AddressingMode.ABSOLUTE,
    AddressingMode.INDEXED_INDIRECT,
    AddressingMode.INDIRECT_INDEXED,
    AddressingMode.INDIRECT,
)


# =============================================================================
# Opcode Descriptor
# =============================================================================

@dataclass(frozen=True)
class OpcodeDescriptor:
    """
    Encodings of one mnemonic.

    Each field holds the microcode address emitted for that addressing
    mode, or None if the instruction does not support it. An instruction
    is either implicit-only or takes an operand in one or more of the
    other modes.

    Attributes:
        mnemonic: Three-letter lowercase mnemonic
        implicit: Single-byte form (no operand)
        absolute: $nn
        immediate: #$nn
        indexed: $nn,a
        indexed_indirect: ($nn,a)
        indirect: ($nn)
        indirect_indexed: ($nn),a
        label: Symbolic target, operand patched with a label address
    """
    mnemonic: str
    implicit: Optional[int] = None
    absolute: Optional[int] = None
    immediate: Optional[int] = None
    indexed: Optional[int] = None
    indexed_indirect: Optional[int] = None
    indirect: Optional[int] = None
    indirect_indexed: Optional[int] = None
    label: Optional[int] = None

    def opcode_for(self, mode: AddressingMode) -> Optional[int]:
        """Return the byte for an addressing mode, or None if unsupported."""
        return getattr(self, mode.name.lower())

    def supports(self, mode: AddressingMode) -> bool:
        """Check whether the instruction can be used in an addressing mode."""
        return self.opcode_for(mode) is not None

    @property
    def is_implicit(self) -> bool:
        """True for single-byte instructions that take no operand."""
        return self.implicit is not None

    @property
    def supports_label(self) -> bool:
        """True for branch/jump instructions that accept a label operand."""
        return self.label is not None

    @property
    def modes(self) -> list[AddressingMode]:
        """All addressing modes this instruction supports."""
        return [mode for mode in AddressingMode if self.supports(mode)]

    def __repr__(self) -> str:
        encodings = ", ".join(
            f"{mode.name.lower()}=${self.opcode_for(mode):02X}" for mode in self.modes
        )
        return f"OpcodeDescriptor({self.mnemonic!r}, {encodings})"


def _op(mnemonic: str, implicit=None, absolute=None, immediate=None, indexed=None,
        indexed_indirect=None, indirect=None, indirect_indexed=None,
        label=None) -> tuple[str, OpcodeDescriptor]:
    return mnemonic, OpcodeDescriptor(
        mnemonic, implicit, absolute, immediate, indexed,
        indexed_indirect, indirect, indirect_indexed, label,
    )


# =============================================================================
# Opcode Table
# =============================================================================
# Master table of all instructions, keyed by mnemonic.
# Branches and jumps list the same byte for IMMEDIATE and LABEL: the operand
# byte is the target address in both cases.
# =============================================================================

OPCODE_TABLE: dict[str, OpcodeDescriptor] = dict([
    # Arithmetic
    _op("adc", absolute=0x5A, immediate=0x57),     # Add with carry
    _op("sbc", absolute=0x62, immediate=0x5F),     # Subtract with carry
    _op("inc", implicit=0x67),                     # Increment A
    _op("dec", implicit=0x6A),                     # Decrement A
    _op("cmp", absolute=0xA6, immediate=0xA4),     # Compare A

    # Logic
    _op("and", absolute=0x70, immediate=0x6D),
    _op("ora", absolute=0x78, immediate=0x75),
    _op("eor", absolute=0x80, immediate=0x7D),

    # Shift / rotate
    _op("lsl", implicit=0x85),
    _op("lsr", implicit=0x88),
    _op("asl", implicit=0x8B),
    _op("rol", implicit=0x8E),
    _op("ror", implicit=0x91),

    # Conditional branches
    _op("bpl", immediate=0x94, label=0x94),        # Branch if plus
    _op("bmi", immediate=0x96, label=0x96),        # Branch if minus
    _op("bcc", immediate=0x98, label=0x98),        # Branch if carry clear
    _op("bcs", immediate=0x9A, label=0x9A),        # Branch if carry set
    _op("bne", immediate=0x9C, label=0x9C),        # Branch if not equal
    _op("beq", immediate=0x9E, label=0x9E),        # Branch if equal

    # Flags
    _op("sec", implicit=0xA0),                     # Set carry
    _op("clc", implicit=0xA2),                     # Clear carry

    # Stack
    _op("pha", implicit=0xAA),                     # Push A
    _op("pop", implicit=0xB2),                     # Pull A

    # Jumps and subroutines
    _op("jmp", absolute=0xBA, immediate=0xB8, label=0xB8),
    _op("jsr", absolute=0xC8, immediate=0xBE, label=0xBE),
    _op("rts", implicit=0xD1),

    # Loads and stores
    _op("lda", absolute=0x08, immediate=0x06, indirect=0x0C),
    _op("ldb", absolute=0x14, immediate=0x12, indexed=0xD9, indexed_indirect=0x25,
        indirect=0x18, indirect_indexed=0x1E),
    _op("sta", absolute=0x2C, indirect=0x30),
    _op("stb", absolute=0x3B, indexed=0x36, indexed_indirect=0x4C,
        indirect=0x3F, indirect_indexed=0x45),

    # Register transfers
    _op("tab", implicit=0x53),
    _op("tba", implicit=0x55),
    _op("cib", implicit=0xD7),
])


# =============================================================================
# Instruction Set Reference Lists
# =============================================================================

MNEMONICS: frozenset[str] = frozenset(OPCODE_TABLE)

# Single-byte instructions
IMPLICIT_INSTRUCTIONS: frozenset[str] = frozenset(
    name for name, desc in OPCODE_TABLE.items() if desc.is_implicit
)

# Instructions accepting a label operand
LABEL_INSTRUCTIONS: frozenset[str] = frozenset(
    name for name, desc in OPCODE_TABLE.items() if desc.supports_label
)


# =============================================================================
# Lookup Functions
# =============================================================================

def lookup(mnemonic: str) -> Optional[OpcodeDescriptor]:
    """
    Look up an instruction by mnemonic.

    The match is exact: mnemonics are lowercase, so "LDA" is not found.

    Args:
        mnemonic: The instruction mnemonic (e.g., "lda")

    Returns:
        OpcodeDescriptor if found, None otherwise
    """
    return OPCODE_TABLE.get(mnemonic)


def is_valid_mnemonic(mnemonic: str) -> bool:
    """Check if a token is a mnemonic of the instruction set."""
    return mnemonic in MNEMONICS


def get_supported_modes(mnemonic: str) -> list[AddressingMode]:
    """
    Get all addressing modes an instruction supports.

    Args:
        mnemonic: The instruction mnemonic

    Returns:
        List of AddressingModes, empty for unknown mnemonics
    """
    descriptor = lookup(mnemonic)
    return descriptor.modes if descriptor else []
