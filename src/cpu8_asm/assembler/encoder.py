"""
Operand Encoder
===============

Turns a classified operand token into the two bytes of an instruction:
the microcode address for the addressing mode, then the operand value.

Operand values are single hexadecimal literals; there is no expression
evaluation. A value must address the 256-byte program memory, so it has
to lie between $00 and $FF.
"""

from typing import Optional
import string

from cpu8_asm.cpu import AddressingMode, OpcodeDescriptor
from cpu8_asm.assembler.modes import split_operand
from cpu8_asm.errors import (
    AddressFormatError,
    AddressRangeError,
    AddressingModeError,
    SourceLocation,
)


# Largest operand value (one page of memory)
MAX_OPERAND = 0xFF

HEX_DIGITS = frozenset(string.hexdigits)


def parse_hex(text: str) -> Optional[int]:
    """
    Parse a bare hexadecimal literal.

    Returns:
        The value, or None if text is empty or contains a non-hex character
    """
    if not text or not HEX_DIGITS.issuperset(text):
        return None
    return int(text, 16)


def encode(
    descriptor: OpcodeDescriptor,
    mode: AddressingMode,
    token: str,
    location: Optional[SourceLocation] = None,
) -> tuple[int, int]:
    """
    Encode an operand for an instruction.

    Args:
        descriptor: The instruction being assembled
        mode: The operand's addressing mode (from classify())
        token: The operand as written, e.g. "#$0a"
        location: Source location for error reporting

    Returns:
        (mode_byte, operand_byte)

    Raises:
        AddressingModeError: If the token is not in the given mode or the
                             instruction does not support it
        AddressFormatError: If the literal is not hexadecimal
        AddressRangeError: If the value is outside $00-$FF
    """
    opcode = descriptor.opcode_for(mode)
    token_mode, body = split_operand(token)

    if opcode is None or token_mode is not mode:
        raise AddressingModeError(
            descriptor.mnemonic,
            str(mode),
            location=location,
            valid_modes=[str(m) for m in descriptor.modes],
        )

    value = parse_hex(body)
    if value is None:
        raise AddressFormatError(token, location=location)

    if value > MAX_OPERAND:
        raise AddressRangeError(token, value, location=location)

    return opcode, value
