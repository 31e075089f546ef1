"""
Program Image
=============

The assembled memory contents: a byte buffer with a fixed capacity and a
write cursor (the program counter). Every instruction is written as two
bytes, so the cursor always advances by 2.
"""

from typing import Optional

from cpu8_asm.config import MAX_MEMORY_SIZE
from cpu8_asm.errors import ProgramTooLargeError, SourceLocation

# Bytes per instruction
INSTRUCTION_SIZE = 2


class ProgramImage:
    """
    Fixed-capacity program memory being assembled.

    The buffer grows as instructions are emitted; emitting past the
    capacity raises ProgramTooLargeError and leaves the image unchanged.

    Usage:
        image = ProgramImage()
        image.emit(0x06, 0x0A)     # lda #$0a at $00
        image.patch(0x01, 0x20)    # rewrite the operand byte
        data = image.to_bytes()
    """

    def __init__(self, capacity: int = MAX_MEMORY_SIZE):
        self.capacity = capacity
        self._data = bytearray()

    @property
    def cursor(self) -> int:
        """Address of the next instruction."""
        return len(self._data)

    def emit(self, opcode: int, operand: int = 0x00,
             location: Optional[SourceLocation] = None) -> int:
        """
        Append one two-byte instruction.

        Args:
            opcode: Microcode address byte
            operand: Operand byte (0x00 for implicit instructions)
            location: Source location for error reporting

        Returns:
            Address the instruction was written at

        Raises:
            ProgramTooLargeError: If the instruction does not fit
        """
        address = self.cursor
        if address + INSTRUCTION_SIZE > self.capacity:
            raise ProgramTooLargeError(self.capacity, location=location)

        self._data += bytes((opcode, operand))
        return address

    def patch(self, address: int, value: int) -> None:
        """
        Overwrite an already emitted byte.

        Raises:
            IndexError: If address has not been emitted yet
            ValueError: If value does not fit in a byte
        """
        if not 0 <= address < len(self._data):
            raise IndexError(f"patch address ${address:02X} outside image")
        if not 0 <= value <= 0xFF:
            raise ValueError(f"patch value ${value:X} does not fit in a byte")
        self._data[address] = value

    def to_bytes(self) -> bytes:
        """Return the emitted bytes."""
        return bytes(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, address: int) -> int:
        return self._data[address]
