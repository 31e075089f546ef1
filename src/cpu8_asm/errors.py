"""
cpu8-asm Error Hierarchy
========================

This module defines the exception hierarchy for the assembler. All
exceptions inherit from Cpu8AsmError, allowing callers to catch every
assembler-related error with a single except clause.

Exception Hierarchy
-------------------
Cpu8AsmError (base)
├── SourceFileError - input file missing or unreadable
└── AssemblerError (assembly-related)
    ├── AssemblySyntaxError - malformed source
    │   ├── UnknownMnemonicError - token is neither mnemonic nor label
    │   ├── InvalidOperandError - operand matches no usable form
    │   ├── MissingOperandError - input ended before an operand
    │   └── InvalidLabelError - label name is not a valid identifier
    ├── AddressingModeError - mode not supported by the instruction
    ├── AddressFormatError - operand literal is not hexadecimal
    ├── AddressRangeError - operand value outside $00-$FF
    ├── LabelTooLongError - label name exceeds the length bound
    ├── LabelTableFullError - too many label declarations
    ├── JumpTableFullError - too many label references
    ├── DuplicateLabelError - label declared twice
    ├── ProgramTooLargeError - program image overflow
    └── UndefinedLabelError - reference to an undeclared label

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
        ^ (pointer to error location)
    hint: suggestion for fixing (when available)

Assembly is fail-fast: the first error raised aborts the whole run, and
no output image is produced.
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Cpu8AsmError(Exception):
    """
    Base exception for all cpu8-asm errors.

        try:
            assembler.assemble_file("program.asm")
        except Cpu8AsmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


class SourceFileError(Cpu8AsmError):
    """
    The source file cannot be opened for reading.

    Raised by Assembler.assemble_file() instead of leaking the underlying
    OSError, so the CLI can report it together with the other input errors.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"cannot read source file '{path}': {reason}")


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(Cpu8AsmError):
    """
    Base exception for all assembly errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> int:
        """Source line of the error, or -1 when it is not tied to one."""
        return self.location.line if self.location else -1

    def with_source_line(self, source_line: str) -> "AssemblerError":
        """Attach the offending source text and rebuild the message."""
        self.source_line = source_line
        self.args = (self._format_message(),)
        return self

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            loop.asm:4:9: error: undefined label 'lop'
                jmp     lop
                        ^
            hint: did you mean 'loop'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class AssemblySyntaxError(AssemblerError):
    """
    Syntax error in assembly source code.

    Raised when a token cannot be interpreted in its position, e.g. an
    unknown mnemonic, a malformed operand or a missing operand.
    """
    pass


class UnknownMnemonicError(AssemblySyntaxError):
    """
    Token in instruction position is neither a mnemonic nor a label.

    Mnemonics are matched exactly and are lowercase; 'LDA' is reported
    here with a hint pointing at 'lda'.
    """

    def __init__(
        self,
        token: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            f"unknown mnemonic '{token}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class InvalidOperandError(AssemblySyntaxError):
    """
    Operand matches neither a supported addressing mode nor a label.

    Example:
        lda loop    ; Error: lda cannot take a label operand
    """

    def __init__(
        self,
        mnemonic: str,
        operand: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        self.operand = operand
        super().__init__(
            f"invalid operand '{operand}' for '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class MissingOperandError(AssemblySyntaxError):
    """Source ended while a two-byte instruction still waited for its operand."""

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.mnemonic = mnemonic
        super().__init__(
            f"missing operand for '{mnemonic}'",
            location=location,
            source_line=source_line,
        )


class InvalidLabelError(AssemblySyntaxError):
    """
    Label declaration with an unusable name.

    Label names must be identifiers (letter or underscore, then letters,
    digits and underscores) and must not collide with a mnemonic.
    """

    def __init__(
        self,
        name: str,
        reason: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.reason = reason
        super().__init__(
            f"invalid label '{name}': {reason}",
            location=location,
            source_line=source_line,
        )


class AddressingModeError(AssemblerError):
    """
    Invalid addressing mode for instruction.

    Example:
        sta #$41  ; Error: sta doesn't support immediate mode
    """

    def __init__(
        self,
        mnemonic: str,
        mode: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid_modes: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.mode = mode
        self.valid_modes = valid_modes or []

        hint = None
        if self.valid_modes:
            hint = f"{mnemonic} supports: {', '.join(self.valid_modes)}"

        super().__init__(
            f"'{mnemonic}' does not support {mode} addressing mode",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class AddressFormatError(AssemblerError):
    """
    Operand literal is not a hexadecimal number.

    The text left after removing the addressing-mode decoration must be
    one or more hex digits, e.g. '$3G' and '#$' are rejected.
    """

    def __init__(
        self,
        operand: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        super().__init__(
            f"invalid address format '{operand}'",
            location=location,
            hint="operands are hexadecimal literals such as $3f",
            source_line=source_line,
        )


class AddressRangeError(AssemblerError):
    """
    Operand value does not fit the 256-byte memory.

    Example:
        lda $100  ; Error: $100 is outside $00-$FF
    """

    def __init__(
        self,
        operand: str,
        value: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        self.value = value
        super().__init__(
            f"invalid address range '{operand}' (${value:X})",
            location=location,
            hint="operand values must lie between $00 and $ff",
            source_line=source_line,
        )


class LabelTooLongError(AssemblerError):
    """Label name (declared or referenced) is longer than the configured bound."""

    def __init__(
        self,
        name: str,
        max_length: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.max_length = max_length
        super().__init__(
            f"label name is too long ({len(name)} > {max_length} characters)",
            location=location,
            source_line=source_line,
        )


class LabelTableFullError(AssemblerError):
    """More labels were declared than the label table holds."""

    def __init__(
        self,
        name: str,
        capacity: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.capacity = capacity
        super().__init__(
            f"exceeded label count ({capacity}) declaring '{name}'",
            location=location,
            source_line=source_line,
        )


class JumpTableFullError(AssemblerError):
    """More label references were made than the forward-reference table holds."""

    def __init__(
        self,
        name: str,
        capacity: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.capacity = capacity
        super().__init__(
            f"exceeded jump count ({capacity}) referencing '{name}'",
            location=location,
            source_line=source_line,
        )


class DuplicateLabelError(AssemblerError):
    """
    Label declared more than once.

    Includes the location of the original declaration when available.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class ProgramTooLargeError(AssemblerError):
    """
    The program does not fit the program image.

    Every instruction takes two bytes, so a 256-byte image holds at most
    128 instructions.
    """

    def __init__(
        self,
        capacity: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.capacity = capacity
        super().__init__(
            f"program exceeds memory size ({capacity} bytes)",
            location=location,
            hint=f"at most {capacity // 2} instructions fit",
            source_line=source_line,
        )


class UndefinedLabelError(AssemblerError):
    """
    Reference to a label that was never declared.

    Raised by the resolution pass. The location is that of the referencing
    operand; similarly-named labels are offered as a hint to catch typos.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_labels: Optional[list[str]] = None,
    ):
        self.name = name
        self.similar_labels = similar_labels or []

        hint = None
        if self.similar_labels:
            suggestions = ", ".join(f"'{s}'" for s in self.similar_labels[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"could not find label '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )
