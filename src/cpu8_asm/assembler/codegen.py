"""
Code Generator
==============

This module turns the token stream into a program image. It implements
the two-pass assembly process:

Pass 1 (Assembly)
-----------------
A two-state machine reads the tokens in order:

- IDLE: expecting a mnemonic or a label declaration ("name:").
  Implicit instructions are emitted immediately; a mnemonic that needs
  an operand switches to AWAITING_OPERAND. Labels are bound to the
  current address.
- AWAITING_OPERAND: the next token is the operand of the pending
  instruction. A decorated literal is encoded in place; a bare
  identifier given to a branch or jump is emitted with a 0x00
  placeholder and recorded as a forward reference.

Pass 2 (Resolution)
-------------------
Every recorded forward reference is patched with its label's address
(see resolver.py). Labels may therefore be used before or after their
declaration.

Each instruction takes exactly two bytes; the cursor never passes the
image capacity.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Optional
import logging

from cpu8_asm.config import AssemblerConfig
from cpu8_asm.cpu import AddressingMode, OpcodeDescriptor, lookup
from cpu8_asm.errors import (
    InvalidLabelError,
    InvalidOperandError,
    MissingOperandError,
    UnknownMnemonicError,
)
from cpu8_asm.assembler.encoder import encode
from cpu8_asm.assembler.image import ProgramImage
from cpu8_asm.assembler.modes import classify, is_feasible, is_label_reference
from cpu8_asm.assembler.resolver import resolve_references
from cpu8_asm.assembler.scanner import Token
from cpu8_asm.assembler.symbols import ForwardReferenceTable, LabelTable

logger = logging.getLogger(__name__)

# Suffix marking a label declaration
LABEL_SUFFIX = ":"


class PassState(Enum):
    """States of the assembly pass."""
    IDLE = auto()               # Expecting a mnemonic or label declaration
    AWAITING_OPERAND = auto()   # Expecting the operand of a pending mnemonic


@dataclass
class ListingEntry:
    """
    One emitted instruction, for the assembly listing.

    The bytes are read back from the image when the listing is written,
    so patched label addresses show their final values.

    Attributes:
        address: Address of the instruction
        line: Source line of the mnemonic
        text: Mnemonic and operand as written
        mode: Addressing mode used
    """
    address: int
    line: int
    text: str
    mode: AddressingMode


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Assembles a token stream into a program image.

    One CodeGenerator is one assembly session: it owns the program image,
    the label table and the forward-reference table. Create a fresh
    instance for every program.

    Usage:
        codegen = CodeGenerator()
        code = codegen.generate(Scanner(source).tokenize())
        labels = codegen.get_labels()

    Tokens can also be fed one at a time with feed(), followed by
    finish() and resolve().
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self.image = ProgramImage(self.config.memory_size)
        self.labels = LabelTable(self.config.max_labels, self.config.max_label_length)
        self.references = ForwardReferenceTable(
            self.config.max_jumps, self.config.max_label_length
        )
        self.listing: list[ListingEntry] = []

        self._state = PassState.IDLE
        self._pending: Optional[OpcodeDescriptor] = None
        self._pending_token: Optional[Token] = None

    @property
    def state(self) -> PassState:
        """Current state of the assembly pass."""
        return self._state

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, tokens: Iterable[Token]) -> bytes:
        """
        Run both passes over a token stream.

        Args:
            tokens: Tokens from Scanner.tokenize()

        Returns:
            The assembled program bytes

        Raises:
            AssemblerError: On the first error found (fail-fast)
        """
        for token in tokens:
            self.feed(token)
        self.finish()
        self.resolve()

        logger.debug(
            f"Assembled {len(self.image)} bytes, {len(self.labels)} labels, "
            f"{len(self.references)} references"
        )
        return self.image.to_bytes()

    def feed(self, token: Token) -> None:
        """Process one token."""
        if self._state is PassState.AWAITING_OPERAND:
            self._handle_operand(token)
        else:
            self._handle_statement(token)

    def finish(self) -> None:
        """
        Mark the end of input.

        Raises:
            MissingOperandError: If an instruction still waits for its operand
        """
        if self._state is PassState.AWAITING_OPERAND:
            token = self._pending_token
            raise MissingOperandError(token.text, location=token.location)

    def resolve(self) -> None:
        """Patch all forward references (pass 2)."""
        resolve_references(self.image, self.labels, self.references)

    def get_code(self) -> bytes:
        """Return the program bytes emitted so far."""
        return self.image.to_bytes()

    def get_labels(self) -> dict[str, int]:
        """Return label names mapped to addresses."""
        return self.labels.as_dict()

    # =========================================================================
    # IDLE State
    # =========================================================================

    def _handle_statement(self, token: Token) -> None:
        """Handle a token in instruction position."""
        descriptor = lookup(token.text)

        if descriptor is not None:
            if descriptor.is_implicit:
                self._emit(token, descriptor.implicit, 0x00, token.text,
                           AddressingMode.IMPLICIT)
            else:
                self._pending = descriptor
                self._pending_token = token
                self._state = PassState.AWAITING_OPERAND
            return

        if token.text.endswith(LABEL_SUFFIX):
            self._declare_label(token)
            return

        hint = None
        if lookup(token.text.lower()) is not None:
            hint = f"mnemonics are lowercase: '{token.text.lower()}'"
        raise UnknownMnemonicError(token.text, location=token.location, hint=hint)

    def _declare_label(self, token: Token) -> None:
        """Bind a label declaration to the current address."""
        name = token.text[:-len(LABEL_SUFFIX)]

        if not name:
            raise InvalidLabelError(name, "empty name", location=token.location)
        if lookup(name) is not None:
            raise InvalidLabelError(name, "name is a mnemonic", location=token.location)
        if not is_label_reference(name):
            raise InvalidLabelError(
                name, "not an identifier", location=token.location
            )

        label = self.labels.declare(name, self.image.cursor, token.location)
        logger.debug(f"Label '{label.name}' = ${label.address:02X}")

    # =========================================================================
    # AWAITING_OPERAND State
    # =========================================================================

    def _handle_operand(self, token: Token) -> None:
        """Handle the operand of the pending instruction."""
        descriptor = self._pending
        mnemonic_token = self._pending_token
        text = f"{mnemonic_token.text} {token.text}"
        mode = classify(token.text)

        if is_feasible(descriptor, token.text):
            opcode, operand = encode(descriptor, mode, token.text, token.location)
            self._emit(mnemonic_token, opcode, operand, text, mode)

        elif descriptor.supports_label and is_label_reference(token.text):
            self.references.check(token.text, token.location)
            address = self._emit(mnemonic_token, descriptor.label, 0x00, text,
                                 AddressingMode.LABEL)
            reference = self.references.record(address + 1, token.text, token.location)
            logger.debug(
                f"Forward reference to '{reference.name}' at ${reference.address:02X}"
            )

        else:
            hint = None
            if mode is not None:
                hint = (
                    f"'{descriptor.mnemonic}' does not support {mode} addressing; "
                    f"supports: {', '.join(str(m) for m in descriptor.modes)}"
                )
            elif descriptor.supports_label:
                hint = "label names are identifiers such as 'loop'"
            raise InvalidOperandError(
                descriptor.mnemonic, token.text, location=token.location, hint=hint
            )

        self._pending = None
        self._pending_token = None
        self._state = PassState.IDLE

    # =========================================================================
    # Code Emission
    # =========================================================================

    def _emit(self, token: Token, opcode: int, operand: int, text: str,
              mode: AddressingMode) -> int:
        """Write an instruction and record it for the listing."""
        address = self.image.emit(opcode, operand, location=token.location)
        self.listing.append(ListingEntry(address, token.line, text, mode))
        return address
