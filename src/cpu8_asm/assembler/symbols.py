"""
Label and Forward-Reference Tables
==================================

Both tables are bounded. The label table maps each declared label to the
address of the instruction that follows the declaration; the
forward-reference table lists every operand byte that must be patched with
a label address once the whole source has been read.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import difflib

from cpu8_asm.config import MAX_JUMPS, MAX_LABEL_LENGTH, MAX_LABELS
from cpu8_asm.errors import (
    DuplicateLabelError,
    JumpTableFullError,
    LabelTableFullError,
    LabelTooLongError,
    SourceLocation,
)


# =============================================================================
# Table Entries
# =============================================================================

@dataclass(frozen=True)
class Label:
    """
    Label table entry.

    Attributes:
        name: Label name, case as written
        address: Program image address the label denotes
        location: Where the label was declared
    """
    name: str
    address: int
    location: Optional[SourceLocation] = None


@dataclass(frozen=True)
class ForwardReference:
    """
    Operand byte waiting for a label address.

    Attributes:
        address: Program image address of the operand byte to patch
        name: Referenced label name
        location: Where the reference was written
    """
    address: int
    name: str
    location: Optional[SourceLocation] = None


# =============================================================================
# Label Table
# =============================================================================

class LabelTable:
    """
    Write-once mapping of label names to addresses.

    Attributes:
        capacity: Maximum number of labels
        max_length: Longest accepted name
    """

    def __init__(self, capacity: int = MAX_LABELS,
                 max_length: int = MAX_LABEL_LENGTH):
        self.capacity = capacity
        self.max_length = max_length
        self._labels: dict[str, Label] = {}

    def declare(self, name: str, address: int,
                location: Optional[SourceLocation] = None) -> Label:
        """
        Add a label.

        Raises:
            LabelTooLongError: If the name is longer than max_length
            DuplicateLabelError: If the name is already declared
            LabelTableFullError: If the table is full
        """
        if len(name) > self.max_length:
            raise LabelTooLongError(name, self.max_length, location=location)

        if name in self._labels:
            raise DuplicateLabelError(
                name,
                location=location,
                original_location=self._labels[name].location,
            )

        if len(self._labels) >= self.capacity:
            raise LabelTableFullError(name, self.capacity, location=location)

        label = Label(name, address, location)
        self._labels[name] = label
        return label

    def get(self, name: str) -> Optional[Label]:
        """Look up a label by exact name."""
        return self._labels.get(name)

    def similar(self, name: str) -> list[str]:
        """Return declared names close to name, best match first."""
        return difflib.get_close_matches(name, self._labels.keys(), n=3)

    def as_dict(self) -> dict[str, int]:
        """Return label names mapped to addresses, in declaration order."""
        return {name: label.address for name, label in self._labels.items()}

    def __contains__(self, name: str) -> bool:
        return name in self._labels

    def __iter__(self) -> Iterator[Label]:
        return iter(self._labels.values())

    def __len__(self) -> int:
        return len(self._labels)


# =============================================================================
# Forward-Reference Table
# =============================================================================

class ForwardReferenceTable:
    """
    Ordered list of label references to patch after the first pass.

    Attributes:
        capacity: Maximum number of references
        max_length: Longest accepted label name
    """

    def __init__(self, capacity: int = MAX_JUMPS,
                 max_length: int = MAX_LABEL_LENGTH):
        self.capacity = capacity
        self.max_length = max_length
        self._references: list[ForwardReference] = []

    def check(self, name: str, location: Optional[SourceLocation] = None) -> None:
        """
        Verify that a reference to name can be recorded.

        Raises:
            LabelTooLongError: If the name is longer than max_length
            JumpTableFullError: If the table is full
        """
        if len(name) > self.max_length:
            raise LabelTooLongError(name, self.max_length, location=location)

        if len(self._references) >= self.capacity:
            raise JumpTableFullError(name, self.capacity, location=location)

    def record(self, address: int, name: str,
               location: Optional[SourceLocation] = None) -> ForwardReference:
        """Validate and append a reference."""
        self.check(name, location)
        reference = ForwardReference(address, name, location)
        self._references.append(reference)
        return reference

    def __iter__(self) -> Iterator[ForwardReference]:
        return iter(self._references)

    def __len__(self) -> int:
        return len(self._references)
