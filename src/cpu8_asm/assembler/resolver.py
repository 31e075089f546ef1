"""
Symbol Resolver
===============

Second assembly pass: writes each label's address into the operand byte
of every instruction that referenced it. References are processed in the
order they were recorded; repeated references to one label are patched
independently.
"""

import logging

from cpu8_asm.errors import AddressRangeError, UndefinedLabelError
from cpu8_asm.assembler.encoder import MAX_OPERAND
from cpu8_asm.assembler.image import ProgramImage
from cpu8_asm.assembler.symbols import ForwardReferenceTable, LabelTable

logger = logging.getLogger(__name__)


def resolve_references(
    image: ProgramImage,
    labels: LabelTable,
    references: ForwardReferenceTable,
) -> int:
    """
    Patch all forward references into the program image.

    Args:
        image: The program image from the first pass
        labels: Declared labels
        references: Recorded label references

    Returns:
        Number of patched bytes

    Raises:
        UndefinedLabelError: For the first reference to an undeclared label
        AddressRangeError: If a label address does not fit in an operand byte
    """
    patched = 0

    for reference in references:
        label = labels.get(reference.name)
        if label is None:
            raise UndefinedLabelError(
                reference.name,
                location=reference.location,
                similar_labels=labels.similar(reference.name),
            )

        # A label after a full image is bound past the last addressable byte
        if label.address > MAX_OPERAND:
            raise AddressRangeError(
                reference.name, label.address, location=reference.location
            )

        image.patch(reference.address, label.address)
        logger.debug(
            f"Patched ${reference.address:02X} with '{label.name}' (${label.address:02X})"
        )
        patched += 1

    return patched
