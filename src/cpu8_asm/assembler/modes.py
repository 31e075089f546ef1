"""
Addressing-Mode Classifier
==========================

Recognizes the addressing mode of an operand token from its decoration.

Operand Grammar
---------------
Each mode is a named, anchored pattern around a literal body. The body
may not contain ',', '(' or ')', which makes the six forms mutually
exclusive: no token matches more than one of them.

| Mode             | Form       | Example   |
|------------------|------------|-----------|
| Immediate        | #$body     | #$3f      |
| Indexed          | $body,a    | $3f,a     |
| Absolute         | $body      | $3f       |
| Indexed indirect | ($body,a)  | ($3f,a)   |
| Indirect indexed | ($body),a  | ($3f),a   |
| Indirect         | ($body)    | ($3f)     |

The body is not validated here; "$zz" classifies as absolute and is
rejected later by the operand encoder with an address format error.

Tokens that match no form are unclassified (None). A bare identifier
such as "loop" is unclassified too; the code generator treats it as a
label reference when the instruction allows one.
"""

from typing import Optional
import re

from cpu8_asm.cpu import AddressingMode, OpcodeDescriptor, OPERAND_MODES


# Literal body between the decorations
_BODY = r"(?P<body>[^,()]*)"

# Evaluated in OPERAND_MODES order
MODE_PATTERNS: dict[AddressingMode, re.Pattern] = {
    AddressingMode.IMMEDIATE: re.compile(rf"#\${_BODY}"),
    AddressingMode.INDEXED: re.compile(rf"\${_BODY},a"),
    AddressingMode.ABSOLUTE: re.compile(rf"\${_BODY}"),
    AddressingMode.INDEXED_INDIRECT: re.compile(rf"\(\${_BODY},a\)"),
    AddressingMode.INDIRECT_INDEXED: re.compile(rf"\(\${_BODY}\),a"),
    AddressingMode.INDIRECT: re.compile(rf"\(\${_BODY}\)"),
}

# Label references: letter or underscore, then letters, digits, underscores
LABEL_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def split_operand(token: str) -> tuple[Optional[AddressingMode], str]:
    """
    Classify an operand and strip its decoration.

    Args:
        token: Operand text, e.g. "($3f),a"

    Returns:
        (mode, body) such as (AddressingMode.INDIRECT_INDEXED, "3f"),
        or (None, token) if the token has no operand form
    """
    for mode in OPERAND_MODES:
        match = MODE_PATTERNS[mode].fullmatch(token)
        if match:
            return mode, match.group("body")
    return None, token


def classify(token: str) -> Optional[AddressingMode]:
    """
    Return the addressing mode of an operand token, or None.

    Examples:
        >>> classify("$3f")
        <AddressingMode.ABSOLUTE: 2>
        >>> classify("($3f),a")
        <AddressingMode.INDIRECT_INDEXED: 7>
        >>> classify("loop") is None
        True
    """
    return split_operand(token)[0]


def is_feasible(descriptor: OpcodeDescriptor, token: str) -> bool:
    """Check that the token has an operand form the instruction supports."""
    mode = classify(token)
    return mode is not None and descriptor.supports(mode)


def is_label_reference(token: str) -> bool:
    """Check whether a token can name a label."""
    return LABEL_PATTERN.fullmatch(token) is not None
