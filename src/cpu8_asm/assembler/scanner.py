"""
Assembly Source Scanner
=======================

This module splits assembly source into whitespace-delimited tokens.

Unlike a full lexer, the scanner does not interpret tokens at all: an
operand such as "($3f),a" or a label declaration such as "loop:" is a
single token. Interpretation happens in the addressing-mode classifier
and the code generator.

Rules
-----
- A semicolon starts a comment running to the end of the line
- Tokens are separated by runs of spaces, tabs and carriage returns
- Empty and comment-only lines produce no tokens
- Every token carries its 1-based line and column

Example
-------
>>> from cpu8_asm.assembler.scanner import Scanner
>>> for token in Scanner("loop: lda #$0a ; load ten").tokenize():
...     print(token)
Token('loop:', 1:1)
Token('lda', 1:7)
Token('#$0a', 1:11)
"""

from dataclasses import dataclass
from typing import Iterator
import re

from cpu8_asm.errors import SourceLocation


# Comment marker
COMMENT_CHAR = ";"

# A token is any run of non-whitespace characters
TOKEN_PATTERN = re.compile(r"\S+")


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single whitespace-delimited token.

    Attributes:
        text: The token text as written
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    text: str
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}:{self.column})"

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Tokenizes assembly source text line by line.

    Usage:
        scanner = Scanner(source_text, filename)
        tokens = list(scanner.tokenize())

    The token stream is lazy and can be restarted by calling tokenize()
    again.

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename
        # Lines end at '\n' only; form feeds and the like stay inside a line
        lines = source.split("\n")
        if lines[-1] == "":
            lines.pop()
        self._lines = [line.rstrip("\r") for line in lines]

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order
        """
        for line_number, text in enumerate(self._lines, start=1):
            yield from self.tokenize_line(text, line_number)

    def tokenize_line(self, text: str, line_number: int) -> Iterator[Token]:
        """
        Generate the tokens of a single source line.

        Args:
            text: The raw line text
            line_number: Its 1-based line number
        """
        code = strip_comment(text)
        for match in TOKEN_PATTERN.finditer(code):
            yield Token(match.group(), line_number, match.start() + 1, self.filename)

    def line_text(self, line_number: int) -> str:
        """
        Return the raw text of a source line, or "" if out of range.

        Used to attach source context to errors and listings.
        """
        if 1 <= line_number <= len(self._lines):
            return self._lines[line_number - 1]
        return ""

    @property
    def line_count(self) -> int:
        """Number of lines in the source."""
        return len(self._lines)


def strip_comment(text: str) -> str:
    """Remove a ';' comment and everything after it."""
    index = text.find(COMMENT_CHAR)
    return text if index == -1 else text[:index]
