"""
Output Writers
==============

Serializes an assembled program.

Hex Dump Format
---------------
The primary output is a Logisim "raw" memory image that can be loaded
straight into the simulator's RAM/ROM component:

```
v2.0 raw
a0 00 06 0a 2c 20 d1 00
```

- Header line "v2.0 raw"
- Bytes as two lowercase hex digits, separated by single spaces
- A line break after every 16th byte (and after the last one)

Auxiliary Outputs
-----------------
- Listing: address, bytes, line number and source of each instruction,
  followed by the label table
- Symbol file: one "name $addr" line per label
"""

from typing import Iterable, Iterator, Optional, TextIO

from cpu8_asm.config import LOGISIM_HEADER
from cpu8_asm.assembler.codegen import ListingEntry
from cpu8_asm.assembler.symbols import Label


# =============================================================================
# Hex Dump
# =============================================================================

def iter_image_lines(
    data: bytes,
    header: str = LOGISIM_HEADER,
    bytes_per_line: int = 16,
) -> Iterator[str]:
    """
    Generate the lines of a hex dump, each ending with a newline.

    Args:
        data: Program bytes
        header: First line of the dump
        bytes_per_line: Bytes before each line break
    """
    yield f"{header}\n"
    for offset in range(0, len(data), bytes_per_line):
        chunk = data[offset:offset + bytes_per_line]
        yield " ".join(f"{b:02x}" for b in chunk) + "\n"


def write_image(
    sink: TextIO,
    data: bytes,
    mirror: Optional[TextIO] = None,
    header: str = LOGISIM_HEADER,
    bytes_per_line: int = 16,
) -> None:
    """
    Write a hex dump to a text stream.

    Args:
        sink: Destination stream (usually the output file)
        data: Program bytes
        mirror: Optional second stream receiving the same text as it is
                written, e.g. the console
        header: First line of the dump
        bytes_per_line: Bytes before each line break
    """
    for line in iter_image_lines(data, header, bytes_per_line):
        sink.write(line)
        if mirror is not None:
            mirror.write(line)


def format_image(
    data: bytes,
    header: str = LOGISIM_HEADER,
    bytes_per_line: int = 16,
) -> str:
    """Return the hex dump as a string."""
    return "".join(iter_image_lines(data, header, bytes_per_line))


# =============================================================================
# Listing and Symbols
# =============================================================================

def format_listing(
    entries: Iterable[ListingEntry],
    data: bytes,
    labels: Iterable[Label],
    source_lines: Optional[list[str]] = None,
) -> str:
    """
    Format an assembly listing.

    Args:
        entries: Emitted instructions from CodeGenerator.listing
        data: Final (resolved) program bytes
        labels: Declared labels
        source_lines: Raw source lines; when given, the original line text
                      is shown instead of the reconstructed instruction

    Returns:
        The listing as a string
    """
    labels = list(labels)
    labels_at: dict[int, list[str]] = {}
    for label in labels:
        labels_at.setdefault(label.address, []).append(label.name)

    lines = []
    lines.append("8bit CPU Assembler Listing")
    lines.append("=" * 60)
    lines.append("")
    lines.append("Addr  Code   Line  Source")
    lines.append("-" * 60)

    for entry in entries:
        for name in labels_at.get(entry.address, []):
            lines.append(f"{'':19s}{name}:")

        code = f"{data[entry.address]:02x} {data[entry.address + 1]:02x}"
        if source_lines and 0 < entry.line <= len(source_lines):
            text = source_lines[entry.line - 1].strip()
        else:
            text = entry.text
        lines.append(f"${entry.address:02X}   {code}  {entry.line:4d}  {text}")

    # Labels declared after the last instruction
    for name in labels_at.get(len(data), []):
        lines.append(f"{'':19s}{name}:")

    lines.append("")
    lines.append("Label Table")
    lines.append("-" * 30)
    for label in sorted(labels, key=lambda l: l.name):
        lines.append(f"{label.name:20s} = ${label.address:02X}")

    return "\n".join(lines) + "\n"


def format_symbols(labels: Iterable[Label]) -> str:
    """
    Format a symbol file.

    Format: name $addr (one per line, sorted by name)
    """
    lines = ["# Symbol table", "# Generated by c8asm"]
    for label in sorted(labels, key=lambda l: l.name):
        lines.append(f"{label.name} ${label.address:02X}")
    return "\n".join(lines) + "\n"
