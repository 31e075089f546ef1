"""
cpu8-asm Command-Line Interface
===============================

- **c8asm**: the 8-bit CPU assembler

Implemented as a Click application with help text and consistent
exit codes (see errors.py).
"""

__all__ = ["c8asm"]
