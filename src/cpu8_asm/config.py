"""
Assembler Configuration
=======================

Design constants of the assembler, gathered in one dataclass so tests
and the command-line tool can adjust them. Configuration can come from:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)

Defaults match the target machine: one 256-byte page of program memory,
32 labels of up to 32 characters and 64 label references.
"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)


# Operand bytes address a single page, so no image can be larger.
MAX_MEMORY_SIZE = 256

# Logisim "raw" image header
LOGISIM_HEADER = "v2.0 raw"

# Label and forward-reference table bounds
MAX_LABELS = 32
MAX_JUMPS = 64
MAX_LABEL_LENGTH = 32


@dataclass
class AssemblerConfig:
    """
    Bounds and output settings for one assembler.

    Attributes:
        memory_size: Program image capacity in bytes (default: 256)
        max_labels: Label declarations allowed per program (default: 32)
        max_jumps: Label references allowed per program (default: 64)
        max_label_length: Longest accepted label name (default: 32)
        bytes_per_line: Bytes per line in the hex dump (default: 16)
        header: First line of the hex dump (default: "v2.0 raw")
    """

    memory_size: int = MAX_MEMORY_SIZE
    max_labels: int = MAX_LABELS
    max_jumps: int = MAX_JUMPS
    max_label_length: int = MAX_LABEL_LENGTH
    bytes_per_line: int = 16
    header: str = LOGISIM_HEADER

    # Environment variable -> attribute
    ENV_VARS = {
        "CPU8ASM_MEMORY_SIZE": "memory_size",
        "CPU8ASM_MAX_LABELS": "max_labels",
        "CPU8ASM_MAX_JUMPS": "max_jumps",
        "CPU8ASM_MAX_LABEL_LENGTH": "max_label_length",
    }

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create an AssemblerConfig from environment variables.

        Environment variables (all optional, integers):
            CPU8ASM_MEMORY_SIZE: Program image capacity
            CPU8ASM_MAX_LABELS: Label table capacity
            CPU8ASM_MAX_JUMPS: Forward-reference table capacity
            CPU8ASM_MAX_LABEL_LENGTH: Longest label name

        Malformed values are ignored with a warning; if the combined
        result is still invalid, the defaults are used.
        """
        config = cls()

        for var, attr in cls.ENV_VARS.items():
            if raw := os.environ.get(var):
                try:
                    setattr(config, attr, int(raw, 0))
                except ValueError:
                    logger.warning(f"Ignoring {var}={raw!r}: not an integer")

        try:
            config.validate()
        except ValueError as e:
            logger.warning(f"Ignoring environment overrides: {e}")
            return cls()
        return config

    def validate(self) -> None:
        """
        Check that every bound is usable.

        Raises:
            ValueError: If a bound is not positive or the memory size
                        exceeds one page
        """
        for attr in ("memory_size", "max_labels", "max_jumps",
                     "max_label_length", "bytes_per_line"):
            value = getattr(self, attr)
            if value <= 0:
                raise ValueError(f"{attr} must be positive, got {value}")

        if self.memory_size > MAX_MEMORY_SIZE:
            raise ValueError(
                f"memory_size must not exceed {MAX_MEMORY_SIZE}, got {self.memory_size}"
            )
