"""
cpu8-asm Test Configuration
===========================

Shared fixtures for the assembler tests.
"""

from pathlib import Path
from typing import Callable

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """
    Fixture: Get project root directory.

    Returns the absolute path to the project root (where pyproject.toml is).
    """
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent
    return Path(__file__).resolve().parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root: Path) -> Path:
    """
    Fixture: Get examples directory.
    """
    return project_root / "examples"


@pytest.fixture
def source_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """
    Fixture: Factory writing assembly source into a temporary file.

    Usage:
        path = source_file("sec\\nrts\\n")
    """
    def _write(source: str, name: str = "program.asm") -> Path:
        path = tmp_path / name
        path.write_text(source)
        return path

    return _write
