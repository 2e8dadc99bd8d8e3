"""Project-level versioning and compatibility metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Final, Tuple

MIN_PYTHON_VERSION: Final[Tuple[int, int]] = (3, 10)
MIN_PYTHON_VERSION_STR: Final[str] = ".".join(str(part) for part in MIN_PYTHON_VERSION)
PYTHON_REQUIRES_SPECIFIER: Final[str] = f">={MIN_PYTHON_VERSION_STR}"

_VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"
PROJECT_VERSION: Final[str] = _VERSION_FILE.read_text(encoding="utf-8").strip()
VERSION_TUPLE: Final[Tuple[int, int, int]] = tuple(  # type: ignore[assignment]
    int(part) for part in PROJECT_VERSION.split(".")
)
__version__: Final[str] = PROJECT_VERSION

__all__ = [
    "MIN_PYTHON_VERSION",
    "MIN_PYTHON_VERSION_STR",
    "PYTHON_REQUIRES_SPECIFIER",
    "PROJECT_VERSION",
    "VERSION_TUPLE",
    "__version__",
]
