"""Value types shared by the registry and its lookups."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SearchRoot:
    """A registered search directory.

    Attributes:
        path: Absolute, normalized directory path
        priority: Scan order key; lower values are searched first
    """

    path: Path
    priority: int


@dataclass(frozen=True)
class ResolvedContent:
    """Text of a resolved file and where it came from."""

    text: str
    path: Path


@dataclass(frozen=True)
class LoadedModule:
    """Value returned by the code-loading provider and where it came from."""

    value: Any
    path: Path
