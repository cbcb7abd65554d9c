"""Shared fixtures for librarian tests."""

from collections.abc import Callable
from pathlib import Path

import pytest
from librarian import Librarian


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create files under root; parent directories are created as needed."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_root(tmp_path: Path) -> Callable[..., Path]:
    """Factory for search-root directories populated with files."""

    def _make(name: str, files: dict[str, str | bytes] | None = None) -> Path:
        return write_tree(tmp_path / name, files or {})

    return _make


@pytest.fixture
def librarian() -> Librarian:
    return Librarian()
