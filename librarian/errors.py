"""Exceptions raised by librarian lookups.

All failures are local and recoverable: register more roots, fix the file,
or retry. Nothing here is cached by the library.
"""

from __future__ import annotations

from pathlib import Path

from .error_format import format_error_message


class LibrarianError(Exception):
    """Base class for lookup failures."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class NotFoundError(LibrarianError, LookupError):
    """Requested name is absent from every registered root."""

    def __init__(self, name: str, roots: tuple[Path, ...] = ()):
        searched = ", ".join(str(p) for p in roots) or "(no roots registered)"
        super().__init__(name, f"Cannot find file: {name} (searched: {searched})")
        self.roots = roots


class ReadError(LibrarianError):
    """Reading a resolved file failed after its existence was confirmed."""

    def __init__(self, name: str, path: Path, cause: BaseException):
        super().__init__(name, f"Failed to read '{name}' from {path}: {format_error_message(cause)}")
        self.path = path
        self.cause = cause


class LoadError(LibrarianError):
    """The code-loading provider raised while loading a resolved path."""

    def __init__(self, name: str, path: Path, cause: BaseException):
        super().__init__(name, f"Failed to load '{name}' from {path}: {format_error_message(cause)}")
        self.path = path
        self.cause = cause
