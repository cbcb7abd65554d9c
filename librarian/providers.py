"""Storage and code-loading providers consumed by the librarian.

The librarian never touches the filesystem or the import system directly.
It goes through two protocols so hosts can substitute in-memory stores,
sandboxed loaders, or test doubles:

- FilesystemProvider: existence checks, text reads, directory listings
- CodeLoader: turns an absolute path into a loaded value

LocalFilesystem and PythonModuleLoader are the defaults.
"""

from __future__ import annotations

import asyncio
import hashlib
import importlib.util
import json
import logging
import sys
import threading
from pathlib import Path
from typing import Any
from typing import Protocol

import yaml

logger = logging.getLogger(__name__)


class FilesystemProvider(Protocol):
    """Read-only view of backing storage."""

    def exists(self, path: Path) -> bool: ...

    async def exists_async(self, path: Path) -> bool: ...

    def is_dir(self, path: Path) -> bool: ...

    async def is_dir_async(self, path: Path) -> bool: ...

    def read_text(self, path: Path) -> str: ...

    async def read_text_async(self, path: Path) -> str: ...

    def list_dir(self, path: Path) -> list[str]: ...

    async def list_dir_async(self, path: Path) -> list[str]: ...


class CodeLoader(Protocol):
    """Loads the unit of code (or data) stored at an absolute path."""

    def load(self, path: Path) -> Any: ...


class LocalFilesystem:
    """FilesystemProvider backed by the local disk.

    Suspending variants run the blocking call in a worker thread so the
    event loop is free while the disk is busy.
    """

    def exists(self, path: Path) -> bool:
        # Unanswerable checks (ENAMETOOLONG, EACCES) count as "does not exist"
        try:
            return path.exists()
        except OSError as e:
            logger.debug(f"[librarian:fs] exists({path}) failed: {e}")
            return False

    async def exists_async(self, path: Path) -> bool:
        return await asyncio.to_thread(self.exists, path)

    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError as e:
            logger.debug(f"[librarian:fs] is_dir({path}) failed: {e}")
            return False

    async def is_dir_async(self, path: Path) -> bool:
        return await asyncio.to_thread(self.is_dir, path)

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    async def read_text_async(self, path: Path) -> str:
        return await asyncio.to_thread(self.read_text, path)

    def list_dir(self, path: Path) -> list[str]:
        # Sorted so aggregation order does not depend on the OS
        return sorted(entry.name for entry in path.iterdir())

    async def list_dir_async(self, path: Path) -> list[str]:
        return await asyncio.to_thread(self.list_dir, path)

    def __repr__(self) -> str:
        return "LocalFilesystem()"


class PythonModuleLoader:
    """CodeLoader for Python sources and data files.

    Supported targets:
    - ``*.py`` file: imported as a module
    - directory containing ``__init__.py``: imported as a package
    - ``*.json``: parsed with json
    - ``*.yaml`` / ``*.yml``: parsed with yaml.safe_load

    Successful loads are memoized by absolute path, so two requested names
    that alias the same file share one value. Failures are not memoized.
    """

    MODULE_PREFIX = "librarian_loaded"

    def __init__(self) -> None:
        self._loaded: dict[Path, Any] = {}
        self._lock = threading.RLock()

    def load(self, path: Path) -> Any:
        """Load the value stored at path.

        Args:
            path: Absolute path to a module, package, or data file

        Returns:
            Module object or parsed data

        Raises:
            ValueError: Unsupported file type
            Exception: Whatever importing or parsing the target raises
        """
        path = Path(path)
        with self._lock:
            if path in self._loaded:
                return self._loaded[path]

            value = self._load_uncached(path)
            self._loaded[path] = value
            logger.debug(f"[librarian:load] {path} ({type(value).__name__})")
            return value

    def forget(self, path: Path) -> None:
        """Drop the memoized value for path so the next load re-executes it."""
        with self._lock:
            self._loaded.pop(Path(path), None)

    def _load_uncached(self, path: Path) -> Any:
        if path.is_dir():
            init_file = path / "__init__.py"
            if not init_file.is_file():
                raise ValueError(f"Directory is not a Python package (no __init__.py): {path}")
            return self._import(path, init_file, package=True)

        suffix = path.suffix.lower()
        if suffix == ".py":
            return self._import(path, path, package=False)
        if suffix == ".json":
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        if suffix in (".yaml", ".yml"):
            with open(path, encoding="utf-8") as f:
                return yaml.safe_load(f)

        raise ValueError(f"Unsupported file type for loading: {path}")

    def _module_name(self, path: Path) -> str:
        # Unique per path so same-named files in different roots do not collide
        digest = hashlib.sha256(str(path).encode()).hexdigest()[:12]
        stem = path.stem if path.suffix else path.name
        safe_stem = "".join(c if c.isalnum() else "_" for c in stem)
        return f"{self.MODULE_PREFIX}_{digest}_{safe_stem}"

    def _import(self, path: Path, source: Path, *, package: bool) -> Any:
        module_name = self._module_name(path)
        search_locations = [str(path)] if package else None
        spec = importlib.util.spec_from_file_location(
            module_name, source, submodule_search_locations=search_locations
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Cannot create import spec for {source}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            # Leave no half-initialized module behind; the next load retries
            sys.modules.pop(module_name, None)
            raise
        return module

    def __repr__(self) -> str:
        return f"PythonModuleLoader({len(self._loaded)} loaded)"
