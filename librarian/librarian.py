"""Public facade over one search-root registry.

A Librarian wires the resolver, reader, loader, aggregator and candidate
trier to a single PathRegistry, so every lookup shares one set of caches and
one root order. Each lookup has a blocking form and an ``*_async`` form that
produce the same results and leave the caches in the same state.

Example:
    librarian = Librarian().add_root("plugins/site", 10).add_root("plugins/builtin")
    content = librarian.read_file("templates/page.html")
    plugin = await librarian.load_module_async("greeter.py")
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .aggregator import DirectoryAggregator
from .candidates import CandidateTrier
from .loader import ModuleLoader
from .models import LoadedModule
from .models import ResolvedContent
from .models import SearchRoot
from .providers import CodeLoader
from .providers import FilesystemProvider
from .providers import LocalFilesystem
from .providers import PythonModuleLoader
from .reader import ContentReader
from .registry import PathRegistry
from .resolver import ExistenceResolver
from .settings import LibrarianSettings


class Librarian:
    """Priority-ordered, multi-root file and module resolver."""

    def __init__(
        self,
        settings: LibrarianSettings | None = None,
        *,
        filesystem: FilesystemProvider | None = None,
        code_loader: CodeLoader | None = None,
        default_priority: int | None = None,
        skip_cache: bool | None = None,
    ) -> None:
        """Initialize with settings and providers.

        Args:
            settings: Base settings (default: LibrarianSettings())
            filesystem: Storage provider (default: LocalFilesystem)
            code_loader: Code-loading provider (default: PythonModuleLoader)
            default_priority: Override settings.default_priority
            skip_cache: Override settings.skip_cache
        """
        settings = settings or LibrarianSettings()
        overrides: dict[str, Any] = {}
        if default_priority is not None:
            overrides["default_priority"] = default_priority
        if skip_cache is not None:
            overrides["skip_cache"] = skip_cache
        if overrides:
            settings = settings.model_copy(update=overrides)

        self.filesystem = filesystem or LocalFilesystem()
        self.code_loader = code_loader or PythonModuleLoader()
        self.registry = PathRegistry(settings)

        self._resolver = ExistenceResolver(self.registry, self.filesystem)
        self._reader = ContentReader(self._resolver, self.filesystem)
        self._loader = ModuleLoader(self._resolver, self.code_loader)
        self._aggregator = DirectoryAggregator(self._loader, self.filesystem)
        self._trier = CandidateTrier(self._reader)

    @property
    def settings(self) -> LibrarianSettings:
        return self.registry.settings

    @property
    def roots(self) -> tuple[SearchRoot, ...]:
        """Registered roots in search order."""
        return self.registry.roots

    # Registry

    def add_root(self, path: str | os.PathLike[str], priority: int | None = None) -> Librarian:
        """Register a search root and invalidate every cache. Chainable."""
        self.registry.add_root(path, priority)
        return self

    def add_roots(self, paths: Iterable[str | os.PathLike[str]], priority: int | None = None) -> Librarian:
        """Register several roots in order. Chainable."""
        self.registry.add_roots(paths, priority)
        return self

    def clear_caches(self) -> None:
        self.registry.clear_caches()

    # Existence

    def resolve(self, name: str) -> Path | None:
        return self._resolver.resolve(name)

    async def resolve_async(self, name: str) -> Path | None:
        return await self._resolver.resolve_async(name)

    # Content

    def read_file(self, name: str) -> ResolvedContent:
        return self._reader.read(name)

    async def read_file_async(self, name: str) -> ResolvedContent:
        return await self._reader.read_async(name)

    # Modules

    def load_module(self, name: str) -> LoadedModule:
        return self._loader.load(name)

    async def load_module_async(self, name: str) -> LoadedModule:
        return await self._loader.load_async(name)

    def load_all(self) -> dict[str, Any]:
        return self._aggregator.load_all()

    async def load_all_async(self) -> dict[str, Any]:
        return await self._aggregator.load_all_async()

    # Candidates

    def try_candidates(self, names: Iterable[str]) -> ResolvedContent | None:
        return self._trier.try_candidates(names)

    async def try_candidates_async(self, names: Iterable[str]) -> ResolvedContent | None:
        return await self._trier.try_candidates_async(names)

    def __repr__(self) -> str:
        return f"Librarian({[str(r.path) for r in self.roots]})"
