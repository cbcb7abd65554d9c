"""Resolves names and loads them through the code-loading provider.

The module cache is keyed by requested name only. Two names that alias one
physical file call the provider twice; PythonModuleLoader memoizes by path,
so both still receive the same value.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from .errors import LoadError
from .errors import NotFoundError
from .models import LoadedModule
from .providers import CodeLoader
from .registry import MISSING
from .resolver import ExistenceResolver

logger = logging.getLogger(__name__)


class ModuleLoader:
    """Loads the first match for a name and memoizes the result per name."""

    def __init__(self, resolver: ExistenceResolver, code_loader: CodeLoader):
        self.resolver = resolver
        self.registry = resolver.registry
        self.code_loader = code_loader

    def load(self, name: str) -> LoadedModule:
        """Resolve and load name.

        Args:
            name: Path relative to every search root

        Returns:
            LoadedModule with the provider's value and the resolved path

        Raises:
            NotFoundError: No root contains name
            LoadError: The provider raised; the failure is not cached
        """
        cached = self.registry.modules.get(name)
        if cached is not MISSING:
            return cached

        generation = self.registry.generation
        path = self.resolver.resolve(name)
        if path is None:
            raise NotFoundError(name, tuple(r.path for r in self.registry.roots))

        return self._store(name, self.load_path(path, name), generation)

    async def load_async(self, name: str) -> LoadedModule:
        """Suspending twin of load().

        The provider itself runs on the calling thread, exactly as in load().
        """
        cached = self.registry.modules.get(name)
        if cached is not MISSING:
            await asyncio.sleep(0)
            return cached

        generation = self.registry.generation
        path = await self.resolver.resolve_async(name)
        if path is None:
            raise NotFoundError(name, tuple(r.path for r in self.registry.roots))

        return self._store(name, self.load_path(path, name), generation)

    def load_path(self, path: Path, name: str) -> LoadedModule:
        """Load a specific path, bypassing resolution and the name cache.

        Args:
            path: Absolute path handed to the provider
            name: Requested name, used in error messages

        Raises:
            LoadError: The provider raised
        """
        try:
            value = self.code_loader.load(path)
        except Exception as e:
            logger.debug(f"[librarian:load] {name} failed at {path}: {e!r}")
            raise LoadError(name, path, e) from e
        return LoadedModule(value=value, path=path)

    def _store(self, name: str, loaded: LoadedModule, generation: int) -> LoadedModule:
        self.registry.modules.put(name, loaded, generation)
        logger.debug(f"[librarian:load] {name} -> {loaded.path}")
        return loaded
