"""Existence resolution: which root holds a requested name.

First match wins. Roots are scanned in registry order and the scan stops at
the first root where the joined, normalized ``root/name`` exists. Only hits are cached, keyed by
the requested name, so a file created later is found without invalidation.
"""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from .providers import FilesystemProvider
from .registry import MISSING
from .registry import PathRegistry

logger = logging.getLogger(__name__)


class ExistenceResolver:
    """Maps requested relative names to absolute paths."""

    def __init__(self, registry: PathRegistry, filesystem: FilesystemProvider):
        self.registry = registry
        self.filesystem = filesystem

    def resolve(self, name: str) -> Path | None:
        """Find the first root containing name.

        Args:
            name: Path relative to every search root

        Returns:
            Absolute path of the match, or None if no root contains it
        """
        cached = self.registry.existence.get(name)
        if cached is not MISSING:
            return cached

        generation = self.registry.generation
        for root in self.registry.roots:
            candidate = self._join(root.path, name)
            if self.filesystem.exists(candidate):
                return self._found(name, candidate, generation)

        logger.debug(f"[librarian:resolve] {name} -> not found")
        return None

    async def resolve_async(self, name: str) -> Path | None:
        """Suspending twin of resolve().

        Yields to the event loop even on a cache hit so callers see the same
        scheduling whether or not the name was cached.
        """
        cached = self.registry.existence.get(name)
        if cached is not MISSING:
            await asyncio.sleep(0)
            return cached

        generation = self.registry.generation
        # Sequential on purpose: the first root to answer must be the first root in order
        for root in self.registry.roots:
            candidate = self._join(root.path, name)
            if await self.filesystem.exists_async(candidate):
                return self._found(name, candidate, generation)

        logger.debug(f"[librarian:resolve] {name} -> not found")
        return None

    @staticmethod
    def _join(root: Path, name: str) -> Path:
        # A leading separator does not escape the root; "." and ".." collapse before the check
        return Path(os.path.normpath(os.path.join(root, name.lstrip("/\\"))))

    def _found(self, name: str, candidate: Path, generation: int) -> Path:
        self.registry.existence.put(name, candidate, generation)
        logger.debug(f"[librarian:resolve] {name} -> {candidate}")
        return candidate
