"""Reads resolved files as UTF-8 text, caching by requested name."""

from __future__ import annotations

import asyncio
import logging

from .errors import NotFoundError
from .errors import ReadError
from .models import ResolvedContent
from .providers import FilesystemProvider
from .registry import MISSING
from .resolver import ExistenceResolver

logger = logging.getLogger(__name__)


class ContentReader:
    def __init__(self, resolver: ExistenceResolver, filesystem: FilesystemProvider):
        self.resolver = resolver
        self.registry = resolver.registry
        self.filesystem = filesystem

    def read(self, name: str) -> ResolvedContent:
        """Read the first file named name across the search roots.

        Args:
            name: Path relative to every search root

        Returns:
            ResolvedContent with the text and the absolute path it came from

        Raises:
            NotFoundError: No root contains name
            ReadError: The file exists but could not be read or decoded
        """
        cached = self.registry.content.get(name)
        if cached is not MISSING:
            return cached

        generation = self.registry.generation
        path = self.resolver.resolve(name)
        if path is None:
            raise NotFoundError(name, tuple(r.path for r in self.registry.roots))

        try:
            text = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(name, path, e) from e

        return self._store(name, ResolvedContent(text=text, path=path), generation)

    async def read_async(self, name: str) -> ResolvedContent:
        """Suspending twin of read()."""
        cached = self.registry.content.get(name)
        if cached is not MISSING:
            await asyncio.sleep(0)
            return cached

        generation = self.registry.generation
        path = await self.resolver.resolve_async(name)
        if path is None:
            raise NotFoundError(name, tuple(r.path for r in self.registry.roots))

        try:
            text = await self.filesystem.read_text_async(path)
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(name, path, e) from e

        return self._store(name, ResolvedContent(text=text, path=path), generation)

    def _store(self, name: str, content: ResolvedContent, generation: int) -> ResolvedContent:
        self.registry.content.put(name, content, generation)
        logger.debug(f"[librarian:read] {name} -> {content.path} ({len(content.text)} chars)")
        return content
