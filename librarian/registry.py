"""Search-root registry and the per-name caches it owns.

Roots are kept sorted ascending by priority (lower values are searched
first), stable with respect to insertion order. Adding a root clears every
cache at once: a new root may shadow any name resolved so far.
"""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from .models import SearchRoot
from .settings import LibrarianSettings

logger = logging.getLogger(__name__)


class _Missing:
    """Sentinel type for "no cache entry", distinct from any cached value."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class NameCache:
    """Cache keyed by requested name, guarded by the owning registry's lock.

    Writes carry the registry generation observed when the lookup started;
    a write from an older generation is dropped so results computed against
    a superseded root list never leak into the new one.
    """

    def __init__(self, registry: PathRegistry, label: str):
        self._registry = registry
        self._label = label
        self._entries: dict[str, Any] = {}

    def get(self, name: str) -> Any:
        """Return the cached value for name, or MISSING."""
        if self._registry.settings.skip_cache:
            return MISSING
        with self._registry.lock:
            return self._entries.get(name, MISSING)

    def put(self, name: str, value: Any, generation: int) -> bool:
        """Store value under name if the registry has not changed since generation.

        Returns:
            True if the entry was stored
        """
        if self._registry.settings.skip_cache:
            return False
        with self._registry.lock:
            if generation != self._registry.generation:
                logger.debug(f"[librarian:{self._label}] dropping stale entry for {name}")
                return False
            self._entries[name] = value
            return True

    def clear(self) -> None:
        with self._registry.lock:
            self._entries.clear()

    def __contains__(self, name: object) -> bool:
        with self._registry.lock:
            return name in self._entries

    def __len__(self) -> int:
        with self._registry.lock:
            return len(self._entries)

    def snapshot(self) -> dict[str, Any]:
        """Copy of the current entries."""
        with self._registry.lock:
            return dict(self._entries)


class PathRegistry:
    """Ordered search roots plus the existence, content and module caches."""

    def __init__(self, settings: LibrarianSettings | None = None):
        self.settings = settings or LibrarianSettings()
        self.lock = threading.RLock()
        self._roots: tuple[SearchRoot, ...] = ()
        self._generation = 0

        self.existence = NameCache(self, "exists")
        self.content = NameCache(self, "read")
        self.modules = NameCache(self, "load")

    @property
    def roots(self) -> tuple[SearchRoot, ...]:
        """Snapshot of the roots in search order."""
        with self.lock:
            return self._roots

    @property
    def generation(self) -> int:
        """Counter bumped on every mutation."""
        with self.lock:
            return self._generation

    def add_root(self, path: str | os.PathLike[str], priority: int | None = None) -> PathRegistry:
        """Register a search root.

        Args:
            path: Directory to search; made absolute without touching the disk
            priority: Scan order key (default: settings.default_priority)

        Returns:
            self, for chaining
        """
        if priority is None:
            priority = self.settings.default_priority
        root = SearchRoot(path=Path(os.path.abspath(path)), priority=priority)

        with self.lock:
            # sorted() is stable, so equal priorities keep registration order
            self._roots = tuple(sorted((*self._roots, root), key=lambda r: r.priority))
            self._invalidate()

        logger.debug(f"[librarian:roots] added {root.path} (priority {priority})")
        return self

    def add_roots(self, paths: Iterable[str | os.PathLike[str]], priority: int | None = None) -> PathRegistry:
        """Register several roots in order with the same priority."""
        for path in paths:
            self.add_root(path, priority)
        return self

    def clear_caches(self) -> None:
        """Invalidate every cache without changing the roots."""
        with self.lock:
            self._invalidate()

    def _invalidate(self) -> None:
        self._generation += 1
        self.existence.clear()
        self.content.clear()
        self.modules.clear()

    def __len__(self) -> int:
        return len(self.roots)

    def __iter__(self) -> Iterator[SearchRoot]:
        return iter(self.roots)

    def __repr__(self) -> str:
        return f"PathRegistry({[str(r.path) for r in self.roots]})"
