"""Loads every entry of every search root into one mapping.

Best effort: a missing root, an unlistable root, or an entry that fails to
load is skipped and the walk continues. Roots are walked in search order and
each entry is loaded from the root being walked, so when two roots hold the
same entry name the later root's value replaces the earlier one
(last-write-wins, the inverse of name resolution's first-match-wins).
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import LibrarianError
from .loader import ModuleLoader
from .models import SearchRoot
from .providers import FilesystemProvider

logger = logging.getLogger(__name__)


class DirectoryAggregator:
    def __init__(self, loader: ModuleLoader, filesystem: FilesystemProvider):
        self.loader = loader
        self.registry = loader.registry
        self.filesystem = filesystem

    def load_all(self) -> dict[str, Any]:
        """Load every loadable entry across all roots.

        Returns:
            Mapping of entry name to loaded value
        """
        loaded: dict[str, Any] = {}
        for root in self.registry.roots:
            try:
                if not self.filesystem.is_dir(root.path):
                    logger.debug(f"[librarian:load_all] skipping missing root {root.path}")
                    continue
                entries = self.filesystem.list_dir(root.path)
            except Exception as e:
                logger.debug(f"[librarian:load_all] skipping unlistable root {root.path}: {e}")
                continue
            for entry in entries:
                self._load_entry(root, entry, loaded)
        return loaded

    async def load_all_async(self) -> dict[str, Any]:
        """Suspending twin of load_all(); roots and entries stay sequential.

        LocalFilesystem runs directory checks and listings off the event loop, but each entry is
        loaded by the code loader on the calling thread, so importing a module
        blocks the loop until it finishes.
        """
        loaded: dict[str, Any] = {}
        for root in self.registry.roots:
            try:
                if not await self.filesystem.is_dir_async(root.path):
                    logger.debug(f"[librarian:load_all] skipping missing root {root.path}")
                    continue
                entries = await self.filesystem.list_dir_async(root.path)
            except Exception as e:
                logger.debug(f"[librarian:load_all] skipping unlistable root {root.path}: {e}")
                continue
            for entry in entries:
                self._load_entry(root, entry, loaded)
        return loaded

    def _load_entry(self, root: SearchRoot, entry: str, loaded: dict[str, Any]) -> None:
        try:
            module = self.loader.load_path(root.path / entry, entry)
        except LibrarianError as e:
            logger.debug(f"[librarian:load_all] skipping {entry}: {e}")
            return
        loaded[entry] = module.value
