"""Returns the content of the first candidate name that can be read."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import LibrarianError
from .models import ResolvedContent
from .reader import ContentReader

logger = logging.getLogger(__name__)


class CandidateTrier:
    def __init__(self, reader: ContentReader):
        self.reader = reader

    def try_candidates(self, names: Iterable[str]) -> ResolvedContent | None:
        """Read candidates in order and return the first success.

        Args:
            names: Candidate names, most preferred first

        Returns:
            ResolvedContent of the first readable candidate, or None if none is
        """
        for name in names:
            try:
                return self.reader.read(name)
            except LibrarianError as e:
                logger.debug(f"[librarian:try] {name} unavailable: {e}")
        return None

    async def try_candidates_async(self, names: Iterable[str]) -> ResolvedContent | None:
        """Suspending twin of try_candidates()."""
        for name in names:
            try:
                return await self.reader.read_async(name)
            except LibrarianError as e:
                logger.debug(f"[librarian:try] {name} unavailable: {e}")
        return None
