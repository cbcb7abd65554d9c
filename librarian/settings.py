"""Librarian settings.

Settings come from keyword arguments or the process environment; no
configuration files are read.
"""

import logging
import os

from pydantic import BaseModel
from pydantic import Field

logger = logging.getLogger(__name__)

ENV_DEFAULT_PRIORITY = "LIBRARIAN_DEFAULT_PRIORITY"
ENV_SKIP_CACHE = "LIBRARIAN_SKIP_CACHE"

_TRUTHY = {"1", "true", "yes", "on"}


class LibrarianSettings(BaseModel):
    """Options for a Librarian instance."""

    default_priority: int = Field(500, description="Priority used when add_root() is called without one")
    skip_cache: bool = Field(False, description="Bypass the existence, content and module caches")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "LibrarianSettings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for testing)

        Returns:
            LibrarianSettings with any overrides found applied

        Raises:
            pydantic.ValidationError: LIBRARIAN_DEFAULT_PRIORITY is not an integer
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if (priority := env.get(ENV_DEFAULT_PRIORITY)) is not None:
            values["default_priority"] = priority
        if (skip := env.get(ENV_SKIP_CACHE)) is not None:
            values["skip_cache"] = skip.strip().lower() in _TRUTHY

        if values:
            logger.debug(f"Librarian settings from environment: {values}")
        return cls(**values)
