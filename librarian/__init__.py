"""Priority-ordered, multi-root file and module resolver.

Register search roots with priorities, then resolve, read, or load names
relative to them. The first root (lowest priority value) containing a name
wins.
"""

from .errors import LibrarianError
from .errors import LoadError
from .errors import NotFoundError
from .errors import ReadError
from .librarian import Librarian
from .models import LoadedModule
from .models import ResolvedContent
from .models import SearchRoot
from .providers import CodeLoader
from .providers import FilesystemProvider
from .providers import LocalFilesystem
from .providers import PythonModuleLoader
from .registry import PathRegistry
from .settings import LibrarianSettings

__all__ = [
    "CodeLoader",
    "FilesystemProvider",
    "Librarian",
    "LibrarianError",
    "LibrarianSettings",
    "LoadError",
    "LoadedModule",
    "LocalFilesystem",
    "NotFoundError",
    "PathRegistry",
    "PythonModuleLoader",
    "ReadError",
    "ResolvedContent",
    "SearchRoot",
]
