"""File system resolver - templates stored in a directory tree."""

import os
from pathlib import Path
from typing import Optional, Union

from .resolver import PathResolver


class FileSystemResolver(PathResolver):
    """
    Resolver looking templates up below a root directory.

    The root is expanded to an absolute path at construction, so an empty
    root means the current working directory. Two resolvers for the same
    root compare equal, which keeps fallback locations from being added to
    a search path twice.
    """

    def __init__(self, path: Union[str, os.PathLike], caching: bool = True):
        """
        Initialize file system resolver.

        Args:
            path: Root directory of the templates
            caching: Whether lookups are memoized
        """
        super().__init__(caching=caching)
        self.path = os.path.abspath(os.path.expanduser(os.fspath(path) or "."))

    def _locate(self, candidate: str) -> Optional[str]:
        full_path = Path(self.path, candidate.lstrip("/"))
        if full_path.is_file():
            return str(full_path)
        return None

    def describe(self) -> str:
        return self.path

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileSystemResolver):
            return NotImplemented
        return self.path == other.path

    def __hash__(self) -> int:
        return hash((FileSystemResolver, self.path))

    def __repr__(self) -> str:
        return f"FileSystemResolver({self.path!r})"
