"""
Local Index

Immutable snapshot of the folders and files under a local sync root.
Callers own the snapshot and pass it to the operations that need it;
updates produce a new index instead of mutating shared state.

Author: SyncGuard Project
License: MIT
"""

import os
import stat
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

from ..utils.logger import get_logger
from .paths import normalize_separators

logger = get_logger(__name__)


def _key(path) -> str:
    key = normalize_separators(os.fspath(path))
    if len(key) > 1:
        key = key.rstrip("/")
    return key


@dataclass(frozen=True)
class LocalIndex:
    """Known local folders and files, stored as '/'-separated paths."""
    folders: FrozenSet[str] = field(default_factory=frozenset)
    files: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def scan(cls, root) -> "LocalIndex":
        """
        Build an index of everything below ``root``.

        Args:
            root: Local folder to walk

        Returns:
            Index of all folders and files below root (root itself excluded)
        """
        folders = set()
        files = set()

        def _on_error(error: OSError) -> None:
            logger.warning(f"Skipping unreadable folder during scan: {error}")

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            folders.update(_key(os.path.join(dirpath, d)) for d in dirnames)
            files.update(_key(os.path.join(dirpath, f)) for f in filenames)

        logger.debug(f"Indexed {len(folders)} folders and {len(files)} files under {root}")
        return cls(folders=frozenset(folders), files=frozenset(files))

    def contains_folder(self, path) -> bool:
        return _key(path) in self.folders

    def contains_file(self, path) -> bool:
        return _key(path) in self.files

    def with_folder(self, path) -> "LocalIndex":
        """Return a copy that also knows ``path`` as a folder."""
        return replace(self, folders=self.folders | {_key(path)})

    def with_file(self, path) -> "LocalIndex":
        """Return a copy that also knows ``path`` as a file."""
        return replace(self, files=self.files | {_key(path)})

    def without(self, path) -> "LocalIndex":
        """Return a copy without ``path`` and anything below it."""
        key = _key(path)
        prefix = f"{key}/"

        def keep(entry: str) -> bool:
            return entry != key and not entry.startswith(prefix)

        return LocalIndex(
            folders=frozenset(e for e in self.folders if keep(e)),
            files=frozenset(e for e in self.files if keep(e))
        )


def path_is_file(path, index: Optional[LocalIndex] = None) -> bool:
    """
    Check whether a path is a file rather than a folder.

    The item is checked on disk first. If it cannot be inspected (for
    instance because it was just deleted), the index decides: anything
    not known as a folder is taken to be a file.

    Args:
        path: Local path to check
        index: Snapshot used when the item is gone from disk

    Returns:
        True for files, False for folders
    """
    try:
        mode = os.stat(path).st_mode
    except (OSError, ValueError):
        return _fallback(path, index)
    return not stat.S_ISDIR(mode)


def _fallback(path, index: Optional[LocalIndex]) -> bool:
    if index is None:
        return True
    return not index.contains_folder(path)
