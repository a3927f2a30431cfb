"""
Path Normalization

Derives item names and transfer-safe temporary paths from local and
remote paths. Remote paths always use '/', local paths may use either
'/' or '\\' and are normalized to '/' before a temp path is derived.

Author: SyncGuard Project
License: MIT
"""

TEMP_PREFIX = "~ftpb_"

SEPARATORS = ("/", "\\")


def normalize_separators(path: str) -> str:
    """Replace every backslash in ``path`` with a forward slash."""
    return path.replace("\\", "/")


def item_name(path: str) -> str:
    """
    Get the name of the item a path points to.

    Strips everything up to the last '/', then everything up to the last
    '\\' of what remains, then one leading separator. Paths that mix both
    conventions resolve to the final segment.

    Args:
        path: Local or remote path

    Returns:
        Final path segment; the input itself when it has no separator
    """
    if "/" in path:
        path = path[path.rindex("/"):]
    if "\\" in path:
        path = path[path.rindex("\\"):]
    if path.startswith(SEPARATORS):
        path = path[1:]
    return path


def parent_path(path: str) -> str:
    """Text before the last separator of ``path``, or "" when there is none."""
    path = normalize_separators(path)
    if "/" not in path:
        return ""
    return path[:path.rindex("/")]


def remote_temp_path(path: str, prefix: str = TEMP_PREFIX) -> str:
    """
    Get the temporary path an item is uploaded to or downloaded as.

    Args:
        path: Remote path ('/' separated)
        prefix: Marker put in front of the item name

    Returns:
        Path in the same parent folder with the marked item name
    """
    if "/" not in path:
        return f"{prefix}{path}"

    parent = path[:path.rindex("/")]
    return f"{parent}/{prefix}{item_name(path)}"


def local_temp_path(path: str, prefix: str = TEMP_PREFIX) -> str:
    """
    Get the temporary local path a download is written to.

    Args:
        path: Local path, using '/' or '\\'
        prefix: Marker put in front of the item name

    Returns:
        '/'-separated path in the same folder with the marked item name

    Raises:
        ValueError: If the path has no parent folder
    """
    path = normalize_separators(path)
    if "/" not in path:
        raise ValueError(f"Local path has no parent folder: {path!r}")

    parent = path[:path.rindex("/")]
    return f"{parent}/{prefix}{item_name(path)}"


def is_temp_name(path: str, prefix: str = TEMP_PREFIX) -> bool:
    """Check whether the item a path points to carries the temp marker."""
    return item_name(path).startswith(prefix)
