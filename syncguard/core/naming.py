"""
Filename Validation

Checks whether a name can be created on a target filesystem. A name that
is legal where it came from may be illegal on a remote host with other
naming rules, and legacy device names are rejected even when every
character in them is allowed.

Author: SyncGuard Project
License: MIT
"""

import os
from enum import Enum
from typing import FrozenSet, List


class TargetPlatform(str, Enum):
    """Filesystem naming rules a name is validated against."""
    HOST = "host"
    WINDOWS = "windows"
    POSIX = "posix"


RESERVED_NAMES: FrozenSet[str] = frozenset(
    ["CON", "PRN", "AUX", "CLOCK$", "NUL"]
    + [f"COM{i}" for i in range(10)]
    + [f"LPT{i}" for i in range(10)]
)

WINDOWS_INVALID_CHARS: FrozenSet[str] = frozenset(
    '"<>|:*?\\/' + "".join(chr(code) for code in range(32))
)

POSIX_INVALID_CHARS: FrozenSet[str] = frozenset("\0/")


def invalid_filename_chars(platform: str = TargetPlatform.HOST) -> FrozenSet[str]:
    """
    Get the characters that may not appear in a filename.

    Args:
        platform: "host", "windows" or "posix"

    Returns:
        Immutable set of invalid characters

    Raises:
        ValueError: If the platform is unknown
    """
    platform = TargetPlatform(platform)
    if platform is TargetPlatform.HOST:
        platform = TargetPlatform.WINDOWS if os.name == "nt" else TargetPlatform.POSIX

    if platform is TargetPlatform.WINDOWS:
        return WINDOWS_INVALID_CHARS
    return POSIX_INVALID_CHARS


def is_reserved_name(name: str) -> bool:
    """Check a name against the device-reserved names, ignoring case."""
    return name.upper() in RESERVED_NAMES


def find_invalid_chars(name: str, platform: str = TargetPlatform.HOST) -> List[str]:
    """List the invalid characters of ``name`` in order of first appearance."""
    invalid = invalid_filename_chars(platform)
    found = []
    for ch in name:
        if ch in invalid and ch not in found:
            found.append(ch)
    return found


def is_allowed_filename(name: str, platform: str = TargetPlatform.HOST) -> bool:
    """
    Check a filename for characters and names that won't work on most servers.

    Args:
        name: Candidate item name (a single path segment)
        platform: Naming rules to apply ("host", "windows" or "posix")

    Returns:
        True if every character is valid and the name is not reserved
    """
    if not isinstance(name, str):
        return False

    invalid = invalid_filename_chars(platform)
    return all(ch not in invalid for ch in name) and not is_reserved_name(name)
