"""
Lock Probe

Best-effort check for whether a local file is still being written by
someone else. Any failure to take the file exclusively counts as "in use"
so a half-written file is never picked up for upload.

On Windows the file is opened with a share mode of 0, so the open fails
while any other handle to it exists. On POSIX systems there is no share
mode; the file is opened read/write and a non-blocking ``flock`` is
requested. ``flock`` is advisory: it only sees writers that lock too.

Each probe makes one blocking open call with no timeout. Probes of the
same path are not serialized here.

Author: SyncGuard Project
License: MIT
"""

import errno
import os
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import IO, Iterator, Union

from ..utils.logger import get_logger

if os.name == "nt":
    import ctypes
    import msvcrt
    from ctypes import wintypes

    _kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
    _CreateFileW = _kernel32.CreateFileW
    _CreateFileW.argtypes = [
        wintypes.LPCWSTR, wintypes.DWORD, wintypes.DWORD, wintypes.LPVOID,
        wintypes.DWORD, wintypes.DWORD, wintypes.HANDLE
    ]
    _CreateFileW.restype = wintypes.HANDLE
    _CloseHandle = _kernel32.CloseHandle
    _CloseHandle.argtypes = [wintypes.HANDLE]
    _CloseHandle.restype = wintypes.BOOL
    INVALID_HANDLE_VALUE = wintypes.HANDLE(-1).value
else:
    import fcntl

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]

GENERIC_READ = 0x80000000
GENERIC_WRITE = 0x40000000
OPEN_EXISTING = 3
FILE_ATTRIBUTE_NORMAL = 0x80

ERROR_FILE_NOT_FOUND = 2
ERROR_PATH_NOT_FOUND = 3
ERROR_ACCESS_DENIED = 5
ERROR_SHARING_VIOLATION = 32
ERROR_LOCK_VIOLATION = 33


class LockState(Enum):
    """Outcome of a lock probe."""
    FREE = "free"
    LOCKED = "locked"
    MISSING = "missing"
    INACCESSIBLE = "inaccessible"


def _winerror_to_oserror(winerror: int, path: PathLike) -> OSError:
    """Translate a CreateFileW failure into the matching OSError subclass."""
    filename = os.fspath(path)
    if winerror in (ERROR_FILE_NOT_FOUND, ERROR_PATH_NOT_FOUND):
        return FileNotFoundError(errno.ENOENT, "No such file", filename)
    if winerror == ERROR_ACCESS_DENIED:
        return PermissionError(errno.EACCES, "Access denied", filename)
    if winerror in (ERROR_SHARING_VIOLATION, ERROR_LOCK_VIOLATION):
        return BlockingIOError(errno.EAGAIN, "File is in use by another handle", filename)
    return OSError(errno.EIO, f"CreateFileW failed with error {winerror}", filename)


def _open_unshared(path: PathLike) -> IO[bytes]:
    handle = _CreateFileW(
        os.fspath(path), GENERIC_READ | GENERIC_WRITE, 0, None,
        OPEN_EXISTING, FILE_ATTRIBUTE_NORMAL, None
    )
    if handle is None or handle == INVALID_HANDLE_VALUE:
        raise _winerror_to_oserror(ctypes.get_last_error(), path)

    try:
        fd = msvcrt.open_osfhandle(handle, os.O_RDWR | os.O_BINARY)
    except OSError:
        _CloseHandle(handle)
        raise
    return os.fdopen(fd, "r+b")


def _lock(handle: IO[bytes]) -> None:
    try:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
    except OSError as e:
        raise BlockingIOError(e.errno, f"File is locked: {handle.name}") from e


@contextmanager
def exclusive_handle(path: PathLike) -> Iterator[IO[bytes]]:
    """
    Open a file for read/write with no other handle allowed alongside it.

    The handle (and the POSIX lock) is released on every exit path.

    Args:
        path: File to open

    Yields:
        Binary file object opened for reading and writing

    Raises:
        BlockingIOError: If another handle holds the file
        OSError: If the file cannot be opened
    """
    if os.name == "nt":
        with _open_unshared(path) as handle:
            yield handle
        return

    with open(path, "r+b") as handle:
        _lock(handle)
        try:
            yield handle
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def probe_lock(path: PathLike) -> LockState:
    """
    Try to take the file exclusively and report what happened.

    Args:
        path: Local file to probe

    Returns:
        LockState.FREE if the exclusive open succeeded
    """
    name = Path(path).name

    try:
        with exclusive_handle(path):
            state = LockState.FREE
    except FileNotFoundError:
        state = LockState.MISSING
    except (PermissionError, IsADirectoryError):
        state = LockState.INACCESSIBLE
    except OSError:
        state = LockState.LOCKED

    if name:
        logger.debug(f"File {name} is locked: {state is not LockState.FREE} ({state.value})")
    return state


def file_is_used(path: PathLike) -> bool:
    """
    Check if a file is still being used (hasn't been completely transferred to the folder).

    Missing and unreadable files are reported as in use as well.

    Args:
        path: The file to check

    Returns:
        True if the file is in use or could not be opened exclusively
    """
    return probe_lock(path) is not LockState.FREE
