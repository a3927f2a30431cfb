"""
SyncGuard Core Module

Path normalization, filename validation and lock probing used by the
sync engine before it stages a transfer.

Author: SyncGuard Project
License: MIT
"""

from .paths import (
    TEMP_PREFIX,
    item_name,
    is_temp_name,
    local_temp_path,
    normalize_separators,
    parent_path,
    remote_temp_path,
)
from .naming import RESERVED_NAMES, is_allowed_filename, is_reserved_name
from .lock_probe import LockState, exclusive_handle, file_is_used, probe_lock
from .local_index import LocalIndex, path_is_file
from .messages import MessageCatalog, MessageKind, YamlMessageCatalog, render_message
from .credentials import CredentialVault, SecretCodec

__version__ = "0.1.0"
__all__ = [
    'TEMP_PREFIX', 'item_name', 'is_temp_name', 'local_temp_path',
    'normalize_separators', 'parent_path', 'remote_temp_path',
    'RESERVED_NAMES', 'is_allowed_filename', 'is_reserved_name',
    'LockState', 'exclusive_handle', 'file_is_used', 'probe_lock',
    'LocalIndex', 'path_is_file',
    'MessageCatalog', 'MessageKind', 'YamlMessageCatalog', 'render_message',
    'CredentialVault', 'SecretCodec',
]
