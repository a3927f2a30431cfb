"""
SyncGuard

Safety primitives for a folder-mirroring sync client: transfer-safe
temporary names, lock probing for local files, and cross-platform
filename validation.

Author: SyncGuard Project
License: MIT
"""

__version__ = "0.1.0"
