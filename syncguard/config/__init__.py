"""
SyncGuard Configuration Module

This module handles configuration loading, validation, and management for
SyncGuard. It supports YAML-based configuration with environment variable
overrides.

Author: SyncGuard Project
License: MIT
"""

__version__ = "0.1.0"
