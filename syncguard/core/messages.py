"""
User-Facing Messages

Maps each kind of notification to a catalog key, a fallback template and
the number of positional arguments the template expects. Translation
lookup is delegated to a MessageCatalog.

Author: SyncGuard Project
License: MIT
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import yaml

from ..utils.logger import get_logger

logger = get_logger(__name__)

APP_NAME = "SyncGuard"


class MessageKind(Enum):
    """Kinds of notification shown to the user."""
    ITEM_CHANGED = "item_changed"
    ITEM_CREATED = "item_created"
    ITEM_DELETED = "item_deleted"
    ITEM_RENAMED = "item_renamed"
    ITEM_UPDATED = "item_updated"
    FILES_OR_FOLDERS_UPDATED = "files_or_folders_updated"
    FILES_OR_FOLDERS_CREATED = "files_or_folders_created"
    FILES_AND_FOLDERS_CHANGED = "files_and_folders_changed"
    ITEMS_DELETED = "items_deleted"
    FILE = "file"
    FILES = "files"
    FOLDER = "folder"
    FOLDERS = "folders"
    LINK_COPIED = "link_copied"
    CONNECTING = "connecting"
    DISCONNECTED = "disconnected"
    RECONNECTING = "reconnecting"
    LISTING = "listing"
    UPLOADING = "uploading"
    DOWNLOADING = "downloading"
    SYNCING = "syncing"
    ALL_SYNCED = "all_synced"
    OFFLINE = "offline"
    READY = "ready"
    NOTHING = "nothing"
    NOT_AVAILABLE = "not_available"


@dataclass(frozen=True)
class MessageTemplate:
    """Catalog key, fallback text and argument count of a message."""
    key: str
    fallback: str
    arg_count: int = 0


MESSAGE_TEMPLATES: Mapping[MessageKind, MessageTemplate] = MappingProxyType({
    MessageKind.ITEM_CHANGED: MessageTemplate("tray/changed", "{0} was changed.", 1),
    MessageKind.ITEM_CREATED: MessageTemplate("tray/created", "{0} was created.", 1),
    MessageKind.ITEM_DELETED: MessageTemplate("tray/deleted", "{0} was deleted.", 1),
    MessageKind.ITEM_RENAMED: MessageTemplate("tray/renamed", "{0} was renamed to {1}.", 2),
    MessageKind.ITEM_UPDATED: MessageTemplate("tray/updated", "{0} was updated.", 1),
    MessageKind.FILES_OR_FOLDERS_UPDATED: MessageTemplate(
        "tray/FilesOrFoldersUpdated", "{0} {1} have been updated", 2
    ),
    MessageKind.FILES_OR_FOLDERS_CREATED: MessageTemplate(
        "tray/FilesOrFoldersCreated", "{0} {1} have been created", 2
    ),
    MessageKind.FILES_AND_FOLDERS_CHANGED: MessageTemplate(
        "tray/FilesAndFoldersChanged", "{0} {1} and {2} {3} have been updated", 4
    ),
    MessageKind.ITEMS_DELETED: MessageTemplate("tray/ItemsDeleted", "{0} items have been deleted.", 1),
    MessageKind.FILE: MessageTemplate("tray/file", "File"),
    MessageKind.FILES: MessageTemplate("tray/files", "Files"),
    MessageKind.FOLDER: MessageTemplate("tray/folder", "Folder"),
    MessageKind.FOLDERS: MessageTemplate("tray/folders", "Folders"),
    MessageKind.LINK_COPIED: MessageTemplate("tray/link_copied", "Link copied to clipboard"),
    MessageKind.CONNECTING: MessageTemplate("tray/connecting", f"{APP_NAME} - Connecting..."),
    MessageKind.DISCONNECTED: MessageTemplate("tray/disconnected", f"{APP_NAME} - Disconnected"),
    MessageKind.RECONNECTING: MessageTemplate("tray/reconnecting", f"{APP_NAME} - Re-Connecting..."),
    MessageKind.LISTING: MessageTemplate("tray/listing", f"{APP_NAME} - Listing..."),
    MessageKind.UPLOADING: MessageTemplate("tray/uploading", "Uploading {0}", 1),
    MessageKind.DOWNLOADING: MessageTemplate("tray/downloading", "Downloading {0}", 1),
    MessageKind.SYNCING: MessageTemplate("tray/syncing", f"{APP_NAME} - Syncing"),
    MessageKind.ALL_SYNCED: MessageTemplate("tray/synced", f"{APP_NAME} - All files synced"),
    MessageKind.OFFLINE: MessageTemplate("tray/offline", f"{APP_NAME} - Offline"),
    MessageKind.READY: MessageTemplate("tray/ready", f"{APP_NAME} - Ready"),
    MessageKind.NOTHING: MessageTemplate("tray/app_name", APP_NAME),
    MessageKind.NOT_AVAILABLE: MessageTemplate("tray/not_available", "Not Available"),
})


class MessageCatalog(ABC):
    """Source of localized message templates."""

    @abstractmethod
    def get(self, key: str, fallback: str) -> str:
        """
        Look up the template stored under ``key``.

        Args:
            key: Slash-separated key such as "en/tray/changed"
            fallback: Template returned when the key is unresolved

        Returns:
            Localized template with positional placeholders
        """


class YamlMessageCatalog(MessageCatalog):
    """
    Message catalog backed by a YAML translations file.

    Expected layout::

        en:
          tray:
            changed: "{0} was changed."
    """

    def __init__(self, translations: Optional[Dict[str, Any]] = None):
        self._translations = translations or {}

    @classmethod
    def from_file(cls, path) -> "YamlMessageCatalog":
        """
        Load translations from a YAML file.

        A missing file yields an empty catalog, so every lookup falls back.

        Raises:
            ValueError: If the file cannot be parsed
        """
        translations_file = Path(path)
        if not translations_file.exists():
            logger.warning(f"Translations file not found: {translations_file}")
            return cls()

        try:
            with open(translations_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse translations file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Translations root must be a mapping: {translations_file}")
        return cls(data)

    def get(self, key: str, fallback: str) -> str:
        node: Any = self._translations
        for part in key.split("/"):
            if not isinstance(node, dict) or part not in node:
                return fallback
            node = node[part]

        if not isinstance(node, str):
            return fallback
        return node


def render_message(kind: MessageKind, catalog: MessageCatalog, language: str, *args: Any) -> str:
    """
    Build the text shown for a message.

    Args:
        kind: Kind of message
        catalog: Catalog used for the localized template
        language: Language code the key is looked up under
        *args: Values for the template's positional placeholders

    Returns:
        Formatted message

    Raises:
        ValueError: If the number of arguments doesn't match the template
    """
    template = MESSAGE_TEMPLATES[kind]
    if len(args) != template.arg_count:
        raise ValueError(
            f"{kind.name} expects {template.arg_count} argument(s), got {len(args)}"
        )

    text = catalog.get(f"{language}/{template.key}", template.fallback)
    try:
        return text.format(*args)
    except (IndexError, KeyError, ValueError) as e:
        logger.warning(f"Bad translation for {template.key} ({e}), using fallback")
        return template.fallback.format(*args)
