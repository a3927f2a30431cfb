"""
Unit Tests for Messages

Tests the message template table, the YAML catalog and message rendering.

Author: SyncGuard Project
License: MIT
"""

import pytest

from syncguard.core.messages import (
    MESSAGE_TEMPLATES,
    MessageCatalog,
    MessageKind,
    YamlMessageCatalog,
    render_message
)


class RecordingCatalog(MessageCatalog):
    """Catalog that records lookups and always falls back."""

    def __init__(self):
        self.keys = []

    def get(self, key, fallback):
        self.keys.append(key)
        return fallback


class TestMessageTemplates:
    """Test suite for the template table."""

    def test_every_kind_has_template(self):
        """Test that no kind is missing from the table."""
        assert set(MESSAGE_TEMPLATES) == set(MessageKind)

    def test_arg_count_matches_placeholders(self):
        """Test that each fallback formats with its declared argument count."""
        for kind, template in MESSAGE_TEMPLATES.items():
            args = [f"arg{i}" for i in range(template.arg_count)]
            text = template.fallback.format(*args)
            assert "{" not in text, kind

    def test_table_is_read_only(self):
        """Test that the table can't be modified."""
        with pytest.raises(TypeError):
            MESSAGE_TEMPLATES[MessageKind.FILE] = None


class TestYamlMessageCatalog:
    """Test suite for YamlMessageCatalog."""

    def test_load_and_lookup(self, tmp_path):
        """Test resolving a key from a translations file."""
        translations = tmp_path / "translations.yaml"
        translations.write_text(
            "de:\n"
            "  tray:\n"
            "    changed: \"{0} wurde geändert.\"\n",
            encoding="utf-8"
        )

        catalog = YamlMessageCatalog.from_file(translations)

        assert catalog.get("de/tray/changed", "x") == "{0} wurde geändert."

    def test_unresolved_key_uses_fallback(self):
        """Test fallback for unknown languages and keys."""
        catalog = YamlMessageCatalog({"en": {"tray": {"ready": "Ready!"}}})

        assert catalog.get("fr/tray/ready", "fb") == "fb"
        assert catalog.get("en/tray/missing", "fb") == "fb"
        assert catalog.get("en/tray", "fb") == "fb"

    def test_missing_file_gives_empty_catalog(self, tmp_path):
        """Test that a missing file makes every lookup fall back."""
        catalog = YamlMessageCatalog.from_file(tmp_path / "none.yaml")

        assert catalog.get("en/tray/ready", "fb") == "fb"

    def test_invalid_yaml_raises(self, tmp_path):
        """Test that a broken file is reported."""
        broken = tmp_path / "broken.yaml"
        broken.write_text("en: [unclosed\n")

        with pytest.raises(ValueError, match="Failed to parse"):
            YamlMessageCatalog.from_file(broken)


class TestRenderMessage:
    """Test suite for render_message."""

    def test_fallback_rendering(self):
        """Test rendering through the fallback template."""
        catalog = RecordingCatalog()

        text = render_message(MessageKind.ITEM_RENAMED, catalog, "en", "a.txt", "b.txt")

        assert text == "a.txt was renamed to b.txt."
        assert catalog.keys == ["en/tray/renamed"]

    def test_localized_rendering(self):
        """Test rendering a translated template."""
        catalog = YamlMessageCatalog({"de": {"tray": {"uploading": "Lade {0} hoch"}}})

        assert render_message(MessageKind.UPLOADING, catalog, "de", "x.jpg") == "Lade x.jpg hoch"

    def test_wrong_argument_count_raises(self):
        """Test that arity mismatches are rejected."""
        with pytest.raises(ValueError, match="expects 1"):
            render_message(MessageKind.ITEM_CHANGED, RecordingCatalog(), "en")

    def test_broken_translation_falls_back(self):
        """Test that a translation with bad placeholders is not used."""
        catalog = YamlMessageCatalog({"en": {"tray": {"changed": "{3} changed"}}})

        assert render_message(MessageKind.ITEM_CHANGED, catalog, "en", "a") == "a was changed."


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
