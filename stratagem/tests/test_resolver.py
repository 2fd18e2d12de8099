"""
Tests for reference resolution.

Tests:
- Empty, "custom" and named references
- Absent references never touch the filesystem
- Component suffix table
"""

import pytest

from ..definitions import RuleDefinition
from ..loader import COMPONENT_SUFFIXES, DefinitionLoader, component_kind, resolve_reference
from ..loader.resolver import game_file_name, game_id_from_file


class TestResolveReference:
    """Tests for resolve_reference."""

    def test_empty_reference_uses_owner_id(self):
        """An empty reference resolves to the owner's id."""
        assert resolve_reference("", "teg", ".rule.yaml") == "teg.rule.yaml"

    def test_custom_reference(self):
        """'custom' resolves to the shared custom prefix regardless of owner."""
        assert resolve_reference("custom", "teg", ".board.yaml") == "custom.board.yaml"
        assert resolve_reference("custom", "risk", ".board.yaml") == "custom.board.yaml"

    def test_named_reference(self):
        """Any other value is used as the file prefix."""
        assert resolve_reference("world", "teg", ".board.yaml") == "world.board.yaml"

    def test_absent_reference(self):
        """None means the component is absent."""
        assert resolve_reference(None, "teg", ".cards.yaml") is None

    def test_whitespace_is_not_empty(self):
        """Only the exact empty string means 'use the owner id'."""
        assert resolve_reference(" ", "teg", ".dices.yaml") == " .dices.yaml"


class TestAbsentReferenceIsNotRead:
    """Absent references are skipped before any file access."""

    def test_no_file_read_for_absent(self, tmp_path):
        """load_component returns None without reading."""
        loader = DefinitionLoader(tmp_path)

        result = loader.load_component("teg", None, RuleDefinition, ".rule.yaml")

        assert result is None
        assert loader.files_read == 0

    def test_present_reference_is_read(self, data_dir):
        """A present reference reads exactly one file."""
        loader = DefinitionLoader(data_dir)

        rule = loader.load_component("teg", "", RuleDefinition, ".rule.yaml")

        assert rule is not None
        assert loader.files_read == 1


class TestComponentTable:
    """Tests for the component suffix table."""

    def test_suffixes(self):
        assert COMPONENT_SUFFIXES == {
            "rule": ".rule.yaml",
            "board": ".board.yaml",
            "pieces": ".pieces.yaml",
            "cards": ".cards.yaml",
            "dices": ".dices.yaml",
        }

    def test_component_kind_lookup(self):
        assert component_kind("rule").definition is RuleDefinition

    def test_unknown_component(self):
        with pytest.raises(KeyError):
            component_kind("tokens")

    def test_game_file_names(self):
        assert game_file_name("teg") == "teg.game.yaml"
        assert game_id_from_file("teg.game.yaml") == "teg"
        assert game_id_from_file("teg.rule.yaml") is None
