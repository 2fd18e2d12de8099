"""
Tests for the command line interface and settings.
"""

import logging
import shutil

import pytest
import yaml

from ..cli import cmd_dump, cmd_phases, cmd_validate, main
from ..config import BUNDLED_DATA_DIR, configure_logging, get_settings
from ..loader import GameCatalog


class TestSettings:
    """Tests for environment settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("STRATAGEM_DATA_DIR", raising=False)
        monkeypatch.delenv("STRATAGEM_LOG_LEVEL", raising=False)
        monkeypatch.delenv("STRATAGEM_ENV", raising=False)

        settings = get_settings()

        assert settings.data_dir == BUNDLED_DATA_DIR
        assert settings.log_level == "WARNING"
        assert settings.env == "development"

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("STRATAGEM_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("STRATAGEM_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.data_dir == tmp_path
        assert settings.log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            configure_logging("LOUD")

    def test_configure_logging(self):
        configure_logging("INFO")
        assert logging.getLogger("stratagem").level == logging.INFO


class TestCommands:
    """Tests for CLI commands."""

    def test_list(self, game_dir, capsys):
        assert main(["--data-dir", str(game_dir), "list"]) == 0
        out = capsys.readouterr().out
        assert "teg" in out
        assert "2-6 players" in out

    def test_validate(self, game_dir, capsys):
        assert main(["--data-dir", str(game_dir), "validate", "teg"]) == 0
        assert "teg: valid" in capsys.readouterr().out

    def test_validate_failure(self, game_dir, capsys):
        path = game_dir / "teg.rule.yaml"
        path.write_text(path.read_text().replace("won: change_ownership", "won: z"))

        assert main(["--data-dir", str(game_dir), "validate"]) == 1

        captured = capsys.readouterr()
        assert "teg: invalid" in captured.out
        assert "phases.encounter.encounter.result.won" in captured.err

    def test_phases(self, game_dir, capsys):
        assert main(["--data-dir", str(game_dir), "phases", "teg"]) == 0
        out = capsys.readouterr().out
        assert "encounter --continue--> encounter" in out
        assert "end: (absorbing)" in out

    def test_dump(self, game_dir, capsys):
        assert main(["--data-dir", str(game_dir), "dump", "teg", "board"]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["id"] == "teg"
        assert len(data["fields"]) == 12

    def test_dump_missing_game(self, game_dir, capsys):
        assert main(["--data-dir", str(game_dir), "dump", "risk", "rule"]) == 1
        assert "cannot load" in capsys.readouterr().err

    def test_no_command(self, capsys):
        assert main([]) == 1


class TestDuplicateGames:
    """A game id found in two directories fails the command cleanly."""

    @pytest.fixture
    def catalog(self, game_dir, tmp_path):
        other = tmp_path / "copy"
        shutil.copytree(game_dir, other)
        return GameCatalog([game_dir, other])

    def test_validate(self, catalog, capsys):
        assert cmd_validate(catalog, ["teg"]) == 1
        captured = capsys.readouterr()
        assert "teg: invalid" in captured.out
        assert "duplicate game id 'teg'" in captured.err

    def test_validate_all(self, catalog, capsys):
        assert cmd_validate(catalog, []) == 1
        assert "duplicate game id" in capsys.readouterr().err

    def test_phases(self, catalog, capsys):
        assert cmd_phases(catalog, "teg") == 1
        assert "duplicate game id" in capsys.readouterr().err

    def test_dump(self, catalog, capsys):
        assert cmd_dump(catalog, "teg", "rule") == 1
        assert "duplicate game id" in capsys.readouterr().err
