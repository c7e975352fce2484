"""
Tests for the command-line interface and configuration.
"""

import json

import pytest

from .. import config
from ..cli import main


class TestCli:
    """Tests for the skull command."""

    def test_limits(self, capsys):
        main(["limits"])
        data = json.loads(capsys.readouterr().out)

        assert data == {
            "players": [3, 6],
            "starting_hand": ["penalty", "safe", "safe", "safe"],
            "pile_capacity": 4,
            "winning_score": 2,
        }

    def test_new_game(self, capsys):
        main(["new", "--players", "4", "--seed", "3", "--viewer", "2"])
        out = capsys.readouterr().out
        view_text, next_line = out.rsplit("Next: ", 1)

        view = json.loads(view_text)
        assert view["player_count"] == 4
        assert view["viewer"] == 2
        assert view["players"][2]["hand"] == ["penalty", "safe", "safe", "safe"]

        event = json.loads(next_line)
        assert event["event_type"] == "input_required"
        assert event["player"] == 0
        assert event["input_type"] == "play_card"

    def test_new_game_bad_player_count(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["new", "--players", "9"])

        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().out

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])

        assert exc.value.code == 1


class TestConfig:
    """Tests for environment configuration."""

    def test_default_seed_unset(self, monkeypatch):
        monkeypatch.setattr(config, "SKULL_SEED", None)
        assert config.default_seed() is None

    def test_default_seed_blank(self, monkeypatch):
        monkeypatch.setattr(config, "SKULL_SEED", "  ")
        assert config.default_seed() is None

    def test_default_seed(self, monkeypatch):
        monkeypatch.setattr(config, "SKULL_SEED", "17")
        assert config.default_seed() == 17

    def test_invalid_seed(self, monkeypatch):
        monkeypatch.setattr(config, "SKULL_SEED", "seventeen")
        with pytest.raises(ValueError):
            config.default_seed()
