"""
Tests for the interplay CLI.

Commands run against content and progression files in tmp_path.
"""

import json

import pytest

from interplay.interface.cli import COMMANDS, main
from interplay.interface.config import load_config, set_content_path, set_state_path
from interplay.state import dump_content, load_progress


@pytest.fixture
def content_file(tmp_path, content_pack):
    path = tmp_path / "content.json"
    dump_content(content_pack, path)
    return path


def run(tmp_path, *args) -> int:
    return main(["--config-dir", str(tmp_path), *args])


class TestReadCommands:

    def test_check(self, tmp_path, content_file, capsys):
        assert run(tmp_path, "check", str(content_file)) == 0

        out = capsys.readouterr().out
        assert "open_gate" in out
        assert "secret_meeting" not in out

    def test_check_all(self, tmp_path, content_file, capsys):
        assert run(tmp_path, "check", str(content_file), "--all") == 0
        assert "secret_meeting" in capsys.readouterr().out

    def test_check_with_player(self, tmp_path, content_file, capsys):
        player = tmp_path / "player.json"
        player.write_text(json.dumps({"completedQuests": ["betrayal"]}), encoding="utf-8")

        assert run(tmp_path, "check", str(content_file), "--player", str(player)) == 0
        assert "secret_meeting" in capsys.readouterr().out

    def test_standings(self, tmp_path, content_file, capsys):
        assert run(tmp_path, "standings", str(content_file)) == 0
        assert "Council of Elders" in capsys.readouterr().out

    def test_missing_content(self, tmp_path):
        assert run(tmp_path, "check", str(tmp_path / "nope.json")) == 1

    def test_no_content_configured(self, tmp_path):
        assert run(tmp_path, "check") == 1

    def test_content_from_config(self, tmp_path, content_file):
        set_content_path(str(content_file), tmp_path)
        assert run(tmp_path, "standings") == 0


class TestValidateCommand:

    def test_valid_content(self, tmp_path, content_file):
        assert run(tmp_path, "validate", str(content_file)) == 0

    def test_errors_exit_nonzero(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"prestigeTracks": [
            {"id": "a", "counterTracks": ["b"]},
            {"id": "b", "counterTracks": ["a"]},
        ]}), encoding="utf-8")

        assert run(tmp_path, "validate", str(path)) == 1

    def test_invalid_tracks_reported_by_other_commands(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"prestigeTracks": [
            {"id": "a", "counterTracks": ["a"]},
        ]}), encoding="utf-8")

        assert run(tmp_path, "standings", str(path)) == 1


class TestWriteCommands:

    def test_complete_saves_progress(self, tmp_path, content_file):
        state = tmp_path / "progress.json"

        assert run(tmp_path, "complete", str(content_file), "open_gate", "--state", str(state)) == 0
        assert run(tmp_path, "complete", str(content_file), "open_gate", "--state", str(state)) == 0

        progress = load_progress(state)
        assert progress.influence.scores["elders"] == 20

    def test_complete_unavailable(self, tmp_path, content_file):
        state = tmp_path / "progress.json"

        assert run(tmp_path, "complete", str(content_file), "elder_council", "--state", str(state)) == 1
        assert not state.exists()

    def test_complete_force(self, tmp_path, content_file):
        state = tmp_path / "progress.json"

        code = run(
            tmp_path, "complete", str(content_file), "elder_council",
            "--state", str(state), "--force",
        )

        assert code == 0
        assert load_progress(state).prestige.scores["valor"] == 100

    def test_complete_unknown_interaction(self, tmp_path, content_file, capsys):
        state = tmp_path / "progress.json"

        assert run(tmp_path, "complete", str(content_file), "nope", "--state", str(state)) == 1
        assert "Unknown interaction" in capsys.readouterr().out
        assert not state.exists()

    def test_unrelated_key_error_propagates(self, tmp_path, content_file, monkeypatch):
        """Only the unknown-interaction case is reported; other bugs surface."""
        def broken(args, config):
            raise KeyError("internal")

        monkeypatch.setitem(COMMANDS, "standings", broken)

        with pytest.raises(KeyError):
            run(tmp_path, "standings", str(content_file))

    def test_complete_requires_state(self, tmp_path, content_file):
        assert run(tmp_path, "complete", str(content_file), "open_gate") == 1

    def test_decay(self, tmp_path, content_file):
        state = tmp_path / "progress.json"
        set_state_path(str(state), tmp_path)
        run(tmp_path, "complete", str(content_file), "elder_council", "--force")

        assert run(tmp_path, "decay", str(content_file)) == 0

        assert load_progress(state).prestige.scores["valor"] == 95


class TestConfigCommand:

    def test_sets_defaults(self, tmp_path, content_file):
        code = run(
            tmp_path, "config",
            "--content", str(content_file),
            "--state", "saves/p1.json",
            "--level", "info",
            "--show-hidden", "on",
        )

        assert code == 0
        config = load_config(tmp_path)
        assert config["content_path"] == str(content_file)
        assert config["state_path"] == "saves/p1.json"
        assert config["log_level"] == "INFO"
        assert config["show_hidden"] is True

    def test_empty_value_clears(self, tmp_path, content_file):
        set_content_path(str(content_file), tmp_path)

        assert run(tmp_path, "config", "--content", "") == 0
        assert load_config(tmp_path)["content_path"] is None

    def test_shows_current_values(self, tmp_path, capsys):
        assert run(tmp_path, "config") == 0
        out = capsys.readouterr().out
        assert "log_level" in out
        assert "WARNING" in out

    def test_configured_content_used_by_check(self, tmp_path, content_file, capsys):
        run(tmp_path, "config", "--content", str(content_file), "--show-hidden", "on")
        capsys.readouterr()

        assert run(tmp_path, "check") == 0
        assert "secret_meeting" in capsys.readouterr().out
