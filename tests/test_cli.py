"""Tests for the command-line tools."""

import json

from snake_game.cli import _build_parser, main


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.ticks == 100
        assert args.seed is None
        assert args.keys == ""

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate",
            "--ticks", "30",
            "--seed", "4",
            "--grid-size", "12",
            "--wall-mode", "death",
            "--keys", "ArrowUp,ArrowLeft",
        ])
        assert args.ticks == 30
        assert args.seed == 4
        assert args.grid_size == 12
        assert args.wall_mode == "death"


class TestConfigCommand:
    def test_prints_defaults(self, capsys, monkeypatch):
        monkeypatch.delenv("SNAKE_GAME_GRID_SIZE", raising=False)
        assert main(["config"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["grid_size"] == 20
        assert out["wall_mode"] == "wrap"

    def test_environment_applies(self, capsys, monkeypatch):
        monkeypatch.setenv("SNAKE_GAME_GRID_SIZE", "9")
        assert main(["config"]) == 0
        assert json.loads(capsys.readouterr().out)["grid_size"] == 9

    def test_config_file(self, capsys, tmp_path, monkeypatch):
        monkeypatch.delenv("SNAKE_GAME_GRID_SIZE", raising=False)
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"grid_size": 7, "wall_mode": "death"}))
        assert main(["config", "--config", str(path)]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["grid_size"] == 7
        assert out["wall_mode"] == "death"


class TestSimulateCommand:
    def test_runs_into_wall(self, capsys):
        rc = main([
            "simulate", "--ticks", "50", "--seed", "1",
            "--grid-size", "10", "--wall-mode", "death",
        ])
        assert rc == 0
        state = json.loads(capsys.readouterr().out)
        assert state["over"] is True
        assert state["snake"][0] == [9, 5]

    def test_keys_steer(self, capsys):
        rc = main([
            "simulate", "--ticks", "1", "--seed", "1", "--keys", "ArrowDown",
        ])
        assert rc == 0
        state = json.loads(capsys.readouterr().out)
        assert state["direction"] == "down"
        assert state["tick"] == 1

    def test_negative_ticks(self):
        assert main(["simulate", "--ticks", "-1"]) == 2
