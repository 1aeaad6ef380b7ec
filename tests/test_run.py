import json
import sys

import pytest

from run import cli, main


def test_solve_text(capsys):
    assert main(["solve", "--origin", "1,1", "--target", "2,2"]) == 0
    assert capsys.readouterr().out.strip() == "(1, 1) -> (2, 2): 141 m, 45° / 785 mrad"


def test_solve_json(capsys):
    assert main(["solve", "--origin=1,1", "--target=-1,-1", "--grid-size", "10", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["range_m"] == 28
    assert data["bearing_deg"] == 225


def test_solve_bad_grid_size(capsys):
    assert main(["solve", "--origin", "1,1", "--target", "2,2", "--grid-size", "0"]) == 2
    assert capsys.readouterr().err.startswith("error: Grid size")


def test_solve_bad_point(capsys):
    assert main(["solve", "--origin", "1", "--target", "2,2"]) == 2
    assert "error:" in capsys.readouterr().err


def test_table(capsys):
    assert main(["table", "--origin", "1,1", "--target", "N=1,2", "--target", "E=2,1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["N", "100", "m", "0°", "0", "mrad"]
    assert lines[1].split() == ["E", "100", "m", "90°", "1571", "mrad"]


def test_table_bad_target_spec(capsys):
    assert main(["table", "--origin", "1,1", "--target", "1,2"]) == 2


def test_command_required():
    with pytest.raises(SystemExit):
        main([])


def test_solve_negative_target_as_separate_value(capsys):
    assert main(["solve", "--origin", "1,1", "--target", "-1,-1"]) == 0
    assert capsys.readouterr().out.strip() == "(1, 1) -> (-1, -1): 283 m, 225° / 3927 mrad"


def test_table_negative_origin(capsys):
    assert main(["table", "--origin", "-3,-3", "--target", "A=-3,-2", "--target", "B=-4,-3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["A", "100", "m", "0°", "0", "mrad"]
    assert lines[1].split() == ["B", "100", "m", "270°", "4712", "mrad"]


def test_negative_value_does_not_swallow_flags(capsys):
    assert main(["solve", "--origin", "-1,-1", "--target", "1,1", "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["bearing_deg"] == 45


def test_serve_rejects_bad_port_env(monkeypatch, capsys):
    monkeypatch.setenv("ARTY_PORT", "eighty")
    assert main(["serve"]) == 2
    assert "ARTY_PORT" in capsys.readouterr().err


def test_cli_rejects_bad_log_level_env(monkeypatch, capsys):
    monkeypatch.setattr("sys.excepthook", sys.excepthook)
    monkeypatch.setenv("ARTY_LOG_LEVEL", "LOUD")
    monkeypatch.setattr("sys.argv", ["grid-arty", "solve", "--origin", "1,1", "--target", "2,2"])
    with pytest.raises(SystemExit) as exc:
        cli()
    assert exc.value.code == 2
    assert "ARTY_LOG_LEVEL" in capsys.readouterr().err
