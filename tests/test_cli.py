import csv

import pytest
from spacecraft_sim import cli


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert args.commands is None
    assert not args.interactive
    assert args.realtime == 0.0
    assert args.locale == 'en'


def test_realtime_flag_without_value():
    assert cli.parse_args(['--realtime']).realtime == 1.0


def test_commands_and_interactive_are_exclusive():
    with pytest.raises(SystemExit):
        cli.parse_args(['--commands', 'r', 'y', '--interactive'])


def test_main_landed_exit_code(capsys):
    assert cli.main(['--commands', 'r', 'y', '--quiet']) == 0
    out = capsys.readouterr().out
    assert "MISSION SUMMARY" in out
    assert "MISSION COMPLETE - Landed" in out
    assert "[TELEMETRY]" not in out


def test_main_no_command_exit_code(capsys):
    assert cli.main(['--quiet']) == 1
    assert "Final phase:   ORBIT" in capsys.readouterr().out


def test_main_turkish_labels(capsys):
    cli.main(['--commands', 'r', 'y', '--locale', 'tr'])
    out = capsys.readouterr().out
    assert "Kalkış" in out
    assert "Dönüş" in out


def test_main_writes_csv_and_error_log(tmp_path):
    csv_path = tmp_path / "telemetry.csv"
    error_log = tmp_path / "error_log.txt"
    cli.main(['--quiet', '--csv', str(csv_path), '--error-log', str(error_log)])

    with open(csv_path, newline='') as fh:
        rows = list(csv.reader(fh))
    assert len(rows) == 1 + 15
    # Nominal flight without a return command records no faults
    assert not error_log.exists()


def test_main_unexpected_error_exit_code(monkeypatch, capsys):
    def broken(**kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(cli, 'run_mission', broken)
    assert cli.main(['--quiet']) == 2
    assert "[ERROR] Simulation failed: boom" in capsys.readouterr().out
