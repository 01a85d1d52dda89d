"""Tests for Roster CLI argument parsing and entry point."""

import pytest

from roster_cli import __version__
from roster_cli import main as cli_main
from roster_cli.config import Config
from roster_cli.main import build_store, parse_args


def test_no_args():
    assert parse_args([]) == {
        "data_file": None,
        "key": None,
        "show_help": False,
        "show_version": False,
    }


def test_data_file_and_key():
    args = parse_args(["--data-file", "/tmp/x.json", "--key", "class_b"])

    assert args["data_file"] == "/tmp/x.json"
    assert args["key"] == "class_b"


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flag(flag):
    assert parse_args([flag])["show_help"] is True


@pytest.mark.parametrize("flag", ["-v", "--version"])
def test_version_flag(flag):
    assert parse_args([flag])["show_version"] is True


@pytest.mark.parametrize("args", [["--data-file"], ["--key"], ["--bogus"], ["stray"]])
def test_bad_args_exit(args, capsys):
    with pytest.raises(SystemExit) as exc:
        parse_args(args)

    assert exc.value.code == 1
    assert capsys.readouterr().out


def test_main_version(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["roster", "--version"])
    cli_main.main()
    assert capsys.readouterr().out.strip() == f"roster {__version__}"


def test_main_help(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["roster", "--help"])
    cli_main.main()
    assert "--data-file PATH" in capsys.readouterr().out


@pytest.mark.parametrize("command", ["/list", "/show", "/add", "/edit", "/delete", "/search", "/course",
                                     "/year", "/clear", "/stats", "/export", "/help", "/quit"])
def test_help_lists_every_repl_command(command, capsys):
    cli_main.print_help()
    assert f"  {command} " in capsys.readouterr().out


def test_main_starts_repl_on_configured_file(monkeypatch, tmp_path):
    monkeypatch.delenv("ROSTER_DATA_FILE", raising=False)
    monkeypatch.delenv("ROSTER_STORAGE_KEY", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))
    data_file = tmp_path / "school.json"
    monkeypatch.setattr("sys.argv", ["roster", "--data-file", str(data_file)])

    inputs = iter(["/quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    cli_main.main()

    # Seed data was written on first start
    assert data_file.exists()


def test_build_store_uses_config(tmp_path, monkeypatch):
    monkeypatch.delenv("ROSTER_DATA_FILE", raising=False)
    monkeypatch.delenv("ROSTER_STORAGE_KEY", raising=False)
    config = Config(data_file_override=str(tmp_path / "s.json"), key_override="k", config_dir=tmp_path)

    store = build_store(config)

    assert len(store.students) == 3
    assert '"k"' in (tmp_path / "s.json").read_text()
