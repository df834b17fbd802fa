"""Tests for the console entry point and the remaining top-level commands."""

import json

import pytest
from typer.testing import CliRunner

from scriptlib.cli import app, main
from scriptlib.config import ProcessFlags, Settings, get_config_file_path
from scriptlib.diagnostics import setup_logging

runner = CliRunner()


@pytest.fixture
def conf(tmp_path):
    path = tmp_path / "app.conf"
    path.write_text("port=80\n", encoding="utf-8")
    return path


def test_main_changed_exit_status(conf):
    with pytest.raises(SystemExit) as exc_info:
        main(["replace", "80", "8080", str(conf)])

    assert exc_info.value.code == 0
    assert conf.read_text(encoding="utf-8") == "port=8080\n"


def test_main_unchanged_exit_status(conf):
    with pytest.raises(SystemExit) as exc_info:
        main(["replace", "nothing", "x", str(conf)])
    assert exc_info.value.code == 1


def test_main_fatal_exit_status(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["line-at", "1", str(tmp_path / "missing")])

    assert exc_info.value.code == 255
    assert "[error]:" in capsys.readouterr().err


def test_main_malformed_config_is_fatal(conf, capsys):
    config_file = get_config_file_path()
    config_file.parent.mkdir(parents=True)
    config_file.write_text("{not json", encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["remove-line", "port", str(conf)])

    assert exc_info.value.code == 255
    err = capsys.readouterr().err
    assert err.startswith("[error]: ")
    assert str(config_file) in err
    assert "Traceback" not in err
    assert conf.read_text(encoding="utf-8") == "port=80\n"


def test_main_invalid_config_value_is_fatal(conf, capsys):
    config_file = get_config_file_path()
    config_file.parent.mkdir(parents=True)
    config_file.write_text(json.dumps({"edit": {"diff_context_lines": -1}}), encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        main(["remove-line", "port", str(conf)])

    assert exc_info.value.code == 255
    err = capsys.readouterr().err
    assert err.startswith("[error]: Invalid configuration: edit -> diff_context_lines:")
    assert conf.read_text(encoding="utf-8") == "port=80\n"


def test_main_flags_anywhere(conf, capsys):
    """Common flags are stripped wherever they appear."""
    with pytest.raises(SystemExit) as exc_info:
        main(["replace", "--dry-run", "80", "8080", str(conf)])

    assert exc_info.value.code == 0
    assert conf.read_text(encoding="utf-8") == "port=80\n"
    assert "[dry-run]:" in capsys.readouterr().err


def test_main_verbose_logs_arguments(conf, capsys):
    with pytest.raises(SystemExit):
        main(["-v", "replace", "80", "8080", str(conf)])

    err = capsys.readouterr().err
    assert f'replace_regex: "80", "8080", "{conf}"' in err
    assert "+port=8080" in err


def test_main_quiet_by_default(conf, capsys):
    with pytest.raises(SystemExit):
        main(["replace", "80", "8080", str(conf)])
    assert capsys.readouterr().err == ""


def test_main_help(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main(["replace", "-h"])

    assert exc_info.value.code == 0
    assert "SOURCE_PATTERN" in capsys.readouterr().out


def test_confirm_yes():
    result = runner.invoke(app, ["confirm", "Proceed?"], input="y\n")
    assert result.exit_code == 0


def test_confirm_no():
    result = runner.invoke(app, ["confirm", "Proceed?"], input="n\n")
    assert result.exit_code == 1


def test_confirm_leading_whitespace_declines():
    result = runner.invoke(app, ["confirm", "Proceed?"], input="  y\n")
    assert result.exit_code == 1


def test_show_args_masks_secrets():
    setup_logging(ProcessFlags(), settings=Settings())

    result = runner.invoke(app, ["show-args", "deploy", "--password", "hunter2", ""])

    assert result.exit_code == 0
    assert "hunter2" not in result.stdout
    assert result.stdout == '"deploy", "--password", "********", <empty>\n'


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.stdout.startswith("scriptlib ")
