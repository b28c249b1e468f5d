"""Tests for the command-line driver."""

import json

import pytest

from tap_validator import cli
from tap_validator.config import CONFIG_PATH_ENV_VAR


@pytest.fixture
def configured(tmp_path, taps_root, monkeypatch):
    library = tmp_path / "Library"
    library.mkdir()
    (library / "ok.py").write_text("x = 1\n")
    config = tmp_path / "settings.yml"
    config.write_text(
        f"library_path: {library}\ntaps_root: {taps_root}\noracle: python\npattern: '**/*.py'\n"
    )
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(config))
    return library


def test_passing_run_exits_zero(configured, tap_factory, capsys):
    tap_factory("homebrew/core", {"wget": "x = 1\n"}, {"wget2": "../Formula/wget.rb"})

    status = cli.main(["--syntax", "--aliases"])

    assert status == cli.EXIT_OK
    assert capsys.readouterr().err == ""


def test_failures_are_printed_and_exit_one(configured, tap_factory, capsys):
    (configured / "bad.py").write_text("def f(:\n")
    tap_factory("homebrew/core", {"wget": "x = 1\n"}, {"gone": "../Formula/gone.rb"})

    status = cli.main(["--syntax", "--aliases", "core"])

    err = capsys.readouterr().err
    assert status == cli.EXIT_FAILED
    assert "bad.py:1:" in err
    assert "alias 'gone'" in err
    assert err.count("Error: ") == 2


def test_unknown_tap_is_fatal(configured, capsys):
    status = cli.main(["nobody/nothing"])

    assert status == cli.EXIT_FATAL
    assert "nobody/nothing" in capsys.readouterr().err


def test_invalid_config_is_fatal(tmp_path, monkeypatch, capsys):
    config = tmp_path / "bad.yml"
    config.write_text("jobs: -1\n")
    monkeypatch.setenv(CONFIG_PATH_ENV_VAR, str(config))

    assert cli.main([]) == cli.EXIT_FATAL
    assert "Invalid configuration" in capsys.readouterr().err


def test_json_report(configured, tap_factory, capsys):
    tap_factory("foo/bar")

    status = cli.main(["--json", "foo/bar"])

    report = json.loads(capsys.readouterr().out)
    assert status == cli.EXIT_FAILED
    assert report["anyFailed"] is True
    assert report["totals"]["issues"] == {"empty-tap": 1}


def test_summary_output(configured, tap_factory, capsys):
    tap_factory("homebrew/core", {"wget": "x = 1\n"})

    status = cli.main(["--summary"])

    assert status == cli.EXIT_OK
    assert capsys.readouterr().out.startswith("# tap-validator Summary")


def test_command_line_overrides(configured, tmp_path, tap_factory):
    other = tmp_path / "Other"
    other.mkdir()
    (other / "bad.py").write_text("def f(:\n")
    tap_factory("homebrew/core", {"wget": "x = 1\n"})

    assert cli.main(["--syntax"]) == cli.EXIT_OK
    assert cli.main(["--syntax", "--library-path", str(other), "--jobs", "2"]) == cli.EXIT_FAILED


def test_jobs_must_be_positive():
    with pytest.raises(SystemExit):
        cli.parse_args(["--jobs", "0"])
