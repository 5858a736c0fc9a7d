"""Tests for CLI commands."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from calcpad.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Run every command away from any calcpad.toml in the checkout."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_eval_success(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "2 + 3 * 4"])
    assert result.exit_code == 0
    assert "= 14" in result.output


def test_eval_leading_minus(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "--", "-2^2"])
    assert result.exit_code == 0
    assert "= 4" in result.output


def test_eval_formats_ten_significant_digits(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "1/3"])
    assert "= 0.3333333333" in result.output


def test_eval_error(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["eval", "5/0"])
    assert result.exit_code == 1
    assert "Error: Division by zero" in result.output
    assert "5/0" in result.output


def test_eval_implicit_multiplication_flag(cli_runner: CliRunner):
    rejected = cli_runner.invoke(app, ["eval", "2pi"])
    assert rejected.exit_code == 1
    assert "Extra tokens" in rejected.output

    accepted = cli_runner.invoke(app, ["eval", "--implicit-mul", "2pi"])
    assert accepted.exit_code == 0
    assert "= 6.283185307" in accepted.output


def test_eval_reads_config(cli_runner: CliRunner, config_file):
    path = config_file("[calculator]\nimplicit_multiplication = true\nprecision = 3\n")
    result = cli_runner.invoke(app, ["eval", "--config", str(path), "2pi"])
    assert result.exit_code == 0
    assert "= 6.28" in result.output


def test_eval_reads_config_from_cwd(cli_runner: CliRunner, config_file):
    config_file("[calculator]\nimplicit_multiplication = true\n")
    result = cli_runner.invoke(app, ["eval", "2(3+4)"])
    assert result.exit_code == 0
    assert "= 14" in result.output


def test_flag_overrides_config(cli_runner: CliRunner, config_file):
    path = config_file("[calculator]\nimplicit_multiplication = true\n")
    result = cli_runner.invoke(app, ["eval", "--config", str(path), "--no-implicit-mul", "2pi"])
    assert result.exit_code == 1


def test_bad_config(cli_runner: CliRunner, config_file):
    path = config_file("[calculator]\nmax_depth = 0\n")
    result = cli_runner.invoke(app, ["eval", "--config", str(path), "1"])
    assert result.exit_code == 2
    assert "Invalid configuration" in result.output


def test_missing_config(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["eval", "--config", str(tmp_path / "missing.toml"), "1"])
    assert result.exit_code == 2
    assert "Config file not found" in result.output


def test_config_path_is_directory(cli_runner: CliRunner, tmp_path: Path):
    result = cli_runner.invoke(app, ["eval", "--config", str(tmp_path), "1"])
    assert result.exit_code == 2
    assert "Cannot read" in result.output


def test_version(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "calcpad version" in result.output


def test_repl_session(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["repl"], input="2+3\n\nsqrt(-1)\nquit\n")
    assert result.exit_code == 0
    assert "=== calcpad ===" in result.output
    assert "= 5" in result.output
    assert "Error: Sqrt of negative" in result.output
    assert "Goodbye!" in result.output


def test_repl_help(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["repl"], input="help\nexit\n")
    assert result.exit_code == 0
    assert "Calculator Help" in result.output
    assert "sqrt(x)  Square root" in result.output


def test_repl_history(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["repl"], input="history\n1+1\n1/0\nhistory\nquit\n")
    assert result.exit_code == 0
    assert "No history yet" in result.output
    assert "1+1 = 2" in result.output
    assert "1/0 Error: Division by zero" in result.output


def test_repl_end_of_input(cli_runner: CliRunner):
    result = cli_runner.invoke(app, ["repl"], input="2^8\n")
    assert result.exit_code == 0
    assert "= 256" in result.output
    assert "Goodbye!" not in result.output


def test_repl_rejects_overlong_line(cli_runner: CliRunner):
    expression = "+".join(["1"] * 700)
    result = cli_runner.invoke(app, ["repl"], input=f"{expression}\nhistory\nquit\n")
    assert result.exit_code == 0
    assert "Error: Expression too long (max 1024)" in result.output
    assert "Unexpected end of input" not in result.output
    assert "No history yet" in result.output


def test_repl_line_at_configured_limit(cli_runner: CliRunner, config_file):
    config_file("[calculator]\nmax_expression_length = 5\n")
    result = cli_runner.invoke(app, ["repl"], input="1+2+3\n1+2+34\nquit\n")
    assert result.exit_code == 0
    assert "= 6" in result.output
    assert "Error: Expression too long (max 5)" in result.output
    assert "= 40" not in result.output
