"""
calcpad CLI - entry point.

Commands:
- eval: evaluate a single expression
- repl: line-mode interactive calculator
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console

from calcpad._version import get_version
from calcpad.core.config import CalcpadConfig, find_config, load_config
from calcpad.core.errors import ConfigError, ErrorContext
from calcpad.core.expression_lang import EvalResult, format_value
from calcpad.core.session import Session

app = typer.Typer(
    help="calcpad - arithmetic expression evaluator",
    no_args_is_help=True,
)

BANNER = "=== calcpad ===\nType 'help' for instructions or 'quit' to exit\n"

HELP_TEXT = """
=== Calculator Help ===
Basic Operations:
  +  Addition
  -  Subtraction
  *  Multiplication
  /  Division
  %  Modulo
  ^  Power

Functions:
  sin(x)   Sine
  cos(x)   Cosine
  tan(x)   Tangent
  sqrt(x)  Square root
  log(x)   Natural logarithm
  exp(x)   Exponential (e^x)
  abs(x)   Absolute value

Constants:
  pi       π (3.14159...)
  e        Euler's number (2.71828...)

Commands:
  help     Show this help
  history  Show previous results
  clear    Clear screen
  quit     Exit calculator
  exit     Exit calculator

Examples:
  2 + 3 * 4
  sin(pi/2)
  sqrt(16) + log(e)
  2^8
  (5 + 3) * 2
=======================
"""


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"calcpad version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """calcpad CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config(config_path: Path | None) -> CalcpadConfig:
    """Load the explicit config file, or calcpad.toml from the working directory."""
    if config_path is None:
        config_path = find_config(Path.cwd())
    elif not config_path.exists():
        typer.echo(f"Error: Config file not found: {config_path}", err=True)
        raise typer.Exit(code=2)
    try:
        return load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)


def _describe(result: EvalResult, precision: int) -> str:
    if result.error is not None:
        return f"Error: {result.error.message}"
    assert result.value is not None
    return f"= {format_value(result.value, precision)}"


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(
        ..., help="Expression to evaluate (use -- before a leading '-')"
    ),
    implicit_mul: bool | None = typer.Option(
        None,
        "--implicit-mul/--no-implicit-mul",
        help="Treat adjacent operands such as 2pi as products",
    ),
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to calcpad.toml"),
) -> None:
    """Evaluate a single expression."""
    config = _load_config(config_path)
    if implicit_mul is not None:
        config = config.model_copy(update={"implicit_multiplication": implicit_mul})

    result = Session(config=config).evaluate(expression)
    if result.error is not None:
        typer.echo(_describe(result, config.precision), err=True)
        context = ErrorContext(expression=expression, position=result.error.position)
        typer.echo(context.format(), err=True)
        raise typer.Exit(code=1)

    typer.echo(_describe(result, config.precision))


@app.command("repl")
def repl_command(
    config_path: Path | None = typer.Option(None, "--config", "-c", help="Path to calcpad.toml"),
) -> None:
    """Start an interactive calculator."""
    config = _load_config(config_path)
    session = Session(config=config)
    console = Console(highlight=False)

    console.print(BANNER, markup=False)
    while True:
        try:
            line = console.input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue

        if line in ("quit", "exit"):
            console.print("Goodbye!")
            return

        if line == "help":
            console.print(HELP_TEXT, markup=False)
            continue

        if line == "clear":
            console.clear()
            console.print(BANNER, markup=False)
            continue

        if line == "history":
            if len(session.history) == 0:
                console.print("No history yet")
            for entry in session.history:
                style = "red" if entry.result.error is not None else "green"
                text = f"{entry.expression} {_describe(entry.result, config.precision)}"
                console.print(text, style=style, markup=False)
            continue

        if len(line) > config.max_expression_length:
            message = f"Error: Expression too long (max {config.max_expression_length})"
            console.print(message, style="red", markup=False)
            continue

        session.buffer.replace(line)
        result = session.submit()
        if result is None:
            continue
        style = "red" if result.error is not None else "green"
        console.print(_describe(result, config.precision), style=style, markup=False)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
