"""
Command-line interface for exjs.
Compiles source files or snippets to JavaScript and inspects node trees.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import Pretty

from exjs.compiler import compile as compile_source
from exjs.compiler import compile_file
from exjs.env import env
from exjs.errors import ParseError
from exjs.optimizer import optimize as optimize_tree
from exjs.parser import parse

cli = typer.Typer(
	name="exjs",
	help="exjs - compile a small Elixir subset to minified JavaScript",
	no_args_is_help=True,
)


def _setup_logging(console: Console, level: str | None) -> None:
	if level is not None:
		env.log_level = level
	logging.basicConfig(
		level=env.log_level,
		format="%(message)s",
		handlers=[RichHandler(console=console, show_path=False)],
		force=True,
	)


def _report_parse_error(console: Console, exc: ParseError) -> None:
	if exc.location is not None:
		console.print(f"❌ {exc.message} at {exc.location}", markup=False)
	else:
		console.print(f"❌ {exc.message}", markup=False)


@cli.command("compile")
def compile_cmd(
	source_file: Path = typer.Argument(..., help="Source file to compile"),
	output: Path | None = typer.Option(
		None, "--output", "-o", help="Write JavaScript here instead of stdout"
	),
	no_optimize: bool = typer.Option(
		False, "--no-optimize", help="Skip constant folding"
	),
	log_level: str | None = typer.Option(
		None, "--log-level", help="Logging level (default: $EXJS_LOG_LEVEL or WARNING)"
	),
):
	"""Compile a source file to JavaScript."""
	console = Console(stderr=True)
	_setup_logging(console, log_level)

	try:
		code = compile_file(source_file, optimize=False if no_optimize else None)
	except ParseError as exc:
		_report_parse_error(console, exc)
		raise typer.Exit(1) from None
	except OSError as exc:
		console.print(f"❌ Cannot read {source_file}: {exc.strerror}", markup=False)
		raise typer.Exit(1) from None

	if output is None:
		typer.echo(code)
		return
	output.write_text(code + "\n", encoding="utf-8")
	console.log(f"✅ Wrote {output}")


@cli.command("eval")
def eval_cmd(
	source: str = typer.Argument(..., help="Source text to compile"),
	no_optimize: bool = typer.Option(
		False, "--no-optimize", help="Skip constant folding"
	),
):
	"""Compile a snippet given on the command line."""
	console = Console(stderr=True)
	_setup_logging(console, None)
	try:
		code = compile_source(source, optimize=False if no_optimize else None)
	except ParseError as exc:
		_report_parse_error(console, exc)
		raise typer.Exit(1) from None
	typer.echo(code)


@cli.command("ast")
def ast_cmd(
	source: str = typer.Argument(..., help="Source text to parse"),
	no_optimize: bool = typer.Option(
		False, "--no-optimize", help="Show the tree before constant folding"
	),
):
	"""Print the node tree for a snippet."""
	console = Console()
	try:
		tree = parse(source)
	except ParseError as exc:
		_report_parse_error(Console(stderr=True), exc)
		raise typer.Exit(1) from None
	if not no_optimize and env.optimize:
		tree = optimize_tree(tree)
	console.print(Pretty(tree))


def main():
	"""Main CLI entry point."""
	try:
		cli()
	except Exception:
		console = Console()
		console.print_exception()
		raise typer.Exit(1) from None
