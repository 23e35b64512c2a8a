"""Command-line interface for shextract."""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from shextract import __version__
from shextract.config import ConfigError, get_config_path, get_default_config_content, load_config
from shextract.flatten import extract_script
from shextract.parser import ParseError, dump_tree, parse_script

app = typer.Typer(
    name="shextract",
    help="List every command a shell script runs, unwrapping `sh -c` / `bash -c` strings.",
    add_completion=False,
)
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        typer.echo(f"shextract version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def read_script(script: str) -> str:
    """Read the script from a file, or from stdin when script is '-'."""
    if script == "-":
        return sys.stdin.read()
    return Path(script).read_text(encoding="utf-8")


def init_config() -> None:
    config_path = get_config_path()
    if config_path.exists():
        err_console.print(f"[yellow]Config file already exists at {config_path}[/yellow]")
        raise typer.Exit(1)

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(get_default_config_content())
    err_console.print(f"[green]Created config file at {config_path}[/green]")


@app.command()
def main(
    script: str = typer.Argument(
        "-",
        help="Script file to read, or '-' for stdin",
    ),
    clean: bool = typer.Option(
        False,
        "--clean", "-c",
        help="Clean the found commands (coalesce whitespace, normalize quoting)",
    ),
    max_depth: int = typer.Option(
        None,
        "--max-depth",
        min=0,
        help="Nested `sh -c` levels to unwrap (0 = unlimited)",
    ),
    tree: bool = typer.Option(
        False,
        "--tree",
        help="Print the syntax tree instead of the commands",
    ),
    config_file: Path = typer.Option(
        None,
        "--config",
        help="Config file (default: ~/.config/shextract/config.toml)",
    ),
    init: bool = typer.Option(
        False,
        "--init-config",
        help="Create a default config file and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-V",
        help="Log debug messages to stderr",
    ),
    version: bool = typer.Option(
        None, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """Print the commands found in SCRIPT, one per line."""
    configure_logging(verbose)

    if init:
        init_config()
        return

    try:
        config = load_config(config_file)
    except ConfigError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        code = read_script(script)
    except (OSError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Cannot read {escape(script)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if max_depth is None:
        max_depth = config.extract.max_depth

    try:
        if tree:
            source = code.encode("utf-8")
            for line in dump_tree(parse_script(code).root_node, source):
                typer.echo(line)
            return

        commands = extract_script(
            code,
            clean=clean or config.extract.clean,
            max_depth=max_depth,
        )
    except ParseError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    for command in commands:
        typer.echo(command)


if __name__ == "__main__":
    app()
