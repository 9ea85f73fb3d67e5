"""
Alex CLI - open interactive sessions from the command line.
"""

import builtins
import runpy
import sys
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.markup import escape

from alex import __version__
from alex.config.settings import Settings, load_settings
from alex.core import Context, Session
from alex.ui import console, create_table, print_error, print_info, print_warning

app = typer.Typer(
    name="alex",
    help="Alex - pause a Python program and inspect it interactively",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _load_settings(config_path: str) -> Settings:
    """Load settings, falling back to defaults when the file is missing."""
    try:
        return load_settings(config_path)
    except FileNotFoundError:
        print_warning(f"Config file not found: {config_path}, using default configuration")
        return Settings()
    except (ValueError, TypeError, yaml.YAMLError) as e:
        print_error(f"Error loading config: {escape(str(e))}")
        raise typer.Exit(1)


def _enable_debug(debug: bool) -> None:
    if debug:
        from alex.core.debug import enable_debug, get_log_file

        enable_debug()
        print_info(f"Debug mode enabled - logging to {get_log_file()}\n")


@app.command()
def repl(
    config_path: str = typer.Option(
        "config.yaml",
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable verbose debug logging",
    ),
) -> None:
    """Start a session in a fresh namespace."""
    _enable_debug(debug)
    settings = _load_settings(config_path)

    try:
        session = Session.configure(settings)
    except (ImportError, TypeError) as e:
        print_error(f"Cannot load helpers: {e}")
        raise typer.Exit(1)

    console.print(f"[bold cyan]Alex {__version__}[/bold cyan]")
    console.print("Type [bold]exit[/bold] to quit, [bold]cls[/bold] to clear the screen\n")

    namespace = {"__name__": "__main__", "__builtins__": builtins}
    context = Context(globals=namespace, locals=namespace)
    try:
        session.start(context)
    finally:
        session.close()


@app.command()
def run(
    script: Path = typer.Argument(..., help="Python script to run"),
    args: Optional[List[str]] = typer.Argument(None, help="Arguments passed to the script"),
    config_path: str = typer.Option(
        "config.yaml",
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable verbose debug logging",
    ),
) -> None:
    """Run a script; alex() calls inside it open sessions."""
    _enable_debug(debug)
    if not script.exists():
        print_error(f"Script not found: {script}")
        raise typer.Exit(1)

    settings = _load_settings(config_path)
    try:
        session = Session.configure(settings)
    except (ImportError, TypeError) as e:
        print_error(f"Cannot load helpers: {e}")
        raise typer.Exit(1)

    saved_argv = sys.argv
    sys.argv = [str(script), *(args or [])]
    try:
        runpy.run_path(str(script), run_name="__main__")
    finally:
        sys.argv = saved_argv
        session.close()


@app.command()
def config(
    config_path: str = typer.Option(
        "config.yaml",
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
) -> None:
    """Show the effective configuration."""
    try:
        settings = load_settings(config_path)
    except FileNotFoundError:
        print_error(f"Config file not found: {config_path}")
        raise typer.Exit(1)
    except Exception as e:
        print_error(f"Error loading config: {escape(str(e))}")
        raise typer.Exit(1)

    console.print("\n[bold cyan]Alex Configuration[/bold cyan]\n")

    table = create_table("Session", ["Setting", "Value"])
    repl_config = settings.repl
    table.add_row("Start key", repl_config.start_key)
    table.add_row("Prompt", escape(repr(repl_config.input_prompt)))
    table.add_row("Indent spaces", str(repl_config.indent_spaces))
    table.add_row("Indent first tokens", " ".join(repl_config.indent_first_tokens))
    table.add_row("Indent last tokens", " ".join(repl_config.indent_last_tokens))
    table.add_row("Indent suffixes", " ".join(repl_config.indent_suffixes) or "-")
    table.add_row("Completeness", repl_config.completeness)
    table.add_row("Discard sink", repl_config.discard_path or "os.devnull")
    table.add_row("Helpers module", settings.helpers.module or "-")
    console.print(table)

    console.print(f"\n[dim]Config file: {config_path}[/dim]\n")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
