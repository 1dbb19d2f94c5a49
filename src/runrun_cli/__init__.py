"""
runrun - pick and run package.json scripts interactively.

Usage:
    runrun
    runrun -a
    runrun -r
    runrun -c path/to/package.custom.json
"""

from __future__ import annotations

import os
from functools import partial
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from runrun_cli.cache.store import RerunCache
from runrun_cli.cli.ui import autocomplete_select
from runrun_cli.executor import NpmScriptExecutor
from runrun_cli.orchestrator import run_selected_script
from runrun_cli.settings import ENV_PREFIX, RunSettings
from runrun_cli.version import get_version

__version__ = get_version()

BUGS_URL = "https://github.com/runrun-cli/runrun/issues"

console = Console()

app = typer.Typer(
    name="runrun",
    help="Choose and run npm scripts from package.json",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def show_header() -> None:
    console.print(f"[bold bright_white]runrun v{__version__}[/bold bright_white]")
    console.print()


def report_error(err: BaseException) -> None:
    """Render an unrecoverable error with a pointer to the issue tracker."""
    message = str(err) or type(err).__name__
    console.print(f"[red]Error: {escape(message)}[/red]", highlight=False)
    console.print()
    console.print(
        "If you can't settle this, please open an issue at:\n"
        f"[cyan]{BUGS_URL}[/cyan]"
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"runrun v{__version__}")
        raise typer.Exit()


@app.command(
    epilog=(
        "Examples: runrun | runrun -a | runrun -r | "
        "runrun -c path/to/package.custom.json"
    )
)
def run(
    config: Optional[str] = typer.Option(
        None,
        "-c",
        "--config",
        envvar=f"{ENV_PREFIX}CONFIG",
        help="Path to custom package.json",
    ),
    show_all: bool = typer.Option(
        False,
        "-a",
        "--all",
        envvar=f"{ENV_PREFIX}ALL",
        help="Show all available scripts instead of just 20",
    ),
    rerun: bool = typer.Option(
        False,
        "-r",
        "--rerun",
        envvar=f"{ENV_PREFIX}RERUN",
        help="Rerun the last script run in this directory",
    ),
    cache_file: bool = typer.Option(
        False,
        "--cacheFile",
        envvar=f"{ENV_PREFIX}CACHEFILE",
        hidden=True,
        help="Print the rerun cache file location and exit",
    ),
    version: bool = typer.Option(
        False,
        "-v",
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Choose or type the npm script to run."""
    try:
        settings = RunSettings.capture(config=config, show_all=show_all, rerun=rerun)

        if cache_file:
            typer.echo(str(RerunCache.for_project(settings.cwd, settings.cache_home).path))
            raise typer.Exit(0)

        show_header()

        ask_user = partial(autocomplete_select, limit=settings.display_limit, console=console)
        exit_code = run_selected_script(
            settings,
            ask_user=ask_user,
            executor=NpmScriptExecutor(),
            console=console,
        )
    except typer.Exit:
        raise
    except Exception as e:
        report_error(e)
        raise typer.Exit(1)

    raise typer.Exit(exit_code)


def main():
    app()


def rerun_main():
    """Entry point for ``runrunrun``: ``runrun`` with --rerun preset."""
    os.environ[f"{ENV_PREFIX}RERUN"] = "1"
    main()


if __name__ == "__main__":
    main()
