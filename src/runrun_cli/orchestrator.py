"""Sequence a run: resolve, remember, execute, report."""

from __future__ import annotations

import logging
import time
from typing import Callable

from rich.console import Console
from rich.markup import escape

from runrun_cli.cache.store import CacheWriteError, RerunCache
from runrun_cli.catalog import load_catalog
from runrun_cli.executor import Executor
from runrun_cli.resolver import AskUser, resolve_selection
from runrun_cli.settings import RunSettings

logger = logging.getLogger(__name__)


def run_selected_script(
    settings: RunSettings,
    *,
    ask_user: AskUser,
    executor: Executor,
    console: Console,
    clock: Callable[[], float] = time.perf_counter,
) -> int:
    """Run the script chosen for this invocation and return an exit code.

    The rerun cache is written before the executor starts so that an
    interrupted script is still what ``--rerun`` replays. Failing to write the
    cache only produces a warning.

    Raises:
        CatalogError: If the config file has no usable scripts.
        ScriptExecutionError: If the script fails to start or exits non-zero.
    """
    catalog = load_catalog(settings.config_path)
    cache = RerunCache.for_project(settings.cwd, settings.cache_home)

    selection = resolve_selection(
        catalog,
        cache,
        rerun=settings.rerun,
        ask_user=ask_user,
        console=console,
    )
    if selection.aborted:
        console.print("Aborting...")
        return 0

    script = selection.script
    start = clock()

    try:
        cache.remember(script)
    except CacheWriteError as exc:
        logger.warning("Rerun cache not updated: %s", exc)
        console.print(f"[yellow]Warning: could not save rerun cache: {escape(str(exc))}[/yellow]")

    exit_code = executor.run(catalog.entry(script), cwd=settings.script_dir)

    elapsed_ms = (clock() - start) * 1000
    console.print(f"[green]Finished in: {elapsed_ms:.0f}ms[/green]")
    return exit_code
