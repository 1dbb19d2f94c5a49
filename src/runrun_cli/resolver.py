"""Decide which script an invocation runs.

Precedence, first satisfied wins:

1. The catalog must be non-empty, otherwise ``CatalogError``.
2. With ``rerun``, a cached script that still exists in the catalog is
   selected without prompting. A stale or missing cache entry prints a notice
   and falls through.
3. The interactive prompt picks a script, or the user aborts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, Sequence

from rich.console import Console
from rich.markup import escape

from runrun_cli.cache.store import CacheRecord
from runrun_cli.catalog import CatalogError, ScriptCatalog
from runrun_cli.matching import Candidate, build_candidates, filter_candidates

logger = logging.getLogger(__name__)

LiveFilter = Callable[[str, Sequence[Candidate]], list[Candidate]]
AskUser = Callable[[Sequence[Candidate], LiveFilter], str | None]


class CacheReader(Protocol):
    def load(self) -> CacheRecord | None: ...


class SelectionSource(str, Enum):
    CACHE = "cache"
    PROMPT = "prompt"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Selection:
    """Outcome of resolution: a script name, or an abort."""

    script: str | None
    source: SelectionSource

    @property
    def aborted(self) -> bool:
        return self.source is SelectionSource.ABORTED


def resolve_selection(
    catalog: ScriptCatalog | None,
    cache: CacheReader,
    *,
    rerun: bool,
    ask_user: AskUser,
    console: Console,
) -> Selection:
    """Resolve the script to run for this invocation.

    Args:
        catalog: Scripts available in the project config.
        cache: Rerun cache for the current project.
        rerun: Whether the user asked to repeat the last script.
        ask_user: Interactive choice capability; returns None on abort.
        console: Where notices about the rerun cache are printed.

    Raises:
        CatalogError: If the catalog is missing or empty, or the prompt
            returns a name the catalog does not define.
    """
    if catalog is None or len(catalog) == 0:
        raise CatalogError("There are no npm scripts found in the target package.json")

    if rerun:
        cached = _cached_selection(catalog, cache, console)
        if cached is not None:
            return cached

    choice = ask_user(build_candidates(catalog), filter_candidates)
    if choice is None:
        return Selection(script=None, source=SelectionSource.ABORTED)
    if choice not in catalog:
        raise CatalogError(f'Script "{choice}" is not defined')
    return Selection(script=choice, source=SelectionSource.PROMPT)


def _cached_selection(
    catalog: ScriptCatalog, cache: CacheReader, console: Console
) -> Selection | None:
    record = cache.load()
    if record is None:
        logger.debug("Rerun requested but no cache entry exists")
        console.print("[cyan]No previous run found for this project, pick a script to run.[/cyan]")
        return None

    script = record.last_target_script
    if script not in catalog:
        logger.debug("Cached script %r is no longer in the catalog", script)
        console.print(
            f'[yellow]Warning: last run script "{escape(script)}" no longer exists, '
            "pick a script to run.[/yellow]"
        )
        return None

    console.print(f"[dim]Rerunning last script:[/dim] [cyan]{escape(script)}[/cyan]")
    return Selection(script=script, source=SelectionSource.CACHE)
