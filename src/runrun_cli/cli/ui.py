"""Interactive autocomplete prompt for picking a script."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import readchar
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from runrun_cli.matching import Candidate

Suggest = Callable[[str, Sequence[Candidate]], List[Candidate]]

_BACKSPACE_KEYS = {readchar.key.BACKSPACE, "\x7f", "\x08"}


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER or key == "\n":
        return "enter"

    if key in _BACKSPACE_KEYS:
        return "backspace"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


class AutocompleteState:
    """Query text, live matches and cursor of an autocomplete prompt."""

    def __init__(
        self,
        candidates: Sequence[Candidate],
        suggest: Suggest,
        limit: Optional[int] = None,
    ):
        self.candidates = list(candidates)
        self.suggest = suggest
        self.limit = limit
        self.query = ""
        self.cursor = 0
        self.matches: List[Candidate] = list(self.candidates)

    def type(self, text: str) -> None:
        self.query += text
        self._refilter()

    def backspace(self) -> None:
        if self.query:
            self.query = self.query[:-1]
            self._refilter()

    def move(self, delta: int) -> None:
        if self.matches:
            self.cursor = (self.cursor + delta) % len(self.matches)

    def current(self) -> Optional[Candidate]:
        if not self.matches:
            return None
        return self.matches[self.cursor]

    def window(self) -> tuple[int, List[Candidate]]:
        """Return the offset and slice of matches to display."""
        if self.limit is None or len(self.matches) <= self.limit:
            return 0, self.matches
        start = 0 if self.cursor < self.limit else self.cursor - self.limit + 1
        return start, self.matches[start : start + self.limit]

    def _refilter(self) -> None:
        self.matches = self.suggest(self.query, self.candidates)
        self.cursor = 0


def _resolve_console(console: Optional[Console]) -> Console:
    return console or Console()


def autocomplete_select(
    candidates: Sequence[Candidate],
    suggest: Suggest,
    *,
    limit: Optional[int] = None,
    message: str = "Choose or type the npm script to run:",
    console: Console | None = None,
) -> Optional[str]:
    """
    Pick a candidate by typing to filter and using arrow keys to move.

    Returns the chosen candidate's value, or None when the user cancels with
    Ctrl-C. Esc also cancels, but on POSIX terminals readchar only reports a
    lone Esc once the next key arrives.
    """
    console = _resolve_console(console)
    state = AutocompleteState(candidates, suggest, limit)

    def create_prompt_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        table.add_row("?", f"[bold]{escape(state.query)}[/bold][blink]_[/blink]")
        table.add_row("", "")

        offset, visible = state.window()
        if not visible:
            table.add_row("", "[dim]No matching scripts[/dim]")
        for i, item in enumerate(visible, start=offset):
            if i == state.cursor:
                table.add_row("▶", f"[cyan]{escape(item.title)}[/cyan]")
            else:
                table.add_row(" ", escape(item.title))

        hidden = len(state.matches) - len(visible)
        if hidden > 0:
            table.add_row("", f"[dim]... {hidden} more (use --all to list every script)[/dim]")

        table.add_row("", "")
        table.add_row("", "[dim]Type to filter, ↑/↓ to navigate, Enter to run, Ctrl-C to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{escape(message)}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_prompt_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                return None

            if key == "up":
                state.move(-1)
            elif key == "down":
                state.move(1)
            elif key == "backspace":
                state.backspace()
            elif key == "enter":
                chosen = state.current()
                if chosen is not None:
                    return chosen.value
            elif key == "escape":
                return None
            elif len(key) == 1 and key.isprintable():
                state.type(key)

            live.update(create_prompt_panel(), refresh=True)


__all__ = [
    "AutocompleteState",
    "autocomplete_select",
    "get_key",
]
