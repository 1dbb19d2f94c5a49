"""Conjunctive substring filtering of script candidates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from runrun_cli.catalog import ScriptCatalog


@dataclass(frozen=True, slots=True)
class Candidate:
    """A display item offered by the interactive prompt."""

    title: str
    value: str


def build_candidates(catalog: ScriptCatalog) -> list[Candidate]:
    """Project catalog names into candidates, preserving catalog order."""
    return [Candidate(title=name, value=name) for name in catalog]


def filter_candidates(query: str, candidates: Sequence[Candidate]) -> list[Candidate]:
    """Keep candidates whose title contains every whitespace-separated token.

    Matching is case-sensitive and unranked; the result preserves the input
    order. An empty or whitespace-only query has no tokens and keeps
    everything.

    Examples:
        >>> items = [Candidate("build", "build"), Candidate("test", "test")]
        >>> [c.value for c in filter_candidates("t", items)]
        ['test']
        >>> filter_candidates("   ", items) == items
        True
    """
    tokens = query.split()
    return [item for item in candidates if _matches(item.title, tokens)]


def _matches(title: str, tokens: Iterable[str]) -> bool:
    return all(token in title for token in tokens)
