"""CLI helpers exposed for other modules."""

from .ui import AutocompleteState, autocomplete_select

__all__ = ["AutocompleteState", "autocomplete_select"]
