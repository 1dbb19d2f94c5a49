"""Base error type shared by the runrun modules."""

from __future__ import annotations


class RunrunError(RuntimeError):
    """Base class for errors the CLI reports to the user."""
