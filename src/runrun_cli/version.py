"""Installed package version lookup."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "runrun-cli"
FALLBACK_VERSION = "0.0.0-dev"


def get_version() -> str:
    """Return the installed version, or a dev marker for source checkouts."""
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION
