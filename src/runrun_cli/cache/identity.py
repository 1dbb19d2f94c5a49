"""Stable per-project identity derived from the project directory path."""

from __future__ import annotations

import base64
import hashlib
from pathlib import Path


def derive_project_identity(working_directory: str | Path) -> str:
    """Derive a filename-safe identity for a project directory.

    The identity is the URL-safe base64 encoding of the SHA-1 digest of the
    path string, with padding stripped. It is a pure function of the literal
    path: the directory does not need to exist.

    Args:
        working_directory: Absolute path of the project directory

    Returns:
        27-character string over ``[A-Za-z0-9_-]``

    Examples:
        >>> derive_project_identity("/work/app") == derive_project_identity("/work/app")
        True
        >>> len(derive_project_identity("/work/app"))
        27
    """
    digest = hashlib.sha1(str(working_directory).encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
