"""Rerun cache: the last script chosen for each project.

One small JSON file per project lives under the cache home:

    <cache_home>/<dir base name>.<project identity>.json

Reads are fail-soft (anything unusable is a miss). Writes go through a temp
file in the same directory followed by ``os.replace`` so an interrupted write
never leaves a half-written record behind. There is no cross-process locking;
concurrent writers for the same project race and the last write wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from runrun_cli.cache.identity import derive_project_identity
from runrun_cli.errors import RunrunError

logger = logging.getLogger(__name__)

ROOT_BASE_NAME = "root"


class CacheWriteError(RunrunError):
    """Raised when a cache record cannot be persisted."""


@dataclass(frozen=True)
class CacheRecord:
    """Last script selected for a project directory."""

    cwd: str
    last_target_script: str

    def to_dict(self) -> dict[str, str]:
        return {"cwd": self.cwd, "lastTargetScript": self.last_target_script}

    @classmethod
    def from_dict(cls, data: Any) -> CacheRecord | None:
        """Deserialize a record, returning None if the payload is unusable."""
        if not isinstance(data, dict):
            return None
        cwd = data.get("cwd")
        script = data.get("lastTargetScript")
        if not isinstance(cwd, str) or not isinstance(script, str) or not script:
            return None
        return cls(cwd=cwd, last_target_script=script)


def resolve_cache_path(identity: str, base_name: str, cache_home: Path) -> Path:
    """Return the cache file location for a project. Pure, no I/O."""
    prefix = base_name or ROOT_BASE_NAME
    return cache_home / f"{prefix}.{identity}.json"


def read_record(path: Path) -> CacheRecord | None:
    """Read a cache record, treating every failure as a miss."""
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("No rerun cache at %s", path)
        return None
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Unreadable rerun cache %s: %s", path, exc)
        return None

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.debug("Malformed rerun cache %s: %s", path, exc)
        return None

    record = CacheRecord.from_dict(payload)
    if record is None:
        logger.debug("Ignoring rerun cache with unexpected shape: %s", path)
    return record


def write_record(path: Path, record: CacheRecord) -> None:
    """Atomically replace the cache record at ``path``.

    Raises:
        CacheWriteError: If the directory or file cannot be written.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
    except OSError as exc:
        raise CacheWriteError(f"Cannot create cache directory {path.parent}: {exc}") from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(record.to_dict(), f, indent=2)
        os.replace(tmp_path, path)
    except OSError as exc:
        _discard(tmp_path)
        raise CacheWriteError(f"Cannot write cache file {path}: {exc}") from exc
    except BaseException:
        _discard(tmp_path)
        raise


def _discard(tmp_path: str) -> None:
    try:
        os.unlink(tmp_path)
    except OSError:
        pass


class RerunCache:
    """Rerun cache bound to a single project directory."""

    def __init__(self, project_dir: Path, path: Path) -> None:
        self.project_dir = project_dir
        self.path = path

    @classmethod
    def for_project(cls, project_dir: Path, cache_home: Path) -> RerunCache:
        identity = derive_project_identity(project_dir)
        path = resolve_cache_path(identity, project_dir.name, cache_home)
        logger.debug("Rerun cache for %s resolved to %s", project_dir, path)
        return cls(project_dir, path)

    def load(self) -> CacheRecord | None:
        return read_record(self.path)

    def remember(self, script: str) -> CacheRecord:
        """Record ``script`` as the last selection for this project."""
        record = CacheRecord(cwd=str(self.project_dir), last_target_script=script)
        write_record(self.path, record)
        return record
