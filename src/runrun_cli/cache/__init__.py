"""Per-project rerun cache."""

from .identity import derive_project_identity
from .store import (
    CacheRecord,
    CacheWriteError,
    RerunCache,
    read_record,
    resolve_cache_path,
    write_record,
)

__all__ = [
    "CacheRecord",
    "CacheWriteError",
    "RerunCache",
    "derive_project_identity",
    "read_record",
    "resolve_cache_path",
    "write_record",
]
