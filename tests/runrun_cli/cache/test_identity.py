"""Tests for project identity derivation."""

from __future__ import annotations

import base64
import hashlib
import re
from pathlib import Path

from runrun_cli.cache.identity import derive_project_identity


class TestDeriveProjectIdentity:
    def test_deterministic(self):
        """Same path always yields the same identity."""
        assert derive_project_identity("/work/app") == derive_project_identity("/work/app")

    def test_distinct_paths_distinct_identities(self):
        paths = ["/work/app", "/work/app2", "/work/App", "/other/app", "/work/app/"]
        identities = {derive_project_identity(p) for p in paths}
        assert len(identities) == len(paths)

    def test_accepts_path_objects(self):
        assert derive_project_identity(Path("/work/app")) == derive_project_identity("/work/app")

    def test_filename_safe_and_fixed_length(self):
        for path in ["/", "/a", "/very/long/" + "x" * 500, "C:\\Users\\dev\\proj"]:
            identity = derive_project_identity(path)
            assert len(identity) == 27
            assert re.fullmatch(r"[A-Za-z0-9_-]+", identity)

    def test_is_base64_sha1_of_path(self):
        digest = hashlib.sha1(b"/work/app").digest()
        expected = base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
        assert derive_project_identity("/work/app") == expected

    def test_directory_need_not_exist(self, tmp_path: Path):
        missing = tmp_path / "does-not-exist"
        assert derive_project_identity(missing)
