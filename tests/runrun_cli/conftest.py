"""Shared fixtures for runrun_cli tests."""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Sequence

import pytest
from rich.console import Console

from runrun_cli.catalog import ScriptEntry
from runrun_cli.matching import Candidate
from runrun_cli.settings import HOME_ENV_VAR, RunSettings


class FakePrompt:
    """AskUser stand-in that types a query and confirms the first match."""

    def __init__(self, query: str = "", abort: bool = False) -> None:
        self.query = query
        self.abort = abort
        self.calls: list[list[Candidate]] = []
        self.shown: list[Candidate] = []

    def __call__(self, candidates: Sequence[Candidate], live_filter) -> str | None:
        self.calls.append(list(candidates))
        self.shown = live_filter(self.query, candidates)
        if self.abort or not self.shown:
            return None
        return self.shown[0].value


class FakeExecutor:
    """Records executed scripts and optionally calls a hook before returning."""

    def __init__(self, exit_code: int = 0, on_run=None) -> None:
        self.exit_code = exit_code
        self.on_run = on_run
        self.runs: list[tuple[ScriptEntry, Path]] = []

    def run(self, entry: ScriptEntry, *, cwd: Path) -> int:
        self.runs.append((entry, cwd))
        if self.on_run is not None:
            self.on_run(entry)
        return self.exit_code


def write_package_json(directory: Path, scripts: dict | None) -> Path:
    payload: dict = {"name": "demo", "version": "1.0.0"}
    if scripts is not None:
        payload["scripts"] = scripts
    path = directory / "package.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def cache_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Cache directory under tmp_path (avoids touching the real config dir)."""
    home = tmp_path / "cache-home"
    monkeypatch.setenv(HOME_ENV_VAR, str(home))
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    project = tmp_path / "my-app"
    project.mkdir()
    write_package_json(project, {"build": "webpack", "test": "jest"})
    return project


@pytest.fixture
def settings(project_dir: Path, cache_home: Path) -> RunSettings:
    return RunSettings.capture(cwd=project_dir)


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    return Console(file=console_output, width=200, color_system=None)


@pytest.fixture
def fake_prompt() -> type[FakePrompt]:
    return FakePrompt


@pytest.fixture
def fake_executor() -> type[FakeExecutor]:
    return FakeExecutor


@pytest.fixture
def scripts_writer():
    return write_package_json
