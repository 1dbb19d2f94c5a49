"""Run a selected script through npm with inherited stdio."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Protocol

from runrun_cli.catalog import ScriptEntry
from runrun_cli.errors import RunrunError

logger = logging.getLogger(__name__)


class ScriptExecutionError(RunrunError):
    """Raised when a script cannot be started or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.returncode = returncode


class Executor(Protocol):
    def run(self, entry: ScriptEntry, *, cwd: Path) -> int: ...


class NpmScriptExecutor:
    """Delegate to ``npm run <script>`` in the project directory.

    The child shares the terminal: stdout, stderr and stdin are inherited, so
    output streams to the user as it is produced. On KeyboardInterrupt
    ``subprocess.run`` kills the child before re-raising.
    """

    def __init__(self, npm: str = "npm") -> None:
        self.npm = npm

    def build_command(self, entry: ScriptEntry) -> list[str]:
        executable = shutil.which(self.npm)
        if executable is None:
            raise ScriptExecutionError(f"Cannot find '{self.npm}' on PATH")
        return [executable, "run", entry.name]

    def run(self, entry: ScriptEntry, *, cwd: Path) -> int:
        cmd = self.build_command(entry)
        logger.debug("Running %s in %s (script command: %s)", cmd, cwd, entry.command)
        try:
            result = subprocess.run(cmd, cwd=cwd, check=False)
        except OSError as exc:
            raise ScriptExecutionError(f"Failed to start {' '.join(cmd)}: {exc}") from exc

        if result.returncode != 0:
            raise ScriptExecutionError(
                f"Command failed with exit code {result.returncode}: {self.npm} run {entry.name}",
                returncode=result.returncode,
            )
        return result.returncode
