"""Immutable run settings captured once at startup.

The current working directory, CLI flags and environment overrides are read a
single time and passed to every component as a ``RunSettings`` value.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

ENV_PREFIX = "RUNRUN_CLI_"
HOME_ENV_VAR = f"{ENV_PREFIX}HOME"
APP_NAME = "runrun"
DEFAULT_CONFIG_NAME = "package.json"
DEFAULT_DISPLAY_LIMIT = 20


def get_cache_home(environ: Mapping[str, str] | None = None) -> Path:
    """Return the directory holding rerun cache files.

    Resolution order:
    1. RUNRUN_CLI_HOME environment variable
    2. The platform user config directory for ``runrun`` (via platformdirs)
    """
    env = os.environ if environ is None else environ
    if env_home := env.get(HOME_ENV_VAR):
        return Path(env_home).expanduser()

    from platformdirs import user_config_dir

    return Path(user_config_dir(APP_NAME))


@dataclass(frozen=True)
class RunSettings:
    """Everything a single invocation needs to know about its environment."""

    cwd: Path
    config_path: Path
    cache_home: Path
    show_all: bool = False
    rerun: bool = False

    @property
    def script_dir(self) -> Path:
        """Directory scripts run in: the one holding the config file."""
        return self.config_path.parent

    @property
    def display_limit(self) -> int | None:
        return None if self.show_all else DEFAULT_DISPLAY_LIMIT

    @classmethod
    def capture(
        cls,
        *,
        config: str | Path | None = None,
        show_all: bool = False,
        rerun: bool = False,
        cwd: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "RunSettings":
        """Build settings from CLI values, the process cwd and the environment."""
        working_dir = Path(os.path.abspath(cwd if cwd is not None else Path.cwd()))
        if config:
            config_path = Path(os.path.abspath(working_dir / Path(config).expanduser()))
        else:
            config_path = working_dir / DEFAULT_CONFIG_NAME

        return cls(
            cwd=working_dir,
            config_path=config_path,
            cache_home=get_cache_home(environ),
            show_all=show_all,
            rerun=rerun,
        )
