"""Script catalog loaded from the ``scripts`` table of a package.json."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping

from runrun_cli.errors import RunrunError


class CatalogError(RunrunError):
    """Raised when no usable script catalog can be found."""


@dataclass(frozen=True, slots=True)
class ScriptEntry:
    """A single runnable script."""

    name: str
    command: str


class ScriptCatalog:
    """Ordered, read-only mapping of script name to command."""

    def __init__(self, scripts: Mapping[str, str]) -> None:
        self._scripts = dict(scripts)

    def __contains__(self, name: object) -> bool:
        return name in self._scripts

    def __iter__(self) -> Iterator[str]:
        return iter(self._scripts)

    def __len__(self) -> int:
        return len(self._scripts)

    def __repr__(self) -> str:
        return f"ScriptCatalog({self._scripts!r})"

    def names(self) -> list[str]:
        return list(self._scripts)

    def command_for(self, name: str) -> str:
        try:
            return self._scripts[name]
        except KeyError:
            raise CatalogError(f'Script "{name}" is not defined') from None

    def entry(self, name: str) -> ScriptEntry:
        return ScriptEntry(name=name, command=self.command_for(name))

    @classmethod
    def from_dict(cls, data: object) -> "ScriptCatalog":
        """Build a catalog from a parsed ``scripts`` object.

        Raises:
            CatalogError: If ``data`` is not an object of string commands.
        """
        if not isinstance(data, dict):
            raise CatalogError('The "scripts" field must be an object')

        scripts: dict[str, str] = {}
        for name, command in data.items():
            if not isinstance(command, str):
                raise CatalogError(f'Script "{name}" must map to a command string')
            scripts[str(name)] = command
        return cls(scripts)


def load_catalog(config_path: Path) -> ScriptCatalog:
    """Read the script catalog from ``config_path``.

    Args:
        config_path: Absolute path to a package.json style file.

    Returns:
        The non-empty catalog, in declaration order.

    Raises:
        CatalogError: If the file is missing, is not valid JSON, or declares
            no scripts.
    """
    try:
        raw = config_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise CatalogError(f"Config file not found: {config_path}") from None
    except OSError as exc:
        raise CatalogError(f"Cannot read config file {config_path}: {exc}") from exc

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in {config_path}: {exc}") from exc

    scripts = payload.get("scripts") if isinstance(payload, dict) else None
    if scripts is None:
        raise CatalogError(f"There are no npm scripts found in {config_path}")

    catalog = ScriptCatalog.from_dict(scripts)
    if not catalog:
        raise CatalogError(f"There are no npm scripts found in {config_path}")
    return catalog
