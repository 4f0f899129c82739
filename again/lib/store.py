"""YAML persistence for the alias registry: one file per table."""

import contextlib
import logging
import os
from pathlib import Path

import yaml

from again.errors import StorageError
from again.lib import paths
from again.registry import Registry

logger = logging.getLogger(__name__)

COMMANDS_TABLE = "aliases"
SCOPES_TABLE = "scopes"


def _table_path(table: str, root: Path | None) -> Path:
    if table == COMMANDS_TABLE:
        return paths.aliases_file(root)
    return paths.scopes_file(root)


def _read_table(table: str, root: Path | None) -> dict[str, str]:
    path = _table_path(table, root)
    if not path.exists():
        logger.debug("%s: no file at %s, starting empty", table, path)
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise StorageError(table, path, f"cannot read: {e}") from e
    except yaml.YAMLError as e:
        raise StorageError(table, path, f"invalid YAML: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise StorageError(table, path, f"expected a mapping, got {type(data).__name__}")
    for key, value in data.items():
        if not isinstance(key, str) or not isinstance(value, str):
            raise StorageError(table, path, f"entry {key!r} is not a string mapping")
    return data


def _staging_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".tmp")


def _stage_table(table: str, data: dict[str, str], root: Path | None) -> Path:
    """Dump a table next to its file. The live file is left untouched."""
    path = _table_path(table, root)
    tmp_path = _staging_path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True, allow_unicode=True)
    except (OSError, yaml.YAMLError) as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink()
        reason = "cannot write" if isinstance(e, OSError) else "cannot serialize"
        raise StorageError(table, path, f"{reason}: {e}") from e
    return tmp_path


def _commit_table(table: str, tmp_path: Path, root: Path | None) -> None:
    path = _table_path(table, root)
    try:
        os.replace(tmp_path, path)
    except OSError as e:
        raise StorageError(table, path, f"cannot replace: {e}") from e


def load(root: Path | None = None) -> Registry:
    """Load both tables. Missing files yield an empty registry."""
    commands = _read_table(COMMANDS_TABLE, root)
    scopes = _read_table(SCOPES_TABLE, root)
    orphans = scopes.keys() - commands.keys()
    if orphans:
        logger.debug("scopes without a command: %s", ", ".join(sorted(orphans)))
    return Registry(commands, scopes)


def save(registry: Registry, root: Path | None = None) -> None:
    """Write both tables and clear the registry's dirty flag.

    Both tables are staged before either file is replaced, so a failed dump
    leaves the previous pair intact.
    """
    staged = []
    try:
        for table, data in ((COMMANDS_TABLE, registry.commands), (SCOPES_TABLE, registry.scopes)):
            staged.append((table, _stage_table(table, data, root)))
    except StorageError:
        for _, tmp_path in staged:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
        raise
    for table, tmp_path in staged:
        _commit_table(table, tmp_path, root)
    registry.dirty = False
    logger.debug("saved %d aliases", len(registry))


@contextlib.contextmanager
def session(root: Path | None = None):
    """Load the registry, yield it, and save it back if it was mutated.

    Nothing is written when the body raises.
    """
    registry = load(root)
    yield registry
    if registry.dirty:
        save(registry, root)
