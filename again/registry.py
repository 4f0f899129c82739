"""Alias registry: command and scope tables plus the rules that query them.

A registry is two mappings keyed by alias name:

- ``commands``: alias -> trimmed shell command line
- ``scopes``: alias -> directory the alias is restricted to

An alias missing from ``scopes`` is unscoped and visible from every working
directory. The registry itself never touches disk; ``again.lib.store`` loads
it, and saves it back when ``dirty`` is set.
"""

import logging
import os
from collections.abc import Callable, Iterator
from pathlib import Path, PurePath

from .models import UNSCOPED, Entry, RenameResult

logger = logging.getLogger(__name__)


def _normalize(command: str | None) -> str | None:
    if command is None:
        return None
    command = command.strip()
    return command or None


def _within(cwd: PurePath, scope: str) -> bool:
    if scope == UNSCOPED:
        return True
    scope_path = PurePath(scope)
    return cwd == scope_path or scope_path in cwd.parents


class Registry:
    def __init__(
        self,
        commands: dict[str, str] | None = None,
        scopes: dict[str, str] | None = None,
    ):
        self.commands: dict[str, str] = dict(commands or {})
        self.scopes: dict[str, str] = dict(scopes or {})
        self.dirty = False

    def __contains__(self, alias: str) -> bool:
        return alias in self.commands

    def __len__(self) -> int:
        return len(self.commands)

    def get(self, alias: str) -> str | None:
        return self.commands.get(alias)

    def scope_of(self, alias: str) -> str:
        return self.scopes.get(alias, UNSCOPED)

    def set(
        self,
        alias: str,
        command: str | None,
        local: bool = False,
        cwd: Path | None = None,
    ) -> str | None:
        """Save or delete an alias. Returns the command it replaced, if any.

        A command of None, or one that is blank after trimming, deletes the
        alias together with its scope. Otherwise the trimmed command is stored
        and the scope becomes ``cwd`` when ``local`` is set, unscoped if not.
        """
        if not alias:
            raise ValueError("Alias cannot be empty")

        command = _normalize(command)
        previous = self.commands.get(alias)

        if command is None:
            if previous is not None:
                del self.commands[alias]
                logger.debug("deleted %s", alias)
            pruned = self.scopes.pop(alias, None) is not None
            if pruned:
                logger.debug("pruned scope for %s", alias)
            self.dirty = self.dirty or previous is not None or pruned
            return previous

        self.commands[alias] = command
        self.dirty = True

        new_scope = str(cwd or Path.cwd()) if local else UNSCOPED
        if new_scope != self.scope_of(alias):
            if new_scope == UNSCOPED:
                del self.scopes[alias]
            else:
                self.scopes[alias] = new_scope
            logger.debug("scope for %s is now %r", alias, new_scope)

        return previous

    def delete(self, alias: str) -> str | None:
        return self.set(alias, None)

    def rename(self, source: str, destination: str) -> RenameResult:
        """Move a command to a new alias name.

        Nothing changes when ``source`` is missing or ``destination`` is taken.
        Scope does not follow the command: ``destination`` ends up unscoped.
        """
        if not source or not destination:
            raise ValueError("Alias cannot be empty")

        if source not in self.commands:
            return RenameResult(RenameResult.MISSING)
        if destination in self.commands:
            return RenameResult(RenameResult.EXISTS, self.commands[destination])

        command = self.commands.pop(source)
        self.commands[destination] = command
        self.scopes.pop(source, None)
        self.scopes.pop(destination, None)
        self.dirty = True
        logger.debug("renamed %s -> %s", source, destination)
        return RenameResult(RenameResult.RENAMED, command)

    def edit(
        self,
        alias: str,
        local: bool = False,
        editor: Callable[[str, str], str] | None = None,
        cwd: Path | None = None,
    ) -> str | None:
        """Open the alias in an editor and save whatever comes back.

        Editor failures propagate before anything is changed.
        """
        if editor is None:
            from .lib.editor import edit_text as editor

        edited = editor(self.commands.get(alias, ""), alias)
        return self.set(alias, edited, local=local, cwd=cwd)

    def list(self, show_all: bool = False, cwd: Path | None = None) -> Iterator[Entry]:
        """Yield entries ordered by scope, alias, command.

        Unless ``show_all`` is set, scoped entries are only yielded when
        ``cwd`` is the scope directory or lies beneath it.
        """
        here = PurePath(cwd or os.getcwd())
        entries = sorted(
            (Entry(self.scope_of(alias), alias, command) for alias, command in self.commands.items()),
            key=Entry.sort_key,
        )
        for entry in entries:
            if show_all or _within(here, entry.scope):
                yield entry

    def resolve(self, alias: str) -> str | None:
        return self.commands.get(alias)

    def run(self, alias: str, executor: Callable[[str], None] | None = None) -> bool:
        """Hand the alias command to the shell. Returns False if it does not exist.

        With the default executor a successful launch replaces the process and
        this never returns.
        """
        command = self.resolve(alias)
        if command is None:
            return False
        if executor is None:
            from .lib.shell import exec_command as executor

        logger.debug("running %s: %s", alias, command)
        executor(command)
        return True
