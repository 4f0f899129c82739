"""Alias registry data types."""

from dataclasses import dataclass
from pathlib import PurePath

UNSCOPED = ""


@dataclass(frozen=True)
class Entry:
    """One listed alias: its scope directory, name and command line."""

    scope: str
    alias: str
    command: str

    @property
    def scoped(self) -> bool:
        return self.scope != UNSCOPED

    def sort_key(self) -> tuple:
        return (PurePath(self.scope).parts, self.alias, self.command)

    def __str__(self) -> str:
        if self.scoped:
            return f"[{self.scope}] {self.alias}: {self.command}"
        return f"{self.alias}: {self.command}"


@dataclass(frozen=True)
class RenameResult:
    """Outcome of a rename. ``command`` is the moved command, or the colliding one."""

    status: str
    command: str | None = None

    RENAMED = "renamed"
    MISSING = "missing"
    EXISTS = "exists"

    @property
    def renamed(self) -> bool:
        return self.status == self.RENAMED
