import os
from pathlib import Path

import typer

APP_NAME = "again"


def config_dir() -> Path:
    """Returns the per-user config directory, $AGAIN_HOME or the platform app dir."""
    override = os.environ.get("AGAIN_HOME")
    if override:
        return Path(override).expanduser()
    return Path(typer.get_app_dir(APP_NAME))


def aliases_file(root: Path | None = None) -> Path:
    return (root or config_dir()) / "aliases.yaml"


def scopes_file(root: Path | None = None) -> Path:
    return (root or config_dir()) / "scopes.yaml"


def config_file(root: Path | None = None) -> Path:
    return (root or config_dir()) / "config.yaml"
