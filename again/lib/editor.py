"""Round-trip alias text through the user's $EDITOR."""

import contextlib
import logging
import os
import shlex
import subprocess
import tempfile
from pathlib import Path

from again.errors import ConfigError, EditorError

logger = logging.getLogger(__name__)


def editor_command() -> list[str]:
    editor = os.environ.get("EDITOR", "").strip()
    if not editor:
        raise ConfigError("EDITOR is not set. Export EDITOR (e.g. `export EDITOR=vim`) to use edit.")
    return shlex.split(editor)


def edit_text(text: str, alias: str = "") -> str:
    """Write ``text`` to a scratch file, open it in $EDITOR, return the result."""
    cmd = editor_command()

    prefix = f"again-{alias}-" if alias else "again-"
    with tempfile.NamedTemporaryFile(
        mode="w", prefix=prefix, suffix=".sh", delete=False, encoding="utf-8"
    ) as f:
        f.write(text)
        scratch = Path(f.name)

    try:
        logger.debug("editing %s with %s", scratch, cmd)
        try:
            result = subprocess.run([*cmd, str(scratch)], check=False)
        except OSError as e:
            raise EditorError(f"Could not launch editor {cmd[0]}: {e}") from e
        if result.returncode != 0:
            raise EditorError(f"Editor {cmd[0]} exited with status {result.returncode}")
        return scratch.read_text(encoding="utf-8")
    finally:
        with contextlib.suppress(OSError):
            os.unlink(scratch)
