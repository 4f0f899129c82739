"""Process replacement for running an alias through the user's shell."""

import logging
import os
import subprocess
import sys

from again import config

logger = logging.getLogger(__name__)


def shell_argv(command: str, shell: str | None = None) -> list[str]:
    return [shell or config.shell(), "-c", command]


def exec_command(command: str, shell: str | None = None) -> None:
    """Replace the current process with ``<shell> -c <command>``.

    Only returns by raising OSError when the shell cannot be started. Where
    exec is not available the shell runs as a child and its exit status
    becomes ours.
    """
    argv = shell_argv(command, shell)
    logger.debug("exec %s", argv)
    sys.stdout.flush()
    sys.stderr.flush()
    if os.name == "nt":
        result = subprocess.run(argv, check=False)
        sys.exit(result.returncode)
    os.execvp(argv[0], argv)
