"""CLI error handling: wrap commands to report errors instead of tracebacks."""

import logging
from functools import wraps

import typer
from click.exceptions import Exit

from again.errors import AgainError, StorageError

logger = logging.getLogger(__name__)


def error_feedback(f):
    """Wrap command to catch exceptions and report them before exiting.

    Storage, editor and config errors, bad input and OS errors are echoed to
    stderr and end the invocation with status 1.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (SystemExit, Exit):
            raise
        except StorageError as e:
            typer.echo(f"Storage error: {e}", err=True)
            raise typer.Exit(1) from e
        except AgainError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e
        except ValueError as e:
            typer.echo(f"Invalid input: {e}", err=True)
            raise typer.Exit(1) from e
        except OSError as e:
            logger.debug("os error in %s", f.__name__, exc_info=True)
            typer.echo(f"File error: {e}", err=True)
            raise typer.Exit(1) from e

    return wrapper
