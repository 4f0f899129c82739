import logging
import sys
from pathlib import Path

import typer
from click.shell_completion import get_completion_class
from typer.completion import completion_init

from again import config
from again.errors import ConfigError
from again.lib import store

from .errors import error_feedback

# Printed scripts and the runtime handler must both use typer's completion classes.
completion_init()

app = typer.Typer(no_args_is_help=True, add_completion=False, help="A commands alias manager")

TRAILING_ARGS = {"allow_extra_args": True, "allow_interspersed_args": False}


def _report_change(alias: str, previous: str | None, registry) -> None:
    if previous is None:
        return
    if alias in registry:
        typer.echo(f"Replaced {alias}: {previous}")
    else:
        typer.echo(f"Deleted {alias}: {previous}")


@app.callback()
@error_feedback
def common_options_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
):
    """A commands alias manager

    Bind short names to shell command lines, optionally scoped to a directory."""
    level = logging.DEBUG if verbose else config.log_level()
    logging.basicConfig(level=level, format="[again] %(levelname)s %(name)s: %(message)s")


@app.command("run")
@error_feedback
def run_cmd(alias: str = typer.Argument(..., help="Command alias")):
    """Run an alias."""
    with store.session() as registry:
        try:
            found = registry.run(alias)
        except OSError as e:
            typer.echo(f"Failed to run {alias}: {e}", err=True)
            return
    if not found:
        typer.echo(f"Alias not found: {alias}")


@error_feedback
def delete_cmd(alias: str = typer.Argument(..., help="Command alias")):
    """Remove a command (alias: rm)."""
    with store.session() as registry:
        previous = registry.delete(alias)
    if previous is None:
        typer.echo(f"Alias not found: {alias}")
    else:
        typer.echo(f"Deleted {alias}: {previous}")


app.command("delete")(delete_cmd)
app.command("rm", hidden=True)(delete_cmd)


@app.command("save", context_settings=TRAILING_ARGS)
@error_feedback
def save_cmd(
    ctx: typer.Context,
    alias: str = typer.Argument(..., help="Command alias"),
    local: bool = typer.Option(False, "--local", "-l", help="Only list it under this directory."),
):
    """Save a command. Everything after the alias is taken verbatim."""
    command = " ".join(ctx.args)
    with store.session() as registry:
        previous = registry.set(alias, command, local=local)
    _report_change(alias, previous, registry)


@error_feedback
def rename_cmd(
    source: str = typer.Argument(..., help="Alias to rename"),
    destination: str = typer.Argument(..., help="New alias name"),
):
    """Rename an alias (alias: mv)."""
    with store.session() as registry:
        result = registry.rename(source, destination)
    if result.status == result.MISSING:
        typer.echo(f"Alias doesn't exist: {source}")
    elif result.status == result.EXISTS:
        typer.echo(f"Alias already exists: {destination}: {result.command}")


app.command("rename")(rename_cmd)
app.command("mv", hidden=True)(rename_cmd)


@error_feedback
def list_cmd(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include aliases scoped elsewhere."),
):
    """List aliases visible from here (alias: ls)."""
    with store.session() as registry:
        for entry in registry.list(show_all):
            typer.echo(str(entry))


app.command("list")(list_cmd)
app.command("ls", hidden=True)(list_cmd)


@app.command("edit")
@error_feedback
def edit_cmd(
    alias: str = typer.Argument(..., help="Command alias"),
    local: bool = typer.Option(False, "--local", "-l", help="Only list it under this directory."),
):
    """Edit a command in your editor."""
    try:
        with store.session() as registry:
            previous = registry.edit(alias, local=local)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        return
    _report_change(alias, previous, registry)


@app.command("completions")
@error_feedback
def completions_cmd(
    shell: str = typer.Argument(
        ..., help="Shell to generate completions for (bash, zsh, fish, powershell)."
    ),
    exe: str = typer.Option("again", "--exe", help="Executable name the completions target."),
):
    """Print a shell completion script."""
    comp_cls = get_completion_class(shell)
    if comp_cls is None:
        raise ValueError(f"Unsupported shell: {shell}")
    complete_var = f"_{exe.replace('-', '_').upper()}_COMPLETE"
    cli = typer.main.get_command(app)
    typer.echo(comp_cls(cli, {}, exe, complete_var).source())


def main(prog_name: str | None = None) -> None:
    """Entry point for again command.

    The program name picks the completion variable (``_<PROG>_COMPLETE``), so
    it follows the executable the user actually invoked.
    """
    app(prog_name=prog_name or Path(sys.argv[0]).name or "again")
