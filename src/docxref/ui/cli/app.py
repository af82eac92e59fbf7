"""Typer application wiring for the docxref CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from rich.traceback import Traceback
import typer

from docxref.core.config import load_config
from docxref.core.exceptions import ConfigError
from docxref.version import get_version

from .commands import list_traits, merge, show
from .state import (
    configure_logging,
    debug_enabled,
    emit_error,
    get_cli_state,
    set_cli_state,
)


app = typer.Typer(
    help="Inspect and combine generated implementors scripts.",
    context_settings={"help_option_names": ["--help"]},
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.callback()
def _app_root(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="YAML configuration file.",
            exists=True,
            dir_okay=False,
            readable=True,
            resolve_path=True,
        ),
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option(
            "--debug/--no-debug",
            help="Show full tracebacks when an unexpected error occurs.",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option("--version", help="Print the docxref version and exit.", is_eager=True),
    ] = False,
) -> None:
    if version:
        typer.echo(get_version())
        raise typer.Exit(code=0)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)

    try:
        settings = load_config(config)
    except ConfigError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    set_cli_state(verbosity=verbose, debug=debug, config=settings)
    configure_logging(verbose)
    ctx.obj = get_cli_state()


app.command(name="list")(list_traits)
app.command(name="show")(show)
app.command(name="merge")(merge)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - defensive catch-all
        state = get_cli_state()
        if state.show_tracebacks:
            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
