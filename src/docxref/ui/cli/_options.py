"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
FILTERS_PANEL = "Filters"
OUTPUT_PANEL = "Output"

SourceArgument = Annotated[
    Path | None,
    typer.Argument(
        metavar="SOURCE",
        help=(
            "Documentation root, implementors directory, or a single trait script. "
            "Defaults to the configured doc_root."
        ),
        exists=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

TraitOption = Annotated[
    str | None,
    typer.Option(
        "--trait",
        "-t",
        help="Only show the given trait path (e.g. core::iter::traits::IntoIterator).",
        rich_help_panel=FILTERS_PANEL,
    ),
]

GroupOption = Annotated[
    str | None,
    typer.Option(
        "--group",
        "-g",
        help="Only show implementors provided by this group.",
        rich_help_panel=FILTERS_PANEL,
    ),
]

PlainOption = Annotated[
    bool,
    typer.Option(
        "--plain",
        help="Strip markup from fragments before printing (also enabled by plain_text).",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

OutputArgument = Annotated[
    Path,
    typer.Argument(
        metavar="OUTPUT",
        help="Destination script.",
        dir_okay=False,
        resolve_path=True,
        rich_help_panel=OUTPUT_PANEL,
    ),
]

ScriptsArgument = Annotated[
    list[Path],
    typer.Argument(
        metavar="SCRIPT...",
        help="Implementors scripts to combine, in load order.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]
