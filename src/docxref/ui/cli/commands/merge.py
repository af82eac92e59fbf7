"""Command combining several implementors scripts for one trait."""

from __future__ import annotations

import typer

from docxref.core.artifact import read_artifact, write_artifact
from docxref.core.delivery import PendingSlot, deliver
from docxref.core.exceptions import DocxrefError
from docxref.core.registry import build

from .._options import OutputArgument, ScriptsArgument
from ..state import emit_error, get_cli_state


_MERGED = "merged"


def merge(output: OutputArgument, sources: ScriptsArgument) -> None:
    """Merge SCRIPT files in order and write the combined result to OUTPUT.

    Groups present in several scripts are combined with the configured merge
    policy.
    """
    state = get_cli_state()
    index = state.config.create_index()
    pending = PendingSlot()
    try:
        for source in sources:
            deliver(build(read_artifact(source)), pending=pending)
            index.collect(_MERGED, pending)
        merged = build(index.snapshot().get(_MERGED, {}))
        write_artifact(output, merged)
    except DocxrefError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    state.console.print(
        f"Wrote {len(merged)} group(s) with {merged.fragment_count()} implementor(s) "
        f"to {output}",
        highlight=False,
    )


__all__ = ["merge"]
