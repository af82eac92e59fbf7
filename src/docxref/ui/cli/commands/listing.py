"""Commands inspecting generated implementors scripts."""

from __future__ import annotations

from pathlib import Path

import typer

from docxref.core.aggregator import ImplementorIndex
from docxref.core.artifact import load_file, load_tree, trait_path_for
from docxref.core.exceptions import DocxrefError

from .._options import GroupOption, PlainOption, SourceArgument, TraitOption
from ..presenter import present_implementors, present_trait_summary
from ..state import emit_error, emit_warning, get_cli_state


def _resolve_source(source: Path | None) -> Path:
    if source is not None:
        return source
    configured = get_cli_state().config.doc_root
    if configured is None:
        emit_error("No documentation root given and none configured.")
        raise typer.Exit(code=1)
    return configured


def build_index(source: Path) -> ImplementorIndex:
    """Load a single script or a whole tree into a fresh index."""
    config = get_cli_state().config
    index = config.create_index()
    if source.is_file():
        trait = trait_path_for(source)
        load_file(source, hook=index.hook_for(trait))
    else:
        load_tree(source, index, strict=config.strict)
    return index


def _load_or_exit(source: Path) -> ImplementorIndex:
    try:
        return build_index(source)
    except DocxrefError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


def list_traits(source: SourceArgument = None) -> None:
    """Summarise the traits found under SOURCE."""
    index = _load_or_exit(_resolve_source(source))
    present_trait_summary(get_cli_state(), index.snapshot())


def show(
    source: SourceArgument = None,
    trait: TraitOption = None,
    group: GroupOption = None,
    plain: PlainOption = False,
) -> None:
    """Print the implementors recorded in SOURCE."""
    state = get_cli_state()
    index = _load_or_exit(_resolve_source(source))
    snapshot = index.snapshot()

    traits = sorted(snapshot)
    if trait is not None:
        if trait not in snapshot:
            emit_error(f"Trait '{trait}' not found.")
            raise typer.Exit(code=1)
        traits = [trait]

    use_plain = plain or state.config.plain_text
    shown = 0
    for name in traits:
        groups = snapshot[name]
        if group is not None:
            groups = {group: groups[group]} if group in groups else {}
        if not groups:
            continue
        present_implementors(state, name, groups, plain=use_plain)
        shown += 1

    if not shown:
        emit_warning("No implementors matched the given filters.")


__all__ = ["build_index", "list_traits", "show"]
