"""Rich presenters for indexed implementors."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from bs4 import BeautifulSoup
from rich import box
from rich.markup import escape
from rich.table import Table

from .state import CLIState


def fragment_text(fragment: str) -> str:
    """Return the visible text of a rendered fragment for terminal display."""
    soup = BeautifulSoup(fragment, "html.parser")
    return " ".join(soup.get_text().split())


def _build_table(*, title: str | None, columns: Sequence[str]) -> Table:
    """Create a Rich table with the house style."""
    table = Table(
        title=title or None,
        box=box.SQUARE,
        show_edge=True,
        header_style="bold cyan",
    )
    for column in columns:
        table.add_column(column)
    return table


def present_trait_summary(
    state: CLIState,
    snapshot: Mapping[str, Mapping[str, Sequence[str]]],
) -> None:
    """Print one row per trait with its group and implementor counts."""
    table = _build_table(title="Implementors", columns=("Trait", "Groups", "Implementors"))
    if not snapshot:
        table.add_row("-", "0", "0")
    for trait in sorted(snapshot):
        groups = snapshot[trait]
        total = sum(len(fragments) for fragments in groups.values())
        table.add_row(f"[magenta]{escape(trait)}[/]", str(len(groups)), str(total))
    state.console.print(table)


def present_implementors(
    state: CLIState,
    trait: str,
    groups: Mapping[str, Sequence[str]],
    *,
    plain: bool = False,
) -> None:
    """Print the implementors of ``trait`` grouped by library."""
    table = _build_table(title=escape(trait), columns=("Group", "Implementor"))
    table.columns[0].style = "green"
    table.columns[0].no_wrap = True
    for name, fragments in groups.items():
        label = escape(name)
        for fragment in fragments:
            table.add_row(label, escape(fragment_text(fragment) if plain else fragment))
            label = ""
    state.console.print(table)


__all__ = ["fragment_text", "present_implementors", "present_trait_summary"]
