"""Immutable registries of pre-rendered fragment groups.

A registry maps a group name (typically the library that provides the
implementations) to the ordered fragments rendered for that group. Fragments
are opaque: they are stored and handed over exactly as supplied, never parsed,
reordered or deduplicated.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, overload

from .exceptions import InvalidGroupError


@dataclass(frozen=True, slots=True)
class FragmentGroup(Sequence[str]):
    """Named, ordered collection of opaque fragments."""

    name: str
    fragments: tuple[str, ...] = ()

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        return self.fragments[index]

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fragments)


class Registry(Mapping[str, FragmentGroup]):
    """Read-only mapping from group name to :class:`FragmentGroup`.

    Two registries, or a registry and a plain mapping of name to fragment
    sequence, compare equal when they hold the same group names and the same
    fragments in the same order.
    """

    __slots__ = ("_groups",)

    def __init__(self, groups: Mapping[str, FragmentGroup] | None = None) -> None:
        self._groups: Mapping[str, FragmentGroup] = MappingProxyType(dict(groups or {}))

    def __getitem__(self, name: str) -> FragmentGroup:
        return self._groups[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if set(self._groups) != set(other):
            return False
        return all(
            _same_fragments(group, other[name]) for name, group in self._groups.items()
        )

    def __repr__(self) -> str:
        return f"Registry({self.to_dict()!r})"

    def to_dict(self) -> dict[str, list[str]]:
        """Return a plain, mutable copy of the registry contents."""
        return {name: list(group.fragments) for name, group in self._groups.items()}

    def fragment_count(self) -> int:
        """Return the number of fragments across every group."""
        return sum(len(group) for group in self._groups.values())


def _same_fragments(group: FragmentGroup, other: Any) -> bool:
    if isinstance(other, FragmentGroup):
        return group.fragments == other.fragments
    if isinstance(other, (str, bytes)) or not isinstance(other, Sequence):
        return False
    return group.fragments == tuple(other)


def _validate_name(name: object) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidGroupError(f"Group names must be non-empty strings, got {name!r}.")
    return name


def _freeze_fragments(name: str, fragments: object) -> tuple[str, ...]:
    if isinstance(fragments, (str, bytes)) or not isinstance(fragments, Sequence):
        raise InvalidGroupError(
            f"Fragments for group '{name}' must be a sequence of strings, "
            f"got {type(fragments).__name__}."
        )
    return tuple(fragments)


def build(groups: Mapping[str, Sequence[str]]) -> Registry:
    """Construct a registry from a mapping of group name to fragments.

    Key order and fragment order are preserved. Fragment content is not
    inspected.
    """
    frozen: dict[str, FragmentGroup] = {}
    for name, fragments in groups.items():
        group_name = _validate_name(name)
        frozen[group_name] = FragmentGroup(group_name, _freeze_fragments(group_name, fragments))
    return Registry(frozen)


__all__ = ["FragmentGroup", "Registry", "build"]
