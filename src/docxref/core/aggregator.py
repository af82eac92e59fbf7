"""Consumer side of the registry hand-off.

:class:`ImplementorIndex` collects registries for many traits and decides how
groups delivered for the same trait are combined across repeated loads.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
import logging
from threading import Lock

from .delivery import PendingSlot, RegistrationHook
from .registry import FragmentGroup, Registry


logger = logging.getLogger(__name__)


class MergePolicy(str, Enum):
    """How a group delivered twice for the same trait is combined.

    ``REPLACE`` keeps only the latest fragments of the group. ``APPEND`` adds
    the incoming fragments that were not already present in the group before
    that delivery; repeats within a single delivery are kept, like ``build``
    keeps them.
    """

    REPLACE = "replace"
    APPEND = "append"


@dataclass(slots=True)
class ImplementorIndex:
    """Thread-safe index of implementors keyed by trait path then group name."""

    merge: MergePolicy = MergePolicy.REPLACE
    excluded_groups: frozenset[str] = frozenset()
    _traits: dict[str, dict[str, list[str]]] = field(default_factory=dict, repr=False)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def __post_init__(self) -> None:
        self.merge = MergePolicy(self.merge)
        self.excluded_groups = frozenset(self.excluded_groups)

    def register(self, trait: str, registry: Registry) -> None:
        """Merge every group of ``registry`` into the entries of ``trait``."""
        incoming: dict[str, FragmentGroup] = {}
        for name, group in registry.items():
            if name in self.excluded_groups:
                logger.debug("Skipping excluded group '%s' for %s", name, trait)
                continue
            incoming[name] = group
        if not incoming:
            return

        with self._lock:
            groups = self._traits.setdefault(trait, {})
            for name, group in incoming.items():
                if self.merge is MergePolicy.APPEND and name in groups:
                    current = groups[name]
                    seen = set(current)
                    current.extend(fragment for fragment in group if fragment not in seen)
                else:
                    groups[name] = list(group)
        logger.debug("Registered %d group(s) for %s", len(incoming), trait)

    def hook_for(self, trait: str) -> RegistrationHook:
        """Return a registration hook that merges into ``trait``."""

        def _hook(registry: Registry) -> None:
            self.register(trait, registry)

        return _hook

    def collect(self, trait: str, pending: PendingSlot) -> bool:
        """Drain ``pending`` into ``trait``; return whether a registry was waiting."""
        registry = pending.take()
        if registry is None:
            return False
        self.register(trait, registry)
        return True

    def traits(self) -> list[str]:
        with self._lock:
            return sorted(self._traits)

    def groups(self, trait: str) -> list[str]:
        with self._lock:
            return list(self._traits.get(trait, {}))

    def implementors(self, trait: str, group: str | None = None) -> list[str]:
        """Return fragments for ``trait``, restricted to ``group`` when given."""
        with self._lock:
            groups = self._traits.get(trait, {})
            if group is not None:
                return list(groups.get(group, ()))
            return [fragment for fragments in groups.values() for fragment in fragments]

    def snapshot(self) -> dict[str, dict[str, list[str]]]:
        """Return a deep copy of the indexed entries."""
        with self._lock:
            return {
                trait: {name: list(fragments) for name, fragments in groups.items()}
                for trait, groups in self._traits.items()
            }

    def clear(self) -> None:
        """Reset the index to its initial empty state."""
        with self._lock:
            self._traits.clear()

    def __contains__(self, trait: object) -> bool:
        with self._lock:
            return trait in self._traits

    def __len__(self) -> int:  # pragma: no cover - trivial
        with self._lock:
            return len(self._traits)

    def __iter__(self) -> Iterator[str]:  # pragma: no cover - simple proxy
        yield from self.traits()


__all__ = ["ImplementorIndex", "MergePolicy"]
