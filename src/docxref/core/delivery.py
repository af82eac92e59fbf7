"""Hand-off of freshly built registries to their consumer.

A registry is delivered at most once per load: either synchronously to a
registration hook supplied by the caller, or into a caller-owned pending slot
that a consumer drains later.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
import logging

from .registry import Registry, build


logger = logging.getLogger(__name__)

RegistrationHook = Callable[[Registry], object]


class DeliveryOutcome(str, Enum):
    """Path taken by :func:`deliver`."""

    HOOKED = "hooked"
    PENDING = "pending"
    DROPPED = "dropped"


@dataclass(slots=True)
class PendingSlot:
    """Storage for a registry awaiting a consumer."""

    _registry: Registry | None = field(default=None, repr=False)

    def store(self, registry: Registry) -> None:
        """Place ``registry`` in the slot, replacing any previous occupant."""
        if self._registry is not None:
            logger.debug("Overwriting pending registry with %d group(s)", len(self._registry))
        self._registry = registry

    def take(self) -> Registry | None:
        """Return the pending registry and clear the slot."""
        registry, self._registry = self._registry, None
        return registry

    def peek(self) -> Registry | None:
        return self._registry

    def clear(self) -> None:
        self._registry = None

    @property
    def is_empty(self) -> bool:
        return self._registry is None


def deliver(
    registry: Registry,
    hook: RegistrationHook | None = None,
    pending: PendingSlot | None = None,
) -> DeliveryOutcome:
    """Hand ``registry`` to ``hook`` when present, else park it in ``pending``.

    The hook is called exactly once with the registry object itself. When
    neither a hook nor a pending slot is available the registry is dropped
    silently. Errors raised by the hook propagate.
    """
    match hook, pending:
        case None, None:
            logger.debug("No consumer available, dropping %d group(s)", len(registry))
            return DeliveryOutcome.DROPPED
        case None, PendingSlot() as slot:
            logger.debug("No registration hook, storing %d group(s) as pending", len(registry))
            slot.store(registry)
            return DeliveryOutcome.PENDING
        case None, other:
            raise TypeError(f"Expected a PendingSlot, got {type(other).__name__}.")
        case callback, _:
            logger.debug("Delivering %d group(s) to registration hook", len(registry))
            callback(registry)
            return DeliveryOutcome.HOOKED


def load(
    groups: Mapping[str, Sequence[str]],
    hook: RegistrationHook | None = None,
    pending: PendingSlot | None = None,
) -> Registry:
    """Build a registry from ``groups`` and deliver it in one step."""
    registry = build(groups)
    deliver(registry, hook=hook, pending=pending)
    return registry


__all__ = ["DeliveryOutcome", "PendingSlot", "RegistrationHook", "deliver", "load"]
