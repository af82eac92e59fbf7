from __future__ import annotations

import logging

import pytest

from docxref.core.delivery import DeliveryOutcome, PendingSlot, deliver, load
from docxref.core.registry import Registry, build


GROUPS = {"alpha": ["frag1", "frag2"], "beta": ["frag3"]}


class RecordingHook:
    def __init__(self) -> None:
        self.calls: list[Registry] = []

    def __call__(self, registry: Registry) -> None:
        self.calls.append(registry)


def test_pending_slot_receives_registry_without_hook() -> None:
    registry = build(GROUPS)
    pending = PendingSlot()

    outcome = deliver(registry, pending=pending)

    assert outcome is DeliveryOutcome.PENDING
    assert pending.peek() is registry
    assert pending.peek() == GROUPS


def test_hook_invoked_once_with_same_registry() -> None:
    registry = build(GROUPS)
    hook = RecordingHook()
    pending = PendingSlot()

    outcome = deliver(registry, hook=hook, pending=pending)

    assert outcome is DeliveryOutcome.HOOKED
    assert len(hook.calls) == 1
    assert hook.calls[0] is registry
    assert hook.calls[0] == GROUPS
    assert pending.is_empty


def test_hook_is_called_synchronously() -> None:
    order: list[str] = []
    deliver(build(GROUPS), hook=lambda _registry: order.append("hook"))
    order.append("after")
    assert order == ["hook", "after"]


def test_delivery_without_consumer_is_dropped_silently() -> None:
    assert deliver(build(GROUPS)) is DeliveryOutcome.DROPPED


def test_hook_errors_propagate() -> None:
    def failing(_registry: Registry) -> None:
        raise RuntimeError("boom")

    pending = PendingSlot()
    with pytest.raises(RuntimeError, match="boom"):
        deliver(build(GROUPS), hook=failing, pending=pending)
    assert pending.is_empty


def test_invalid_pending_slot_is_rejected() -> None:
    with pytest.raises(TypeError):
        deliver(build(GROUPS), pending={})  # type: ignore[arg-type]


def test_pending_take_clears_slot() -> None:
    registry = build(GROUPS)
    pending = PendingSlot()
    pending.store(registry)

    assert pending.take() is registry
    assert pending.is_empty
    assert pending.take() is None


def test_pending_store_overwrites_previous_registry() -> None:
    pending = PendingSlot()
    deliver(build({"alpha": ["one"]}), pending=pending)
    second = build({"beta": ["two"]})
    deliver(second, pending=pending)
    assert pending.peek() is second


def test_pending_clear() -> None:
    pending = PendingSlot()
    pending.store(build(GROUPS))
    pending.clear()
    assert pending.peek() is None


def test_load_builds_then_delivers() -> None:
    hook = RecordingHook()
    registry = load(GROUPS, hook=hook)
    assert hook.calls == [registry]
    assert registry == GROUPS


def test_load_without_hook_parks_registry() -> None:
    pending = PendingSlot()
    registry = load(GROUPS, pending=pending)
    assert pending.take() is registry


def test_delivery_logs_path_taken(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="docxref.core.delivery"):
        deliver(build(GROUPS), pending=PendingSlot())
    assert "storing 2 group(s) as pending" in caplog.text
