"""Core registry, delivery and indexing primitives."""

from __future__ import annotations

from .aggregator import ImplementorIndex, MergePolicy
from .delivery import DeliveryOutcome, PendingSlot, RegistrationHook, deliver, load
from .exceptions import (
    ArtifactError,
    ArtifactFormatError,
    ConfigError,
    DocxrefError,
    InvalidGroupError,
)
from .registry import FragmentGroup, Registry, build


__all__ = [
    "ArtifactError",
    "ArtifactFormatError",
    "ConfigError",
    "DeliveryOutcome",
    "DocxrefError",
    "FragmentGroup",
    "ImplementorIndex",
    "InvalidGroupError",
    "MergePolicy",
    "PendingSlot",
    "Registry",
    "RegistrationHook",
    "build",
    "deliver",
    "load",
]
