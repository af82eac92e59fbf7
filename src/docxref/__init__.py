"""Primary public API for docxref."""

from __future__ import annotations

from docxref.core import (
    ArtifactError,
    ArtifactFormatError,
    ConfigError,
    DeliveryOutcome,
    DocxrefError,
    FragmentGroup,
    ImplementorIndex,
    InvalidGroupError,
    MergePolicy,
    PendingSlot,
    Registry,
    RegistrationHook,
    build,
    deliver,
    load,
)
from docxref.core.artifact import (
    iter_artifacts,
    load_file,
    load_tree,
    parse_artifact,
    read_artifact,
    render_artifact,
    trait_path_for,
    write_artifact,
)
from docxref.core.config import XrefConfig, load_config
from docxref.version import get_version


__version__ = get_version()

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
    "XrefConfig",
    "__version__",
    "build",
    "deliver",
    "iter_artifacts",
    "load",
    "load_config",
    "load_file",
    "load_tree",
    "parse_artifact",
    "read_artifact",
    "render_artifact",
    "trait_path_for",
    "write_artifact",
]
