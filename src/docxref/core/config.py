"""Configuration models used by the implementors index.

XrefConfig

`doc_root` (`Path | None`)
: Generated documentation root. Either the directory that contains the
  `implementors` tree or the `implementors` directory itself.

`merge` (`MergePolicy`)
: How groups delivered twice for the same trait are combined. `replace`
  keeps the latest group (default), `append` adds unseen fragments after the
  existing ones.

`exclude_groups` (`list[str]`)
: Group names never merged into the index, typically the library whose own
  pages are being rendered.

`strict` (`bool`)
: Abort on unreadable or malformed implementors scripts instead of skipping
  them with a warning.

`plain_text` (`bool`)
: Display fragments as plain text in the CLI rather than raw markup.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from .aggregator import ImplementorIndex, MergePolicy
from .exceptions import ConfigError


class XrefConfig(BaseModel):
    """Settings controlling how implementors scripts are indexed."""

    model_config = ConfigDict(extra="forbid")

    doc_root: Path | None = None
    merge: MergePolicy = MergePolicy.REPLACE
    exclude_groups: list[str] = Field(default_factory=list)
    strict: bool = False
    plain_text: bool = False

    @field_validator("exclude_groups")
    @classmethod
    def _reject_empty_names(cls, value: list[str]) -> list[str]:
        if any(not name for name in value):
            raise ValueError("excluded group names must be non-empty")
        return value

    def create_index(self) -> ImplementorIndex:
        """Return an empty index honouring the merge and exclusion settings."""
        return ImplementorIndex(merge=self.merge, excluded_groups=frozenset(self.exclude_groups))


def load_config(path: Path | None) -> XrefConfig:
    """Load a YAML configuration file; ``None`` or an empty file yields defaults."""
    if path is None:
        return XrefConfig()
    try:
        payload = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration '{path}': {exc}") from exc

    try:
        data: Any = yaml.safe_load(payload) if payload.strip() else {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in '{path}': {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration '{path}' must contain a mapping.")

    try:
        config = XrefConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in '{path}': {exc}") from exc

    if config.doc_root is not None and not config.doc_root.is_absolute():
        config.doc_root = Path(path).parent / config.doc_root
    return config


__all__ = ["XrefConfig", "load_config"]
