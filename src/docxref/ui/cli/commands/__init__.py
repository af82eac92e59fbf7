"""CLI command implementations exposed via `docxref.ui.cli`."""

from __future__ import annotations

from .listing import list_traits, show
from .merge import merge


__all__ = ["list_traits", "merge", "show"]
