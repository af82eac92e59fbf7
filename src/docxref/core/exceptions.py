"""Custom exception hierarchy for the cross-reference index loader."""

from __future__ import annotations


class DocxrefError(RuntimeError):
    """Base exception for docxref failures."""


class InvalidGroupError(DocxrefError, ValueError):
    """Raised when a fragment group name or payload is malformed."""


class ArtifactError(DocxrefError):
    """Raised when an implementors artifact cannot be read or written."""


class ArtifactFormatError(ArtifactError):
    """Raised when an implementors artifact does not follow the expected layout."""


class ConfigError(DocxrefError):
    """Raised when the configuration file cannot be loaded or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


__all__ = [
    "ArtifactError",
    "ArtifactFormatError",
    "ConfigError",
    "DocxrefError",
    "InvalidGroupError",
    "exception_hint",
    "exception_messages",
]
