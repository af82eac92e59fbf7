"""Reading and writing generated implementors scripts.

Documentation builds emit one script per trait under an ``implementors``
tree, e.g. ``implementors/core/iter/traits/trait.IntoIterator.js``. Each
script assigns one JSON array of rendered fragments per library and then
hands the resulting object to ``window.register_implementors`` or parks it in
``window.pending_implementors``.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
import json
import logging
from pathlib import Path
import re

from .aggregator import ImplementorIndex
from .delivery import PendingSlot, RegistrationHook, load
from .exceptions import ArtifactError, ArtifactFormatError, InvalidGroupError
from .registry import Registry


logger = logging.getLogger(__name__)

IMPLEMENTORS_DIR = "implementors"
TRAIT_PREFIX = "trait."
ARTIFACT_SUFFIX = ".js"

_PROLOGUE = "(function() {var implementors = {};\n"
_EPILOGUE = (
    "\n"
    "            if (window.register_implementors) {\n"
    "                window.register_implementors(implementors);\n"
    "            } else {\n"
    "                window.pending_implementors = implementors;\n"
    "            }\n"
    "        \n"
    "})()\n"
)

_ASSIGNMENT = re.compile(r'implementors\[(?P<name>"(?:[^"\\]|\\.)*")\]\s*=\s*\[')
_WHITESPACE = re.compile(r"\s*")
_DECODER = json.JSONDecoder()


def _skip_ws(text: str, pos: int) -> int:
    return _WHITESPACE.match(text, pos).end()


def _line_of(text: str, pos: int) -> int:
    return text.count("\n", 0, pos) + 1


def _read_array(text: str, pos: int) -> tuple[list[str], int]:
    """Decode string elements starting after ``[``; return them and the end offset."""
    items: list[str] = []
    while True:
        pos = _skip_ws(text, pos)
        if pos >= len(text):
            raise ArtifactFormatError("Unterminated implementors array.")
        if text[pos] == "]":
            return items, pos + 1
        try:
            value, pos = _DECODER.raw_decode(text, pos)
        except json.JSONDecodeError as exc:
            raise ArtifactFormatError(
                f"Invalid fragment literal on line {_line_of(text, pos)}: {exc.msg}"
            ) from exc
        if not isinstance(value, str):
            raise ArtifactFormatError(
                f"Expected a string fragment on line {_line_of(text, pos)}, "
                f"got {type(value).__name__}."
            )
        items.append(value)
        pos = _skip_ws(text, pos)
        if text.startswith(",", pos):
            pos += 1
        elif not text.startswith("]", pos):
            raise ArtifactFormatError(
                f"Expected ',' or ']' after fragment on line {_line_of(text, pos)}."
            )


def parse_artifact(text: str) -> dict[str, list[str]]:
    """Extract the group assignments of an implementors script.

    Later assignments to the same group win, mirroring script execution.
    Markup inside fragments is left untouched.
    """
    groups: dict[str, list[str]] = {}
    pos = 0
    found = False
    while (match := _ASSIGNMENT.search(text, pos)) is not None:
        found = True
        name = json.loads(match.group("name"))
        fragments, pos = _read_array(text, match.end())
        groups[name] = fragments
    if not found and "var implementors" not in text:
        raise ArtifactFormatError("No implementors assignments found.")
    return groups


def render_artifact(groups: Mapping[str, Sequence[str]]) -> str:
    """Render ``groups`` in the layout produced by the documentation generator."""
    lines: list[str] = []
    for name, fragments in groups.items():
        if not isinstance(name, str) or not name:
            raise InvalidGroupError(f"Group names must be non-empty strings, got {name!r}.")
        body = "".join(f"{json.dumps(fragment, ensure_ascii=False)}," for fragment in fragments)
        lines.append(f"implementors[{json.dumps(name, ensure_ascii=False)}] = [{body}];\n")
    return _PROLOGUE + "".join(lines) + _EPILOGUE


def trait_path_for(path: Path, root: Path | None = None) -> str:
    """Derive ``core::iter::traits::IntoIterator`` from an artifact location.

    ``root`` is the directory containing the module folders; when omitted the
    nearest ``implementors`` ancestor is used, falling back to the file name.
    """
    path = Path(path)
    name = path.name
    if not (name.startswith(TRAIT_PREFIX) and name.endswith(ARTIFACT_SUFFIX)):
        raise ArtifactFormatError(f"'{path}' is not a trait implementors script.")
    trait = name[len(TRAIT_PREFIX) : -len(ARTIFACT_SUFFIX)]

    if root is None:
        modules: tuple[str, ...] = ()
        parents = path.parts[:-1]
        if IMPLEMENTORS_DIR in parents:
            index = len(parents) - 1 - parents[::-1].index(IMPLEMENTORS_DIR)
            modules = parents[index + 1 :]
    else:
        try:
            modules = path.parent.relative_to(root).parts
        except ValueError as exc:
            raise ArtifactFormatError(f"'{path}' is not located under '{root}'.") from exc
    return "::".join((*modules, trait))


def read_artifact(path: Path) -> dict[str, list[str]]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ArtifactError(f"Failed to read implementors script '{path}': {exc}") from exc
    try:
        return parse_artifact(text)
    except ArtifactFormatError as exc:
        raise ArtifactFormatError(f"{path}: {exc}") from exc


def write_artifact(path: Path, groups: Mapping[str, Sequence[str]]) -> Path:
    target = Path(path)
    payload = render_artifact(groups)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise ArtifactError(f"Failed to write implementors script '{target}': {exc}") from exc
    return target


def resolve_root(root: Path) -> Path:
    """Return the ``implementors`` directory for a doc root or the root itself."""
    root = Path(root)
    candidate = root / IMPLEMENTORS_DIR
    return candidate if candidate.is_dir() else root


def iter_artifacts(root: Path) -> Iterator[tuple[str, Path]]:
    """Yield ``(trait_path, file)`` pairs for every script below ``root``."""
    base = resolve_root(root)
    if not base.is_dir():
        raise ArtifactError(f"Implementors directory '{base}' does not exist.")
    for path in sorted(base.rglob(f"{TRAIT_PREFIX}*{ARTIFACT_SUFFIX}")):
        if path.is_file():
            yield trait_path_for(path, base), path


def load_tree(
    root: Path,
    index: ImplementorIndex,
    *,
    strict: bool = False,
) -> list[str]:
    """Load every implementors script under ``root`` into ``index``.

    Each script goes through the regular build-and-deliver cycle with a hook
    bound to its trait. Unreadable or malformed scripts are skipped with a
    warning unless ``strict`` is set. Returns the traits that were loaded.
    """
    loaded: list[str] = []
    for trait, path in iter_artifacts(root):
        try:
            groups = read_artifact(path)
        except ArtifactError as exc:
            if strict:
                raise
            logger.warning("Skipping %s: %s", path, exc)
            continue
        registry = load(groups, hook=index.hook_for(trait))
        logger.info("Loaded %d group(s) for %s", len(registry), trait)
        loaded.append(trait)
    return loaded


def load_file(
    path: Path,
    hook: RegistrationHook | None = None,
    pending: PendingSlot | None = None,
) -> Registry:
    """Read one script and deliver its registry like the script itself would."""
    return load(read_artifact(path), hook=hook, pending=pending)


__all__ = [
    "IMPLEMENTORS_DIR",
    "iter_artifacts",
    "load_file",
    "load_tree",
    "parse_artifact",
    "read_artifact",
    "render_artifact",
    "resolve_root",
    "trait_path_for",
    "write_artifact",
]
