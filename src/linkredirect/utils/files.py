"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator


def is_hidden(path: Path, root: Path) -> bool:
    """Return True when any component below root starts with a dot."""
    try:
        parts = path.relative_to(root).parts
    except ValueError:
        parts = path.parts
    return any(part.startswith(".") for part in parts)


def iter_note_paths(root: Path, extensions: Iterable[str] = (".md",)) -> Iterator[Path]:
    """Yield note paths under root, skipping hidden folders like `.obsidian`."""
    suffixes = {ext.lower() for ext in extensions}
    candidates = (child for child in root.rglob("*") if child.is_file())
    for item in sorted(candidates, key=lambda p: p.relative_to(root).as_posix().lower()):
        if item.suffix.lower() in suffixes and not is_hidden(item, root):
            yield item


def to_vault_path(path: Path, root: Path) -> str:
    """Vault-relative POSIX path used as the document identifier."""
    return path.relative_to(root).as_posix()
