"""Shared fixtures: an in-memory note store and reference index."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set

import pytest

from linkredirect.models import Document


class InMemoryStore:
    """Dict-backed store that records every read and write."""

    extensions = (".md",)

    def __init__(self, notes: Mapping[str, str]) -> None:
        self.notes: Dict[str, str] = dict(notes)
        self.reads: List[str] = []
        self.writes: List[str] = []
        self.fail_reads: Set[str] = set()
        self.fail_writes: Set[str] = set()

    def read(self, document: Document) -> str:
        self.reads.append(document.path)
        if document.path in self.fail_reads:
            raise OSError(f"cannot read {document.path}")
        return self.notes[document.path]

    def write(self, document: Document, text: str) -> None:
        self.writes.append(document.path)
        if document.path in self.fail_writes:
            raise OSError(f"cannot write {document.path}")
        self.notes[document.path] = text

    def resolve(self, path: str) -> Optional[Document]:
        return Document(path) if path in self.notes else None

    def list_all_documents(self) -> List[Document]:
        return [Document(path) for path in self.notes]


class StaticIndex:
    def __init__(self, links: Mapping[str, Mapping[str, int]]) -> None:
        self.links = links

    def references_of(self) -> Mapping[str, Mapping[str, int]]:
        return self.links


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore(
        {
            "Old.md": "# Old",
            "New.md": "# New",
            "A.md": "See [[Old]] for details.",
            "B.md": "No link here.",
        }
    )


@pytest.fixture
def index() -> StaticIndex:
    return StaticIndex({"A.md": {"Old.md": 1}, "B.md": {"Old.md": 1}, "New.md": {}})


@pytest.fixture
def vault(tmp_path: Path) -> Path:
    """A small on-disk vault with nested folders and a hidden config folder."""
    root = tmp_path / "vault"
    (root / "projects").mkdir(parents=True)
    (root / ".obsidian").mkdir()
    (root / "Old.md").write_text("# Old\n", encoding="utf-8")
    (root / "New.md").write_text("# New\n", encoding="utf-8")
    (root / "A.md").write_text("See [[Old]] for details.\n", encoding="utf-8")
    (root / "B.md").write_text("No link here.\n", encoding="utf-8")
    (root / "projects" / "Plan.md").write_text(
        "Start from [[Old|the old note]] and [notes](Old.md).\n", encoding="utf-8"
    )
    (root / ".obsidian" / "workspace.md").write_text("[[Old]]\n", encoding="utf-8")
    (root / "image.png").write_bytes(b"\x89PNG")
    return root
