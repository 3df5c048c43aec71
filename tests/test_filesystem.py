"""Tests for FilesystemVault."""

from __future__ import annotations

from pathlib import Path

import pytest

from linkredirect.models import Document
from linkredirect.redirect.service import Redirector
from linkredirect.vault.filesystem import FilesystemVault
from linkredirect.vault.links import VaultLinkIndex


class TestFilesystemVault:
    """Note storage on disk."""

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            FilesystemVault(tmp_path / "missing")

    def test_list_all_documents(self, vault: Path) -> None:
        documents = FilesystemVault(vault).list_all_documents()
        assert [doc.path for doc in documents] == [
            "A.md",
            "B.md",
            "New.md",
            "Old.md",
            "projects/Plan.md",
        ]

    def test_custom_extensions(self, vault: Path) -> None:
        (vault / "Draft.txt").write_text("[[Old]]", encoding="utf-8")
        store = FilesystemVault(vault, extensions=(".txt",))
        assert store.list_all_documents() == [Document("Draft.txt")]

    def test_resolve(self, vault: Path) -> None:
        store = FilesystemVault(vault)
        assert store.resolve("projects/Plan.md") == Document("projects/Plan.md")
        assert store.resolve("Missing.md") is None
        assert store.resolve("image.png") is None
        assert store.resolve(".obsidian/workspace.md") is None
        assert store.resolve("../outside.md") is None

    def test_read_write(self, vault: Path) -> None:
        store = FilesystemVault(vault)
        document = Document("B.md")
        store.write(document, "Changed [[New]]\n")
        assert store.read(document) == "Changed [[New]]\n"
        assert (vault / "B.md").read_text(encoding="utf-8") == "Changed [[New]]\n"

    def test_read_missing_raises(self, vault: Path) -> None:
        with pytest.raises(OSError):
            FilesystemVault(vault).read(Document("Gone.md"))

    def test_find(self, vault: Path) -> None:
        store = FilesystemVault(vault)
        assert store.find("projects/Plan.md") == Document("projects/Plan.md")
        assert store.find("projects/Plan") == Document("projects/Plan.md")
        assert store.find("Plan") == Document("projects/Plan.md")
        assert store.find("Plan.md") == Document("projects/Plan.md")
        assert store.find("  ") is None
        assert store.find("Nothing") is None


class TestVaultRedirect:
    """Redirect against files on disk."""

    def test_redirect_rewrites_files(self, vault: Path) -> None:
        store = FilesystemVault(vault)
        summary = Redirector(store, VaultLinkIndex(store)).redirect(
            Document("Old.md"), Document("New.md")
        )

        assert summary.modified == 2
        assert (vault / "A.md").read_text(encoding="utf-8") == "See [[New]] for details.\n"
        assert (vault / "projects" / "Plan.md").read_text(encoding="utf-8") == (
            "Start from [[New|the old note]] and [notes](New.md).\n"
        )
        assert (vault / "B.md").read_text(encoding="utf-8") == "No link here.\n"
        assert (vault / ".obsidian" / "workspace.md").read_text(encoding="utf-8") == "[[Old]]\n"

    def test_unmodified_file_keeps_mtime(self, vault: Path) -> None:
        store = FilesystemVault(vault)
        index = {"B.md": {"Old.md": 1}}
        before = (vault / "B.md").stat().st_mtime_ns

        class Index:
            def references_of(self):
                return index

        Redirector(store, Index()).redirect(Document("Old.md"), Document("New.md"))

        assert (vault / "B.md").stat().st_mtime_ns == before
