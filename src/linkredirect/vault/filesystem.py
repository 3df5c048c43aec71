"""Filesystem-backed note store."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional

from linkredirect.config import DEFAULT_EXTENSIONS
from linkredirect.models import Document
from linkredirect.utils.files import is_hidden, iter_note_paths, to_vault_path

LOGGER = logging.getLogger(__name__)


class FilesystemVault:
    """Reads and writes notes stored as text files under a root directory."""

    def __init__(self, root: Path, *, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> None:
        self.root = Path(root).expanduser().resolve()
        self.extensions = tuple(ext.lower() for ext in extensions)
        if not self.root.is_dir():
            raise FileNotFoundError(f"Vault not found: {self.root}")

    def _absolute(self, document: Document) -> Path:
        return self.root / PurePosixPath(document.path)

    def list_all_documents(self) -> List[Document]:
        return [
            Document(to_vault_path(path, self.root))
            for path in iter_note_paths(self.root, self.extensions)
        ]

    def resolve(self, path: str) -> Optional[Document]:
        candidate = (self.root / PurePosixPath(path)).resolve()
        try:
            relative = to_vault_path(candidate, self.root)
        except ValueError:
            return None
        if candidate.suffix.lower() not in self.extensions:
            return None
        if not candidate.is_file() or is_hidden(candidate, self.root):
            return None
        return Document(relative)

    def read(self, document: Document) -> str:
        return self._absolute(document).read_text(encoding="utf-8")

    def write(self, document: Document, text: str) -> None:
        self._absolute(document).write_text(text, encoding="utf-8")
        LOGGER.debug("Wrote %s", document.path)

    def find(self, name: str) -> Optional[Document]:
        """Resolve user input given as a relative path, a filename or a short name."""
        query = name.strip().strip("/")
        if not query:
            return None

        direct = self.resolve(query)
        if direct is not None:
            return direct
        for ext in self.extensions:
            direct = self.resolve(f"{query}{ext}")
            if direct is not None:
                return direct

        lowered = query.lower()
        for document in self.list_all_documents():
            if lowered in (document.name.lower(), document.basename.lower()):
                return document
        return None
