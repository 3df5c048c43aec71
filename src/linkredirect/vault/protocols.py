"""Capabilities the redirect engine expects from its host."""

from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence, Tuple

from linkredirect.models import Document


class FileStore(Protocol):
    extensions: Tuple[str, ...]

    def read(self, document: Document) -> str: ...

    def write(self, document: Document, text: str) -> None: ...

    def resolve(self, path: str) -> Optional[Document]: ...

    def list_all_documents(self) -> Sequence[Document]: ...


class ReferenceIndex(Protocol):
    def references_of(self) -> Mapping[str, Mapping[str, int]]:
        """Snapshot of source path -> {referenced path -> link count}."""
        ...


class Picker(Protocol):
    def choose(self, documents: Sequence[Document]) -> Optional[Document]: ...


class Notifier(Protocol):
    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
