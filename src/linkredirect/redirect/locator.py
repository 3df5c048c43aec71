"""Backlink lookup against a reference index."""

from __future__ import annotations

import logging
from typing import List

from linkredirect.models import Document
from linkredirect.vault.protocols import FileStore, ReferenceIndex

LOGGER = logging.getLogger(__name__)


class ReferenceLocator:
    """Finds the documents that currently link to a given document."""

    def __init__(self, store: FileStore, index: ReferenceIndex) -> None:
        self.store = store
        self.index = index

    def find_referencing_documents(self, target: Document) -> List[Document]:
        backlinks: List[Document] = []
        for source_path, links in self.index.references_of().items():
            if target.path not in links:
                continue
            source = self.store.resolve(source_path)
            if source is None:
                # Stale index entry for a moved or deleted note
                LOGGER.debug("Skipping unresolvable backlink source %s", source_path)
                continue
            backlinks.append(source)
        return backlinks
