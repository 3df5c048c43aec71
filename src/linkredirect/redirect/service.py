"""Redirect workflow tying backlink lookup and rewriting together."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from linkredirect.models import (
    Document,
    RedirectOutcome,
    RedirectSummary,
    RewriteRequest,
    RewriteResult,
)
from linkredirect.redirect.locator import ReferenceLocator
from linkredirect.redirect.rewriter import LinkRewriter
from linkredirect.vault.protocols import FileStore, ReferenceIndex

LOGGER = logging.getLogger(__name__)


class Redirector:
    """High-level API: point every backlink of one note at another note."""

    def __init__(self, store: FileStore, index: ReferenceIndex, *, dry_run: bool = False) -> None:
        self.store = store
        self.index = index
        self.locator = ReferenceLocator(store, index)
        self.rewriter = LinkRewriter(store, dry_run=dry_run)

    def find_backlinks(self, source: Document) -> List[Document]:
        return self.locator.find_referencing_documents(source)

    def redirect(
        self,
        source: Document,
        target: Document,
        candidates: Optional[Sequence[Document]] = None,
    ) -> RedirectSummary:
        request = RewriteRequest(source, target)
        if request.is_same_document:
            return RedirectSummary(
                RedirectOutcome.SAME_DOCUMENT,
                source,
                target,
                RewriteResult(same_document=True),
            )

        request.candidates = candidates if candidates is not None else self.find_backlinks(source)
        if not request.candidates:
            LOGGER.info("No incoming links found for %s", source.path)
            return RedirectSummary(RedirectOutcome.NO_REFERENCES, source, target)

        LOGGER.info(
            "Redirecting links in %d document(s) from %s to %s",
            len(request.candidates),
            source.path,
            target.path,
        )
        result = self.rewriter.rewrite(request)
        outcome = RedirectOutcome.REDIRECTED if result.modified else RedirectOutcome.NO_MATCHES
        return RedirectSummary(outcome, source, target, result)


def format_summary(summary: RedirectSummary) -> str:
    """User-facing one-line description of a redirect summary."""
    if summary.outcome is RedirectOutcome.SAME_DOCUMENT:
        return "Cannot redirect to the same note"
    if summary.outcome is RedirectOutcome.NO_REFERENCES:
        return "No incoming links found for this note"
    if summary.outcome is RedirectOutcome.NO_MATCHES:
        return "No links were found to redirect"
    noun = "document" if summary.modified == 1 else "documents"
    return (
        f'Redirected links in {summary.modified} {noun} '
        f'from "{summary.source.basename}" to "{summary.target.basename}"'
    )
