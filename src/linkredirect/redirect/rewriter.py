"""Pattern-based rewriting of links from one note to another."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from linkredirect.models import CandidateResult, Document, RewriteRequest, RewriteResult
from linkredirect.vault.protocols import FileStore

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LinkRule:
    """One link syntax to rewrite.

    ``pattern`` and ``replacement`` are format strings with a ``{name}`` field;
    ``field`` picks which name of the document fills it (``basename`` or ``name``).
    In the replacement, ``{text}`` is the first captured group of the match.
    """

    label: str
    pattern: str
    replacement: str
    field: str = "basename"

    def compile(self, source: Document) -> re.Pattern[str]:
        return re.compile(self.pattern.format(name=re.escape(getattr(source, self.field))))

    def render(self, target: Document, match: re.Match[str]) -> str:
        text = match.group(1) if match.re.groups else ""
        return self.replacement.format(name=getattr(target, self.field), text=text)


# Order is significant; each rule sees the output of the previous one but
# never rewrites the links an earlier rule produced.
LINK_RULES: Tuple[LinkRule, ...] = (
    LinkRule("wikilink", r"\[\[{name}\]\]", "[[{name}]]"),
    LinkRule("aliased wikilink", r"\[\[{name}\|([^\]]+)\]\]", "[[{name}|{text}]]"),
    LinkRule("markdown link", r"\[([^\]]+)\]\({name}\)", "[{text}]({name})", field="name"),
    LinkRule("markdown short link", r"\[([^\]]+)\]\({name}\)", "[{text}]({name})"),
)


Span = Tuple[int, int]


def _overlaps(span: Span, written: Sequence[Span]) -> bool:
    start, end = span
    return any(start < w_end and w_start < end for w_start, w_end in written)


def _apply_guarded(
    rule: LinkRule,
    content: str,
    source: Document,
    target: Document,
    written: Sequence[Span],
) -> Tuple[str, int, List[Span]]:
    """Apply ``rule`` outside the ``written`` spans and return the updated spans.

    Spans cover text produced by earlier rules; a match touching one would
    rewrite a link that already points at ``target``.
    """
    pattern = rule.compile(source)
    pieces: List[str] = []
    spans: List[Span] = []
    pending = sorted(written)
    last = 0
    shift = 0
    count = 0
    for match in pattern.finditer(content):
        if _overlaps(match.span(), written):
            continue
        while pending and pending[0][1] <= match.start():
            w_start, w_end = pending.pop(0)
            spans.append((w_start + shift, w_end + shift))
        replacement = rule.render(target, match)
        pieces.append(content[last : match.start()])
        new_start = match.start() + shift
        pieces.append(replacement)
        spans.append((new_start, new_start + len(replacement)))
        shift += len(replacement) - (match.end() - match.start())
        last = match.end()
        count += 1
    pieces.append(content[last:])
    spans.extend((w_start + shift, w_end + shift) for w_start, w_end in pending)
    return "".join(pieces), count, spans


def apply_rule(
    rule: LinkRule, content: str, source: Document, target: Document
) -> Tuple[str, int]:
    """Replace every occurrence of ``rule`` for ``source`` with ``target``.

    Returns the new content and the number of matches.
    """
    content, count, _ = _apply_guarded(rule, content, source, target, ())
    return content, count


def rewrite_content(
    content: str,
    source: Document,
    target: Document,
    rules: Sequence[LinkRule] = LINK_RULES,
) -> Tuple[str, bool]:
    """Run all rules in order over ``content``; report whether any matched.

    Text written by one rule is never matched again by a later one.
    """
    matched = False
    written: List[Span] = []
    for rule in rules:
        content, count, written = _apply_guarded(rule, content, source, target, written)
        if count:
            LOGGER.debug("Rule %r matched %d time(s)", rule.label, count)
            matched = True
    return content, matched


class LinkRewriter:
    """Redirects links in candidate documents from a source to a target."""

    def __init__(
        self,
        store: FileStore,
        *,
        rules: Sequence[LinkRule] = LINK_RULES,
        dry_run: bool = False,
    ) -> None:
        self.store = store
        self.rules = tuple(rules)
        self.dry_run = dry_run

    def rewrite(self, request: RewriteRequest) -> RewriteResult:
        return self.rewrite_references(request.source, request.target, request.candidates)

    def rewrite_references(
        self, source: Document, target: Document, candidates: Sequence[Document]
    ) -> RewriteResult:
        result = RewriteResult()
        if source.path == target.path:
            LOGGER.warning("Refusing to redirect %s to itself", source.path)
            result.same_document = True
            return result

        for document in candidates:
            try:
                original = self.store.read(document)
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.error("Failed to read %s: %s", document.path, exc)
                result.fail(document, "read", exc)
                continue

            content, matched = rewrite_content(original, source, target, self.rules)
            if content == original:
                LOGGER.debug("No links to %s in %s", source.basename, document.path)
                result.record(CandidateResult(document=document, matched=matched))
                continue

            if not self.dry_run:
                try:
                    self.store.write(document, content)
                except OSError as exc:
                    LOGGER.error("Failed to update %s: %s", document.path, exc)
                    result.fail(document, "write", exc)
                    continue

            LOGGER.info("Redirected links in %s", document.path)
            result.record(CandidateResult(document=document, matched=matched, modified=True))

        return result
