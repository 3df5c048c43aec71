"""Resolved-link index built by scanning every note in a store."""

from __future__ import annotations

import logging
import re
from pathlib import PurePosixPath
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import unquote

from linkredirect.models import Document
from linkredirect.vault.protocols import FileStore

LOGGER = logging.getLogger(__name__)

# Wikilinks: [[Note]], [[Note#Heading|Alias]], ![[embed]]
WIKI_LINK_RE = re.compile(r"(!)?\[\[([^\]|]+?)(?:\|([^\]]*))?\]\]")

# Markdown links: [text](target) with one level of balanced parentheses in the target
MD_LINK_RE = re.compile(r"(!?)\[([^\]]*)\]\((?P<url>(?:[^()\\]|\\.|(?:\([^()]*\)))+)\)")

URL_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")

ResolvedLinks = Dict[str, Dict[str, int]]


def extract_link_targets(text: str) -> List[str]:
    """Return raw link targets in document order, anchors and aliases stripped."""
    found: List[Tuple[int, str]] = []
    for match in WIKI_LINK_RE.finditer(text):
        found.append((match.start(), match.group(2)))
    for match in MD_LINK_RE.finditer(text):
        url = match.group("url").strip()
        if url.startswith("<") and url.endswith(">"):
            url = url[1:-1]
        if URL_SCHEME_RE.match(url):
            continue
        found.append((match.start(), unquote(url)))

    targets: List[str] = []
    for _, raw in sorted(found, key=lambda item: item[0]):
        target = raw.split("#", 1)[0].strip()
        if target:
            targets.append(target)
    return targets


def _common_prefix_len(parts_a: Tuple[str, ...], parts_b: Tuple[str, ...]) -> int:
    count = 0
    for a, b in zip(parts_a, parts_b):
        if a != b:
            break
        count += 1
    return count


class VaultLinkIndex:
    """Maps each note to the notes it links to, like a host's resolved-links cache."""

    def __init__(self, store: FileStore) -> None:
        self.store = store
        self.extensions = tuple(ext.lower() for ext in store.extensions)
        self._snapshot: Optional[ResolvedLinks] = None

    def refresh(self) -> None:
        self._snapshot = None

    def references_of(self) -> ResolvedLinks:
        if self._snapshot is None:
            self._snapshot = self._build()
        return self._snapshot

    def _build(self) -> ResolvedLinks:
        documents = list(self.store.list_all_documents())
        by_path = {document.path.lower(): document for document in documents}
        by_basename: Dict[str, List[Document]] = {}
        for document in documents:
            by_basename.setdefault(document.basename.lower(), []).append(document)

        resolved: ResolvedLinks = {}
        for document in documents:
            try:
                text = self.store.read(document)
            except (OSError, UnicodeDecodeError) as exc:
                LOGGER.warning("Skipping unreadable note %s: %s", document.path, exc)
                continue

            links: Dict[str, int] = {}
            for raw in extract_link_targets(text):
                target = self._resolve_target(raw, document, by_path, by_basename)
                if target is None:
                    LOGGER.debug("Unresolved link %r in %s", raw, document.path)
                    continue
                links[target.path] = links.get(target.path, 0) + 1
            resolved[document.path] = links

        LOGGER.debug("Indexed links for %d notes", len(resolved))
        return resolved

    def _resolve_target(
        self,
        raw: str,
        origin: Document,
        by_path: Dict[str, Document],
        by_basename: Dict[str, List[Document]],
    ) -> Optional[Document]:
        raw = raw.strip().lstrip("/")
        if PurePosixPath(raw).suffix.lower() in self.extensions:
            targets = [raw]
        else:
            targets = [f"{raw}{ext}" for ext in self.extensions]

        # 1) Vault-relative path
        for target in targets:
            direct = by_path.get(target.lower())
            if direct is not None:
                return direct

        # 2) Relative to the linking note's folder
        folder = PurePosixPath(origin.path).parent
        for target in targets:
            relative = _normalize(folder / target)
            if relative is not None:
                direct = by_path.get(relative.lower())
                if direct is not None:
                    return direct

        # 3) Vault-wide match by short name, closest folder first
        matches: List[Document] = []
        for target in targets:
            suffix = PurePosixPath(target).suffix.lower()
            matches.extend(
                document
                for document in by_basename.get(PurePosixPath(target).stem.lower(), [])
                if PurePosixPath(document.path).suffix.lower() == suffix
            )
        if not matches:
            return None
        return _closest(matches, origin)


def _normalize(path: PurePosixPath) -> Optional[str]:
    parts: List[str] = []
    for part in path.parts:
        if part in ("", "."):
            continue
        if part == "..":
            if not parts:
                return None
            parts.pop()
            continue
        parts.append(part)
    return "/".join(parts)


def _closest(candidates: Sequence[Document], origin: Document) -> Document:
    origin_parts = PurePosixPath(origin.path).parent.parts

    def score(candidate: Document) -> Tuple[int, int]:
        parts = PurePosixPath(candidate.path).parts
        return _common_prefix_len(origin_parts, parts[:-1]), -len(parts)

    return max(candidates, key=score)
