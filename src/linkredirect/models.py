"""Core link-redirect data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from typing import List, Sequence


@dataclass(frozen=True, slots=True)
class Document:
    """A note in the vault, identified by its vault-relative path."""

    path: str

    @property
    def name(self) -> str:
        """Filename including the extension."""
        return PurePosixPath(self.path).name

    @property
    def basename(self) -> str:
        """Short name used by wikilinks: the filename without extension."""
        return PurePosixPath(self.path).stem


@dataclass(slots=True)
class RewriteRequest:
    source: Document
    target: Document
    candidates: Sequence[Document] = ()

    @property
    def is_same_document(self) -> bool:
        return self.source.path == self.target.path


@dataclass(slots=True)
class RewriteFailure:
    """A candidate that could not be read or written."""

    document: Document
    stage: str
    error: str


@dataclass(slots=True)
class CandidateResult:
    document: Document
    matched: bool = False
    modified: bool = False


@dataclass(slots=True)
class RewriteResult:
    modified: int = 0
    failures: List[RewriteFailure] = field(default_factory=list)
    results: List[CandidateResult] = field(default_factory=list)
    same_document: bool = False

    @property
    def unmodified(self) -> int:
        return len(self.results) - self.modified

    @property
    def modified_documents(self) -> List[Document]:
        return [result.document for result in self.results if result.modified]

    def record(self, result: CandidateResult) -> None:
        if result.modified:
            self.modified += 1
        self.results.append(result)

    def fail(self, document: Document, stage: str, error: Exception) -> None:
        self.failures.append(RewriteFailure(document=document, stage=stage, error=str(error)))
        self.results.append(CandidateResult(document=document))


class RedirectOutcome(str, Enum):
    SAME_DOCUMENT = "same_document"
    NO_REFERENCES = "no_references"
    NO_MATCHES = "no_matches"
    REDIRECTED = "redirected"


@dataclass(slots=True)
class RedirectSummary:
    """Exactly one outcome per redirect invocation."""

    outcome: RedirectOutcome
    source: Document
    target: Document
    result: RewriteResult = field(default_factory=RewriteResult)

    @property
    def modified(self) -> int:
        return self.result.modified
