"""Tests for core data models."""

from __future__ import annotations

import pytest

from linkredirect.models import (
    CandidateResult,
    Document,
    RedirectOutcome,
    RedirectSummary,
    RewriteRequest,
    RewriteResult,
)


class TestDocument:
    """Test Document identity and derived names."""

    def test_names(self) -> None:
        """Should derive filename and short name from the path."""
        document = Document("projects/Road Map.md")

        assert document.name == "Road Map.md"
        assert document.basename == "Road Map"

    def test_dotted_name(self) -> None:
        """Only the last extension is dropped from the short name."""
        assert Document("v1.2 notes.md").basename == "v1.2 notes"

    def test_equality_by_path(self) -> None:
        assert Document("A.md") == Document("A.md")
        assert Document("A.md") != Document("folder/A.md")

    def test_hashable(self) -> None:
        assert len({Document("A.md"), Document("A.md"), Document("B.md")}) == 2

    def test_frozen(self) -> None:
        document = Document("A.md")
        with pytest.raises(AttributeError):
            document.path = "B.md"  # type: ignore[misc]


class TestRewriteRequest:
    def test_same_document(self) -> None:
        assert RewriteRequest(Document("A.md"), Document("A.md")).is_same_document
        assert not RewriteRequest(Document("A.md"), Document("B.md")).is_same_document


class TestRewriteResult:
    """Test RewriteResult tracking."""

    def test_init_defaults(self) -> None:
        result = RewriteResult()
        assert result.modified == 0
        assert result.unmodified == 0
        assert result.failures == []
        assert result.results == []
        assert result.same_document is False

    def test_record(self) -> None:
        result = RewriteResult()
        result.record(CandidateResult(Document("A.md"), matched=True, modified=True))
        result.record(CandidateResult(Document("B.md")))

        assert result.modified == 1
        assert result.unmodified == 1
        assert result.modified_documents == [Document("A.md")]

    def test_fail(self) -> None:
        result = RewriteResult()
        result.fail(Document("A.md"), "read", OSError("denied"))

        assert result.modified == 0
        assert result.unmodified == 1
        assert result.failures[0].stage == "read"
        assert result.failures[0].error == "denied"


class TestRedirectSummary:
    def test_modified_shortcut(self) -> None:
        summary = RedirectSummary(
            RedirectOutcome.REDIRECTED,
            Document("Old.md"),
            Document("New.md"),
            RewriteResult(modified=4),
        )
        assert summary.modified == 4

    def test_outcome_values(self) -> None:
        assert RedirectOutcome("no_references") is RedirectOutcome.NO_REFERENCES
        assert RedirectOutcome.REDIRECTED.value == "redirected"
