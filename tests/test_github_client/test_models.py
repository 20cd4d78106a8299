"""Tests for continuation and issue action models."""

import pytest
from pydantic import ValidationError

from github_sync.github_client.errors import InvalidContinuationError
from github_sync.github_client.models import (
    Continuation,
    IssueDraft,
    IssueUpdate,
    RepositoryReference,
    StateFilter,
)

NEXT_URL = "https://api.github.com/repositories/42/issues?state=open&page=2"


class TestContinuation:
    """Test Continuation model."""

    def test_wire_format(self) -> None:
        """Test the continuation serializes as a nextUrl object."""
        wire = Continuation(next_url=NEXT_URL).to_wire()
        assert wire == f'{{"nextUrl":"{NEXT_URL}"}}'

    def test_round_trip(self) -> None:
        """Test a continuation read back from the host is unchanged."""
        continuation = Continuation(next_url=NEXT_URL)
        assert Continuation.from_wire(continuation.to_wire()) == continuation

    @pytest.mark.parametrize(
        "value",
        [
            {"nextUrl": NEXT_URL},
            {"next_url": NEXT_URL},
            NEXT_URL,
            f"  {NEXT_URL}  ",
        ],
    )
    def test_accepted_forms(self, value: str | dict[str, str]) -> None:
        """Test dicts and bare URLs are accepted."""
        assert Continuation.from_wire(value).next_url == NEXT_URL

    def test_instance_passes_through(self) -> None:
        """Test an existing continuation is returned as is."""
        continuation = Continuation(next_url=NEXT_URL)
        assert Continuation.from_wire(continuation) is continuation

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "{not json",
            "{}",
            '{"nextUrl": 5}',
            "/repositories/42/issues?page=2",
            {"nextUrl": "ftp://example.com/x"},
        ],
    )
    def test_invalid(self, value: object) -> None:
        """Test unusable continuations raise InvalidContinuationError."""
        with pytest.raises(InvalidContinuationError):
            Continuation.from_wire(value)  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        """Test continuations cannot be modified."""
        continuation = Continuation(next_url=NEXT_URL)
        with pytest.raises(ValidationError):
            continuation.next_url = "https://example.com"  # type: ignore[misc]


class TestRepositoryReference:
    """Test RepositoryReference model."""

    def test_full_name(self) -> None:
        """Test the owner/name form."""
        assert RepositoryReference(owner="acme", name="widgets").full_name == (
            "acme/widgets"
        )

    def test_hashable(self) -> None:
        """Test equal references are interchangeable as keys."""
        refs = {
            RepositoryReference(owner="acme", name="widgets"),
            RepositoryReference(owner="acme", name="widgets"),
        }
        assert len(refs) == 1


class TestIssueDraft:
    """Test IssueDraft model."""

    def test_defaults(self) -> None:
        """Test only the title is required."""
        draft = IssueDraft(title="Crash on start")
        assert draft.body is None
        assert draft.labels == []
        assert draft.assignees == []

    def test_empty_title(self) -> None:
        """Test an empty title is rejected."""
        with pytest.raises(ValidationError):
            IssueDraft(title="")


class TestIssueUpdate:
    """Test IssueUpdate model."""

    def test_changes_skip_unset_fields(self) -> None:
        """Test only provided fields are sent."""
        update = IssueUpdate(issue_number=3, state="closed", labels=["done"])
        assert update.changes() == {"state": "closed", "labels": ["done"]}

    def test_empty_lists_are_sent(self) -> None:
        """Test an empty list clears labels instead of being skipped."""
        update = IssueUpdate(issue_number=3, labels=[])
        assert update.changes() == {"labels": []}

    def test_no_changes(self) -> None:
        """Test an update with nothing set has no changes."""
        assert IssueUpdate(issue_number=3).changes() == {}

    def test_state_enum_value(self) -> None:
        """Test the state is sent as a plain string."""
        update = IssueUpdate(issue_number=1, state=StateFilter.OPEN)
        assert update.changes()["state"] == "open"

    def test_state_all_rejected(self) -> None:
        """Test 'all' is a filter, not an issue state."""
        with pytest.raises(ValidationError, match="open or closed"):
            IssueUpdate(issue_number=1, state="all")

    @pytest.mark.parametrize("number", [0, -1])
    def test_issue_number_positive(self, number: int) -> None:
        """Test issue numbers must be positive."""
        with pytest.raises(ValidationError):
            IssueUpdate(issue_number=number)
