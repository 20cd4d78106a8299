"""Tests for mapping raw records to rows."""

from datetime import datetime, timezone

import pytest
from factories import make_issue, make_pull, make_repo, make_user

from github_sync.github_client.errors import (
    MalformedResponseError,
    UnsupportedResourceError,
)
from github_sync.github_client.mapper import map_record, map_records
from github_sync.github_client.models import ResourceKind
from github_sync.github_client.rows import IssueRow, PullRequestRow, RepoRow


class TestPullRequestMapping:
    """Test pull request rows."""

    def test_full_record(self) -> None:
        """Test nested structures are flattened into row fields."""
        record = make_pull(
            7,
            assignees=[make_user("alice", 10), make_user("bob", 11)],
            requested_reviewers=[make_user("carol", 12)],
            labels=[{"id": 1, "name": "bug", "color": "ff0000"}],
            milestone={"title": "v1.0", "number": 1},
            merged_at="2024-02-03T12:00:00Z",
        )

        row = map_record(ResourceKind.PULL_REQUESTS, record)

        assert isinstance(row, PullRequestRow)
        assert row.number == 7
        assert row.id == 2007
        assert row.url == "https://github.com/acme/widgets/pull/7"
        assert row.author == "hubot"
        assert row.author_url == "https://github.com/hubot"
        assert row.assignees == ["alice", "bob"]
        assert row.reviewers == ["carol"]
        assert row.labels == ["bug"]
        assert row.milestone == "v1.0"
        assert row.base_branch == "main"
        assert row.head_branch == "feature-7"
        assert row.head_sha == "bbb222"
        assert row.merged_at == datetime(2024, 2, 3, 12, tzinfo=timezone.utc)

    def test_absent_optional_fields(self) -> None:
        """Test missing nested objects map to empty fields."""
        record = {
            "id": 5,
            "number": 3,
            "html_url": "https://github.com/acme/widgets/pull/3",
            "title": "Minimal",
        }

        row = map_record(ResourceKind.PULL_REQUESTS, record)

        assert row == PullRequestRow(
            id=5,
            number=3,
            url="https://github.com/acme/widgets/pull/3",
            title="Minimal",
        )
        assert row.assignees == []
        assert row.base_branch is None
        assert row.author is None

    def test_null_optional_fields(self) -> None:
        """Test explicit nulls are tolerated like missing fields."""
        record = make_pull(
            4, user=None, labels=None, assignees=None, base=None, head=None
        )

        row = map_record(ResourceKind.PULL_REQUESTS, record)

        assert row.author is None
        assert row.labels == []
        assert row.head_branch is None

    def test_single_assignee_fallback(self) -> None:
        """Test the singular assignee is used when the list is missing."""
        record = make_pull(9, assignee=make_user("dave"))
        del record["assignees"]

        row = map_record(ResourceKind.PULL_REQUESTS, record)

        assert row.assignees == ["dave"]


class TestIssueMapping:
    """Test issue rows."""

    def test_issue(self) -> None:
        """Test issue fields and identifiers are copied verbatim."""
        record = make_issue(
            12,
            labels=[{"name": "bug"}, {"name": "ui", "color": "00ff00"}],
            assignee=make_user("alice"),
            assignees=[make_user("alice")],
            comments=4,
        )

        row = map_record(ResourceKind.ISSUES, record)

        assert isinstance(row, IssueRow)
        assert (row.id, row.number) == (1012, 12)
        assert row.url == "https://github.com/acme/widgets/issues/12"
        assert row.labels == ["bug", "ui"]
        assert row.assignees == ["alice"]
        assert row.comments == 4
        assert not row.is_pull_request

    def test_pull_request_listed_as_issue(self) -> None:
        """Test pull requests returned by the issues endpoint are kept and flagged."""
        record = make_issue(13, pull_request={"url": "https://api.github.com/x"})

        row = map_record(ResourceKind.ISSUES, record)

        assert row.is_pull_request

    def test_extra_fields_ignored(self) -> None:
        """Test fields outside the declared subset are ignored."""
        record = make_issue(1, reactions={"+1": 3}, performed_via_github_app=None)
        assert map_record(ResourceKind.ISSUES, record).number == 1

    def test_to_record(self) -> None:
        """Test rows serialize to plain JSON-compatible dicts."""
        record = map_record(ResourceKind.ISSUES, make_issue(2)).to_record()

        assert record["number"] == 2
        assert record["created_at"] == "2024-01-01T10:00:00Z"
        assert record["labels"] == []


class TestRepoMapping:
    """Test repository rows."""

    def test_repo(self) -> None:
        """Test repository fields."""
        row = map_record(ResourceKind.REPOS, make_repo("widgets", repo_id=42))

        assert isinstance(row, RepoRow)
        assert row.id == 42
        assert row.name == "widgets"
        assert row.full_name == "acme/widgets"
        assert row.url == "https://github.com/acme/widgets"
        assert row.owner == "acme"
        assert row.stars == 3


class TestMapperContract:
    """Test properties shared by all resources."""

    @pytest.mark.parametrize(
        ("kind", "record"),
        [
            (ResourceKind.ISSUES, make_issue(1)),
            (ResourceKind.PULL_REQUESTS, make_pull(1)),
            (ResourceKind.REPOS, make_repo("widgets")),
        ],
    )
    def test_idempotent(self, kind: ResourceKind, record: dict) -> None:
        """Test mapping the same record twice yields identical rows."""
        assert map_record(kind, record) == map_record(kind, record)

    def test_record_not_mutated(self) -> None:
        """Test the raw record is left untouched."""
        record = make_pull(1, labels=[{"name": "bug"}])
        before = repr(record)
        map_record(ResourceKind.PULL_REQUESTS, record)
        assert repr(record) == before

    @pytest.mark.parametrize("field", ["number", "id", "html_url"])
    def test_missing_identifier(self, field: str) -> None:
        """Test a record without an identifying field is malformed, not dropped."""
        record = make_issue(1)
        del record[field]

        with pytest.raises(MalformedResponseError) as e:
            map_record(ResourceKind.ISSUES, record)
        assert e.value.field == field

    def test_invalid_identifier_type(self) -> None:
        """Test a non-numeric number is malformed."""
        record = make_pull(1)
        record["number"] = "abc"

        with pytest.raises(MalformedResponseError) as e:
            map_record(ResourceKind.PULL_REQUESTS, record)
        assert e.value.field == "number"

    def test_repo_without_full_name(self) -> None:
        """Test repos require their full name."""
        record = make_repo("widgets")
        del record["full_name"]

        with pytest.raises(MalformedResponseError) as e:
            map_record(ResourceKind.REPOS, record)
        assert e.value.field == "full_name"

    def test_nested_field_path_reported(self) -> None:
        """Test an invalid nested object names the offending path."""
        record = make_issue(1, labels=[{"color": "fff"}])

        with pytest.raises(MalformedResponseError) as e:
            map_record(ResourceKind.ISSUES, record)
        assert e.value.field == "labels.0.name"

    def test_unsupported_kind(self) -> None:
        """Test unknown kinds fail."""
        with pytest.raises(UnsupportedResourceError):
            map_record("commits", make_issue(1))  # type: ignore[arg-type]

    def test_map_records_keeps_order(self) -> None:
        """Test page order is preserved."""
        rows = map_records(ResourceKind.ISSUES, [make_issue(3), make_issue(1)])
        assert [row.number for row in rows] == [3, 1]

    def test_map_records_fails_whole_page(self) -> None:
        """Test one bad record fails the page instead of being skipped."""
        bad = make_issue(2)
        del bad["number"]

        with pytest.raises(MalformedResponseError):
            map_records(ResourceKind.ISSUES, [make_issue(1), bad])
