"""GitHub client package for API interaction."""

from .client import GitHubClient
from .errors import (
    GitHubSyncError,
    InvalidContinuationError,
    InvalidFilterError,
    InvalidReferenceError,
    MalformedResponseError,
    RemoteRejectedError,
    TransientFetchError,
    UnsupportedResourceError,
)
from .fetcher import PageFetcher, PageResult
from .mapper import map_record, map_records
from .models import (
    Continuation,
    FilterSet,
    IssueDraft,
    IssueUpdate,
    RepositoryReference,
    ResourceKind,
    StateFilter,
)
from .repo_url import resolve_repo_url
from .request_builder import HttpRequestSpec, RequestBuilder
from .rows import IssueRow, PullRequestRow, RepoRow, Row

__all__ = [
    "Continuation",
    "FilterSet",
    "GitHubClient",
    "GitHubSyncError",
    "HttpRequestSpec",
    "InvalidContinuationError",
    "InvalidFilterError",
    "InvalidReferenceError",
    "IssueDraft",
    "IssueRow",
    "IssueUpdate",
    "MalformedResponseError",
    "PageFetcher",
    "PageResult",
    "PullRequestRow",
    "RemoteRejectedError",
    "RepoRow",
    "RepositoryReference",
    "RequestBuilder",
    "ResourceKind",
    "Row",
    "StateFilter",
    "TransientFetchError",
    "UnsupportedResourceError",
    "map_record",
    "map_records",
    "resolve_repo_url",
]
