"""Continuation driven sync steps and the aggregations built on them."""

from .autocomplete import AutocompleteEntry, RepoAutocomplete, search_repos
from .retry import RetryPolicy
from .step import (
    SyncParams,
    SyncResult,
    SyncStep,
    build_sync_step,
    iterate_sync,
    sync_issues,
    sync_pull_requests,
    sync_repos,
    sync_table,
)

__all__ = [
    "AutocompleteEntry",
    "RepoAutocomplete",
    "RetryPolicy",
    "SyncParams",
    "SyncResult",
    "SyncStep",
    "build_sync_step",
    "iterate_sync",
    "sync_issues",
    "sync_pull_requests",
    "sync_repos",
    "search_repos",
    "sync_table",
]
