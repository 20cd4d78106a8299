"""One invocation of a paginated sync table.

A logical sync is a chain of independent ``SyncStep.step`` calls. The
first call resolves the repository and applies the filters; every later
call is driven only by the continuation the previous call returned. No
state is kept between calls, so each one may run in a different process.
"""

import logging
from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, ValidationError

from ..config import Settings
from ..github_client.errors import InvalidFilterError, UnsupportedResourceError
from ..github_client.fetcher import PageFetcher
from ..github_client.mapper import map_records
from ..github_client.models import Continuation, FilterSet, ResourceKind
from ..github_client.repo_url import DEFAULT_HOST, resolve_repo_url
from ..github_client.request_builder import HttpRequestSpec, RequestBuilder
from ..github_client.rows import Row
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

ContinuationInput = Continuation | str | dict[str, Any] | None


class SyncParams(BaseModel):
    """Parameters of a sync table, as entered by the user."""

    model_config = ConfigDict(populate_by_name=True)

    repo_url: str | None = Field(
        None, alias="repoUrl", description="Repository URL (pulls and issues)"
    )
    base: str | None = Field(None, description="Base branch filter")
    state: str | None = Field(None, description="open, closed or all")
    labels: list[str] | None = Field(None, description="Label filter (issues)")

    def filters(self) -> FilterSet:
        return FilterSet.build(base=self.base, state=self.state, labels=self.labels)


class SyncResult(BaseModel):
    """Rows of one page and the continuation for the next step."""

    rows: list[SerializeAsAny[Row]] = Field(default_factory=list)
    continuation: Continuation | None = None

    def to_host(self) -> dict[str, Any]:
        """Shape handed back to the host scheduler."""
        result: dict[str, Any] = {"result": [row.to_record() for row in self.rows]}
        if self.continuation is not None:
            result["continuation"] = self.continuation.model_dump(by_alias=True)
        return result


class SyncStep:
    """Fetches and maps one page of a sync table."""

    def __init__(
        self,
        kind: ResourceKind,
        fetcher: PageFetcher,
        builder: RequestBuilder,
        host: str = DEFAULT_HOST,
    ):
        try:
            self.kind = ResourceKind(kind)
        except ValueError:
            raise UnsupportedResourceError(kind) from None
        self.fetcher = fetcher
        self.builder = builder
        self.host = host

    def request_for(
        self,
        params: SyncParams | dict[str, Any],
        continuation: ContinuationInput = None,
    ) -> HttpRequestSpec:
        """Build the request a step would send, without sending it."""
        if continuation is not None:
            # Filters and repository are already encoded in the next-page URL
            return self.builder.build(
                self.kind, None, None, Continuation.from_wire(continuation)
            )

        try:
            params = SyncParams.model_validate(params)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise InvalidFilterError(
                f"Invalid sync parameter {field!r}: {error['msg']}"
            ) from e
        repo = None
        if self.kind is not ResourceKind.REPOS:
            repo = resolve_repo_url(params.repo_url or "", host=self.host)
        return self.builder.build(self.kind, repo, params.filters())

    def step(
        self,
        params: SyncParams | dict[str, Any],
        continuation: ContinuationInput = None,
    ) -> SyncResult:
        """Run one step of the sync.

        Args:
            params: Sync table parameters; ignored when a continuation is given
            continuation: Value returned by the previous step, or None for
                the first step

        Returns:
            SyncResult with this page's rows; ``continuation`` is None on
            the last page

        Raises:
            InvalidReferenceError: If the repository URL is invalid
            InvalidFilterError: If a filter value is invalid
            InvalidContinuationError: If the continuation cannot be parsed
            TransientFetchError: On network failures
            RemoteRejectedError: If GitHub rejects the request
            MalformedResponseError: If GitHub returns unexpected data
        """
        spec = self.request_for(params, continuation)
        page = self.fetcher.fetch(spec)
        rows = map_records(self.kind, page.records)
        logger.info(
            "Synced %d %s rows (last page: %s)",
            len(rows),
            self.kind.value,
            page.is_last,
        )
        return SyncResult(rows=rows, continuation=page.continuation)


def build_sync_step(
    kind: ResourceKind, settings: Settings, fetcher: PageFetcher | None = None
) -> SyncStep:
    """Create a SyncStep configured from settings."""
    builder = RequestBuilder(
        api_url=settings.api_url, token=settings.token, per_page=settings.per_page
    )
    return SyncStep(
        kind,
        fetcher or PageFetcher(timeout=settings.timeout),
        builder,
        host=settings.host,
    )


def sync_table(
    kind: ResourceKind,
    params: SyncParams | dict[str, Any],
    continuation: ContinuationInput = None,
    settings: Settings | None = None,
) -> SyncResult:
    """Run a single step with a fresh fetcher, as a host invocation would."""
    settings = settings or Settings.from_env()
    with PageFetcher(timeout=settings.timeout) as fetcher:
        return build_sync_step(kind, settings, fetcher).step(params, continuation)


def sync_pull_requests(
    params: SyncParams | dict[str, Any],
    continuation: ContinuationInput = None,
    settings: Settings | None = None,
) -> SyncResult:
    return sync_table(ResourceKind.PULL_REQUESTS, params, continuation, settings)


def sync_issues(
    params: SyncParams | dict[str, Any],
    continuation: ContinuationInput = None,
    settings: Settings | None = None,
) -> SyncResult:
    return sync_table(ResourceKind.ISSUES, params, continuation, settings)


def sync_repos(
    params: SyncParams | dict[str, Any] | None = None,
    continuation: ContinuationInput = None,
    settings: Settings | None = None,
) -> SyncResult:
    return sync_table(ResourceKind.REPOS, params or {}, continuation, settings)


def iterate_sync(
    step: SyncStep,
    params: SyncParams | dict[str, Any],
    continuation: ContinuationInput = None,
    retry: RetryPolicy | None = None,
) -> Iterator[SyncResult]:
    """Chain steps until the last page, playing the host scheduler's role.

    Each step receives only the previous continuation. With a retry policy
    a failed step is retried with the same continuation.
    """
    while True:
        if retry is not None:
            result = retry.run(step.step, params, continuation)
        else:
            result = step.step(params, continuation)
        yield result
        if result.continuation is None:
            return
        continuation = result.continuation
