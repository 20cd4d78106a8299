"""Outbound request construction for the list endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .. import __version__
from .errors import InvalidReferenceError, UnsupportedResourceError
from .models import (
    Continuation,
    FilterSet,
    RepositoryReference,
    ResourceKind,
    StateFilter,
)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PER_PAGE = 100
API_VERSION = "2022-11-28"


class HttpRequestSpec(BaseModel):
    """Everything PageFetcher needs to issue one request."""

    model_config = ConfigDict(frozen=True)

    method: str = "GET"
    url: str
    params: dict[str, str] = Field(default_factory=dict)
    headers: dict[str, str] = Field(default_factory=dict)
    json_body: dict[str, Any] | None = None


class RequestBuilder:
    """Builds list requests for repos, pull requests and issues."""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: str | None = None,
        per_page: int = DEFAULT_PER_PAGE,
        user_agent: str | None = None,
    ):
        """Initialize the builder.

        Args:
            api_url: Base URL of the REST API
            token: GitHub token sent as a bearer token, if any
            per_page: Page size requested on the first page (max 100)
            user_agent: User-Agent header value
        """
        self.api_url = api_url.rstrip("/")
        self.token = token
        self.per_page = per_page
        self.user_agent = user_agent or f"github-sync-tables/{__version__}"

    def headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": self.user_agent,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def build(
        self,
        kind: ResourceKind,
        repo: RepositoryReference | None,
        filters: FilterSet | None = None,
        continuation: Continuation | None = None,
    ) -> HttpRequestSpec:
        """Build the request for one page.

        With a continuation the next-page URL is used verbatim: it already
        carries every filter of the first request, so ``repo`` and
        ``filters`` are ignored.

        Raises:
            UnsupportedResourceError: If ``kind`` is not a known resource
            InvalidReferenceError: If a repo scoped kind has no repository
        """
        kind = self._check_kind(kind)

        if continuation is not None:
            return HttpRequestSpec(url=continuation.next_url, headers=self.headers())

        filters = filters or FilterSet()
        params = {"per_page": str(self.per_page)}

        if kind is ResourceKind.REPOS:
            params["sort"] = "full_name"
            return HttpRequestSpec(
                url=f"{self.api_url}/user/repos",
                params=params,
                headers=self.headers(),
            )

        if repo is None:
            raise InvalidReferenceError(
                None, f"a repository is required for {kind.value}"
            )

        state = filters.state or StateFilter.OPEN
        params["state"] = state.value

        if kind is ResourceKind.PULL_REQUESTS:
            if filters.base:
                params["base"] = filters.base
            path = "pulls"
        else:
            if filters.labels:
                params["labels"] = ",".join(filters.labels)
            path = "issues"

        return HttpRequestSpec(
            url=f"{self.api_url}/repos/{repo.owner}/{repo.name}/{path}",
            params=params,
            headers=self.headers(),
        )

    @staticmethod
    def _check_kind(kind: Any) -> ResourceKind:
        try:
            return ResourceKind(kind)
        except ValueError:
            raise UnsupportedResourceError(kind) from None
