"""Repository autocomplete over every page of the user's repos."""

import logging
from typing import cast

import httpx
from pydantic import BaseModel, Field

from ..config import Settings
from ..github_client.errors import MalformedResponseError
from ..github_client.fetcher import PageFetcher
from ..github_client.mapper import map_records
from ..github_client.models import Continuation, ResourceKind
from ..github_client.request_builder import RequestBuilder
from ..github_client.rows import RepoRow

logger = logging.getLogger(__name__)


class AutocompleteEntry(BaseModel):
    """One selectable search result."""

    display: str = Field(..., description="Label shown to the user (repo name)")
    value: str = Field(..., description="Value used on selection (repo URL)")


def _page_key(url: httpx.URL) -> tuple[str, str, frozenset[tuple[str, str]]]:
    """Identity of a page URL, independent of query parameter order."""
    return url.host, url.path, frozenset(url.params.multi_items())


class RepoAutocomplete:
    """Searches the repositories the current user has access to.

    Unlike a sync table this loops over all pages inside one call, in page
    order, before filtering. A failing page fails the whole search.
    """

    def __init__(self, fetcher: PageFetcher, builder: RequestBuilder):
        self.fetcher = fetcher
        self.builder = builder

    def fetch_all(self) -> list[RepoRow]:
        """Fetch every page of ``/user/repos``.

        Raises:
            MalformedResponseError: If the service links back to a page
                that was already fetched
        """
        rows: list[RepoRow] = []
        seen: set[tuple[str, str, frozenset[tuple[str, str]]]] = set()
        continuation: Continuation | None = None
        while True:
            spec = self.builder.build(ResourceKind.REPOS, None, None, continuation)
            seen.add(_page_key(httpx.URL(spec.url, params=spec.params or None)))
            page = self.fetcher.fetch(spec)
            page_rows = map_records(ResourceKind.REPOS, page.records)
            rows.extend(cast(list[RepoRow], page_rows))
            continuation = page.continuation
            if continuation is None:
                break
            if _page_key(httpx.URL(continuation.next_url)) in seen:
                raise MalformedResponseError(
                    f"Pagination loops back to {continuation.next_url}"
                )
        logger.debug("Loaded %d repositories for autocomplete", len(rows))
        return rows

    def search(self, text: str | None) -> list[AutocompleteEntry]:
        """Case-insensitive substring search on repository names.

        An empty search matches every repository. The service's ordering
        is preserved.
        """
        needle = (text or "").strip().lower()
        return [
            AutocompleteEntry(display=row.name, value=row.url)
            for row in self.fetch_all()
            if needle in row.name.lower()
        ]


def search_repos(
    text: str | None, settings: Settings | None = None
) -> list[AutocompleteEntry]:
    """Run an autocomplete search with a fresh fetcher."""
    settings = settings or Settings.from_env()
    builder = RequestBuilder(
        api_url=settings.api_url, token=settings.token, per_page=settings.per_page
    )
    with PageFetcher(timeout=settings.timeout) as fetcher:
        return RepoAutocomplete(fetcher, builder).search(text)
