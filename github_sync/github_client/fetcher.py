"""Single-page HTTP fetching with Link header pagination."""

import logging
import time
from typing import Any

import httpx
from pydantic import BaseModel, Field, ValidationError

from .errors import (
    MalformedResponseError,
    RemoteRejectedError,
    TransientFetchError,
)
from .models import Continuation
from .request_builder import HttpRequestSpec

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class PageResult(BaseModel):
    """One page of raw records plus where to resume."""

    records: list[dict[str, Any]] = Field(default_factory=list)
    continuation: Continuation | None = None

    @property
    def is_last(self) -> bool:
        return self.continuation is None


class PageFetcher:
    """Executes exactly one request per ``fetch`` call.

    There is no retry in here. Rate limits and transport errors are
    reported as typed errors and the caller decides what to do.
    """

    def __init__(
        self, client: httpx.Client | None = None, timeout: float = DEFAULT_TIMEOUT
    ):
        """Initialize the fetcher.

        Args:
            client: httpx client to send requests with. A new one is created
                (and owned) if not given.
            timeout: Request timeout in seconds for an owned client
        """
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch(self, spec: HttpRequestSpec) -> PageResult:
        """Fetch one page.

        Args:
            spec: Request built by RequestBuilder

        Returns:
            PageResult with the decoded records and the next-page continuation

        Raises:
            TransientFetchError: On network level failures
            RemoteRejectedError: On 4xx/5xx responses
            MalformedResponseError: If the body is not a JSON list of objects
        """
        response = self._send(spec)

        if response.status_code >= 400:
            error = _rejection(response)
            logger.warning(
                "GitHub rejected %s %s: %s (rate limited: %s)",
                spec.method,
                spec.url,
                error.status,
                error.is_rate_limited,
            )
            raise error

        records = _decode_records(response)
        continuation = _next_page(response)
        logger.debug(
            "Fetched %d records from %s (more pages: %s)",
            len(records),
            response.url,
            continuation is not None,
        )
        return PageResult(records=records, continuation=continuation)

    def _send(self, spec: HttpRequestSpec) -> httpx.Response:
        logger.debug("%s %s params=%s", spec.method, spec.url, spec.params)
        try:
            return self.client.request(
                spec.method,
                spec.url,
                params=spec.params or None,
                headers=spec.headers,
                json=spec.json_body,
            )
        except httpx.TransportError as e:
            raise TransientFetchError(spec.url, str(e) or type(e).__name__) from e


def _next_page(response: httpx.Response) -> Continuation | None:
    next_link = response.links.get("next", {}).get("url")
    if not next_link:
        return None
    # Relative links resolve against the page that carried them
    next_url = str(response.url.join(next_link))
    try:
        return Continuation(next_url=next_url)
    except ValidationError as e:
        raise MalformedResponseError(
            f"Unusable next page link {next_link!r}", field="Link"
        ) from e


def _decode_records(response: httpx.Response) -> list[dict[str, Any]]:
    if not response.content.strip():
        return []
    try:
        data = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"Response body is not JSON: {e}") from e
    if not isinstance(data, list):
        raise MalformedResponseError(
            f"Expected a JSON list, got {type(data).__name__}"
        )
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedResponseError(
                f"Expected an object at position {index}, got {type(item).__name__}"
            )
    return data


def _rejection(response: httpx.Response) -> RemoteRejectedError:
    headers = response.headers
    retry_after = _retry_after(headers)
    rate_limited = response.status_code == 429 or (
        response.status_code == 403
        and (headers.get("x-ratelimit-remaining") == "0" or "retry-after" in headers)
    )
    return RemoteRejectedError(
        status=response.status_code,
        body=response.text,
        url=str(response.request.url),
        retry_after=retry_after,
        rate_limited=rate_limited,
    )


def _retry_after(headers: httpx.Headers) -> float | None:
    value = headers.get("retry-after")
    if value is not None:
        try:
            return max(float(value), 0.0)
        except ValueError:
            return None
    reset = headers.get("x-ratelimit-reset")
    if reset is not None and headers.get("x-ratelimit-remaining") == "0":
        try:
            return max(float(reset) - time.time(), 0.0)
        except ValueError:
            return None
    return None
