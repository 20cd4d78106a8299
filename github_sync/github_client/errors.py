"""Exception types raised by the sync engine.

Every failure aborts the current step with one of these types. Nothing in
the core catches them to keep going; retries are decided by the caller
(see ``github_sync.sync.retry``).
"""

RATE_LIMIT_STATUSES = frozenset({403, 429})


class GitHubSyncError(Exception):
    """Base class for all sync engine errors."""


class InvalidReferenceError(GitHubSyncError):
    """Raised when a repository URL cannot be resolved to owner/name."""

    def __init__(self, value: str | None, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid repository URL {value!r}: {reason}")


class InvalidFilterError(GitHubSyncError):
    """Raised when a filter parameter has an unsupported value."""


class InvalidContinuationError(GitHubSyncError):
    """Raised when a continuation handed back by the host cannot be parsed."""


class UnsupportedResourceError(GitHubSyncError):
    """Raised for a resource kind the engine does not know how to sync."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(f"Unsupported resource kind: {kind!r}")


class TransientFetchError(GitHubSyncError):
    """Network-level failure. The same step may be retried unchanged."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Request to {url} failed: {message}")


class RemoteRejectedError(GitHubSyncError):
    """The service answered with a 4xx/5xx status."""

    def __init__(
        self,
        status: int,
        body: str,
        url: str | None = None,
        retry_after: float | None = None,
        rate_limited: bool | None = None,
    ):
        self.status = status
        self.body = body
        self.url = url
        self.retry_after = retry_after
        if rate_limited is None:
            rate_limited = status == 429
        self.rate_limited = rate_limited
        target = f" for {url}" if url else ""
        super().__init__(f"GitHub rejected the request{target} ({status}): {body}")

    @property
    def is_rate_limited(self) -> bool:
        """True when a retry policy may back off and try again."""
        return self.rate_limited and self.status in RATE_LIMIT_STATUSES


class MalformedResponseError(GitHubSyncError):
    """The service returned data outside of the expected contract."""

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        detail = f" (field: {field})" if field else ""
        super().__init__(f"{message}{detail}")
