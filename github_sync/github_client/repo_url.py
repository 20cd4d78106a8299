"""Repository URL parsing."""

import re
from urllib.parse import urlparse

from .errors import InvalidReferenceError
from .models import RepositoryReference

DEFAULT_HOST = "github.com"

# Owner and repository names GitHub accepts in a URL path
SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def resolve_repo_url(url: str, host: str = DEFAULT_HOST) -> RepositoryReference:
    """Parse a repository URL into owner and name.

    Args:
        url: URL of the form ``https://<host>/<owner>/<name>``. A trailing
            slash, a trailing ``.git``, ``http`` scheme and a ``www.`` host
            prefix are accepted.
        host: Expected host name

    Returns:
        RepositoryReference for the URL

    Raises:
        InvalidReferenceError: If the URL does not point at a repository

    Example:
        >>> resolve_repo_url("https://github.com/acme/widgets/")
        RepositoryReference(owner='acme', name='widgets')
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidReferenceError(url, "URL is empty")

    parsed = urlparse(url.strip())
    if parsed.scheme not in ("http", "https"):
        raise InvalidReferenceError(url, "expected an http or https URL")

    netloc = (parsed.hostname or "").lower()
    if netloc.startswith("www."):
        netloc = netloc[4:]
    if netloc != host.lower():
        raise InvalidReferenceError(url, f"expected host {host}")

    path = parsed.path
    if path.endswith("/"):
        path = path[:-1]
    segments = path.split("/")[1:] if path else []
    if len(segments) != 2:
        raise InvalidReferenceError(url, "expected /<owner>/<name>")

    owner, name = segments
    if name.endswith(".git"):
        name = name[: -len(".git")]
    for label, segment in (("owner", owner), ("name", name)):
        if not segment:
            raise InvalidReferenceError(url, f"repository {label} is empty")
        if not SEGMENT_PATTERN.match(segment):
            raise InvalidReferenceError(
                url, f"repository {label} {segment!r} has invalid characters"
            )

    return RepositoryReference(owner=owner, name=name)
