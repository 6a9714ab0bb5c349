"""Repository URL parsing."""

from __future__ import annotations

from urllib.parse import urlsplit

from .errors import InvalidInput
from .models import RepositoryReference

INVALID_URL_MESSAGE = "Invalid GitHub repository URL."


def parse_repository_url(raw: str | None) -> RepositoryReference:
    """Extract ``owner`` and ``project`` from the first two path segments of *raw*.

    Any absolute URL is accepted; scheme and host are not checked.
    """

    if raw is None or not raw.strip():
        raise InvalidInput("repoUrl is required.")
    candidate = raw.strip().rstrip("/")
    if any(char.isspace() for char in candidate):
        raise InvalidInput(INVALID_URL_MESSAGE)
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidInput(INVALID_URL_MESSAGE) from exc
    if not parts.scheme or not parts.netloc or port == 0:
        raise InvalidInput(INVALID_URL_MESSAGE)

    segments = [segment for segment in parts.path.strip("/").split("/") if segment]
    if len(segments) < 2:
        raise InvalidInput(INVALID_URL_MESSAGE)
    return RepositoryReference(owner=segments[0], project=segments[1])


__all__ = ["parse_repository_url", "INVALID_URL_MESSAGE"]
