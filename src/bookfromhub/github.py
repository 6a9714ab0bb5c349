"""Remote contents API access."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import requests
from pydantic import TypeAdapter, ValidationError

from .config import GitHubConfig
from .errors import RateLimited, UpstreamError, UpstreamParseError
from .models import FetchedDocument, RemoteEntry, RepositoryReference
from .ratelimit import detect_rate_limit

logger = logging.getLogger(__name__)

_LISTING = TypeAdapter(list[RemoteEntry])


def select_markdown_files(entries: Iterable[RemoteEntry]) -> list[RemoteEntry]:
    return [entry for entry in entries if entry.is_markdown]


def order_markdown_files(files: Iterable[RemoteEntry]) -> list[RemoteEntry]:
    return sorted(files, key=lambda entry: entry.name.casefold())


def github_headers(config: GitHubConfig, token: str | None) -> dict[str, str]:
    headers = {"User-Agent": config.user_agent, "Accept": config.accept}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class GitHubClient:
    """Lists a repository root and downloads raw files over one session."""

    def __init__(
        self,
        config: GitHubConfig,
        token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._session.headers.update(github_headers(config, token))

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def contents_url(self, reference: RepositoryReference) -> str:
        return f"{self._config.api_root}/repos/{reference.owner}/{reference.project}/contents"

    def list_root(self, reference: RepositoryReference) -> list[RemoteEntry]:
        url = self.contents_url(reference)
        try:
            response = self._session.get(url, timeout=self._config.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(f"Failed to fetch repository contents: {exc}") from exc

        if not response.ok:
            message = detect_rate_limit(response.status_code, response.headers)
            if message is not None:
                logger.warning("Rate limited while listing %s", reference.slug)
                raise RateLimited(message)
            raise UpstreamError(
                f"GitHub API error: {response.status_code} {response.reason or ''}".rstrip(),
                upstream_status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamParseError(f"Repository listing is not valid JSON: {exc}") from exc
        try:
            entries = _LISTING.validate_python(payload)
        except ValidationError as exc:
            raise UpstreamParseError(
                f"Unexpected repository listing shape: {exc.error_count()} validation error(s)"
            ) from exc
        logger.info("Listed %d entries in %s", len(entries), reference.slug)
        return entries

    def fetch_document(self, entry: RemoteEntry) -> FetchedDocument:
        if not entry.content_url:
            raise UpstreamError(f"Failed to download {entry.name}: no download URL")
        try:
            response = self._session.get(entry.content_url, timeout=self._config.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            upstream = exc.response.status_code if exc.response is not None else None
            raise UpstreamError(
                f"Failed to download {entry.name}: {exc}", upstream_status=upstream
            ) from exc
        logger.info("Downloaded %s (%d bytes)", entry.name, len(response.content))
        body = response.content.decode("utf-8", errors="replace")
        return FetchedDocument(source_name=entry.name, body=body)


__all__ = [
    "GitHubClient",
    "github_headers",
    "select_markdown_files",
    "order_markdown_files",
]
