from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from threading import Event

import requests

from .assembler import assemble_book
from .config import AppConfig
from .converter import PandocConverter
from .errors import BookError, GenerationError, NoContent, RequestCancelled
from .github import GitHubClient, order_markdown_files, select_markdown_files
from .logging import RunLogEntry, RunLogger, StageTimings
from .models import AssembledBook, BookResult, FetchedDocument, RemoteEntry, RepositoryReference
from .repository import parse_repository_url
from .utils import elapsed_ms, generate_run_id
from .workspace import Workspace, workspace

SessionFactory = Callable[[], requests.Session]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _RunContext:
    run_id: str
    reference: RepositoryReference
    cancellation: Event | None
    timings: StageTimings = field(default_factory=StageTimings)
    sources: list[str] = field(default_factory=list)


class BookService:
    def __init__(
        self,
        config: AppConfig,
        *,
        token: str | None = None,
        session_factory: SessionFactory | None = None,
        converter: PandocConverter | None = None,
    ) -> None:
        self._config = config
        self._token = token
        self._session_factory = session_factory or requests.Session
        self._converter = converter or PandocConverter(config.pandoc)
        self._run_logger = RunLogger(config.runtime.run_log)

    @property
    def config(self) -> AppConfig:
        return self._config

    def generate(
        self,
        repo_url: str | None,
        *,
        run_id: str | None = None,
        cancellation: Event | None = None,
    ) -> BookResult:
        run_id = run_id or generate_run_id("book")
        try:
            reference = parse_repository_url(repo_url)
        except BookError as exc:
            self._log_run(run_id, repo_url or "", exc.code, [], StageTimings(), 0)
            raise
        context = _RunContext(run_id=run_id, reference=reference, cancellation=cancellation)
        logger.info("Generating book %s for %s", run_id, reference.slug)

        try:
            content = self._run_pipeline(context)
        except BookError as exc:
            logger.info("Run %s failed: %s - %s", run_id, exc.code, exc.message)
            self._log_run(run_id, reference.slug, exc.code, context.sources, context.timings, 0)
            raise
        except Exception:
            logger.exception("Run %s failed unexpectedly", run_id)
            self._log_run(
                run_id, reference.slug, GenerationError.code, context.sources, context.timings, 0
            )
            raise

        self._log_run(run_id, reference.slug, None, context.sources, context.timings, len(content))
        logger.info(
            "Built %s from %d file(s) in %.0f ms",
            reference.book_filename,
            len(context.sources),
            context.timings.total_ms,
        )
        return BookResult(
            run_id=run_id,
            reference=reference,
            content=content,
            sources=list(context.sources),
            timings=context.timings,
        )

    def _run_pipeline(self, context: _RunContext) -> bytes:
        with workspace(self._config.runtime.temp_root) as work:
            with GitHubClient(
                self._config.github, self._token, self._session_factory()
            ) as client:
                self._ensure_not_cancelled(context, "listing")
                files = self._list_markdown(client, context)
                documents = self._fetch_documents(client, files, context)
            book = self._assemble(documents, context)
            self._ensure_not_cancelled(context, "conversion")
            return self._convert(book, work, context)

    def _list_markdown(self, client: GitHubClient, context: _RunContext) -> list[RemoteEntry]:
        start = time.perf_counter()
        entries = client.list_root(context.reference)
        files = select_markdown_files(entries)
        context.timings.list_ms = elapsed_ms(start)
        if not files:
            raise NoContent("No markdown (.md) files found in the repository root.")
        return files

    def _fetch_documents(
        self,
        client: GitHubClient,
        files: Sequence[RemoteEntry],
        context: _RunContext,
    ) -> list[FetchedDocument]:
        start = time.perf_counter()
        documents: list[FetchedDocument] = []
        for entry in order_markdown_files(files):
            if not entry.content_url:
                continue
            self._ensure_not_cancelled(context, f"download of {entry.name}")
            documents.append(client.fetch_document(entry))
            context.sources.append(entry.name)
        context.timings.fetch_ms = elapsed_ms(start)
        if not documents:
            raise NoContent("No downloadable markdown files found.")
        return documents

    def _assemble(self, documents: Sequence[FetchedDocument], context: _RunContext) -> AssembledBook:
        start = time.perf_counter()
        book = assemble_book(documents)
        context.timings.assemble_ms = elapsed_ms(start)
        return book

    def _convert(self, book: AssembledBook, work: Workspace, context: _RunContext) -> bytes:
        start = time.perf_counter()
        content = self._converter.convert(book, work)
        context.timings.convert_ms = elapsed_ms(start)
        return content

    def _ensure_not_cancelled(self, context: _RunContext, stage: str) -> None:
        if context.cancellation is not None and context.cancellation.is_set():
            raise RequestCancelled(f"Request canceled before {stage}")

    def _log_run(
        self,
        run_id: str,
        repository: str,
        error_code: str | None,
        sources: Sequence[str],
        timings: StageTimings,
        size_bytes: int,
    ) -> None:
        self._run_logger.append(
            RunLogEntry(
                run_id=run_id,
                repository=repository,
                status="failure" if error_code else "success",
                error_code=error_code,
                sources=list(sources),
                timings=timings,
                size_bytes=size_bytes,
            )
        )


__all__ = ["BookService", "SessionFactory"]
