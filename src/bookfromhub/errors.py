"""Typed failures raised by the book generation pipeline.

Every error carries a stable ``code`` and the HTTP status the API layer
answers with, so callers never have to inspect message text.
"""

from __future__ import annotations


class BookError(RuntimeError):
    code = "BOOK_ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInput(BookError):
    code = "INVALID_INPUT"
    status_code = 400


class NoContent(BookError):
    code = "NO_CONTENT"
    status_code = 400


class RateLimited(BookError):
    code = "RATE_LIMITED"
    status_code = 429


class UpstreamError(BookError):
    code = "UPSTREAM_ERROR"
    status_code = 500

    def __init__(self, message: str, *, upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class UpstreamParseError(BookError):
    code = "UPSTREAM_PARSE_ERROR"
    status_code = 500


class ConversionError(BookError):
    code = "CONVERSION_FAILED"
    status_code = 500


class WorkspaceError(BookError):
    code = "WORKSPACE_ERROR"
    status_code = 500


class GenerationError(BookError):
    code = "GENERATION_FAILED"
    status_code = 500


class RequestCancelled(BookError):
    code = "CANCELED"
    # nginx convention for "client closed request"
    status_code = 499


__all__ = [
    "BookError",
    "InvalidInput",
    "NoContent",
    "RateLimited",
    "UpstreamError",
    "UpstreamParseError",
    "ConversionError",
    "WorkspaceError",
    "GenerationError",
    "RequestCancelled",
]
