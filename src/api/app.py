from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bookfromhub import __version__
from bookfromhub.config import AppConfig, load_config
from bookfromhub.core import BookService
from bookfromhub.errors import BookError, InvalidInput
from bookfromhub.settings import Settings, get_settings

from .routers import generate, health

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(status_code: int, title: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"type": "about:blank", "title": title, "status": status_code, "detail": detail},
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def _book_error_handler(request: Request, exc: BookError) -> JSONResponse:
    return problem_response(exc.status_code, exc.code, exc.message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return problem_response(
        InvalidInput.status_code,
        InvalidInput.code,
        "Request body must be a JSON object with a string repoUrl field.",
    )


def create_app(
    config: AppConfig | None = None,
    *,
    service: BookService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    config = config or load_config(settings.config_path)

    app = FastAPI(title="BookFromHub", version=__version__)
    app.state.config = config
    app.state.service = service or BookService(config, token=settings.github_token)

    app.add_exception_handler(BookError, _book_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(health.router)
    app.include_router(generate.router)
    return app


__all__ = ["create_app", "problem_response"]
