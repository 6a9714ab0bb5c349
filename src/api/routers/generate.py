from __future__ import annotations

import logging
from threading import Event

from fastapi import APIRouter, Depends, Request, Response
from pydantic import BaseModel, ConfigDict, Field

from api.dependencies import get_service
from api.utils import cancel_on_disconnect, run_sync
from bookfromhub.core import BookService
from bookfromhub.errors import BookError, GenerationError

router = APIRouter(tags=["books"])

logger = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    repo_url: str | None = Field(default=None, alias="repoUrl")


@router.post(
    "/generate",
    summary="Build a PDF book from the Markdown files of a repository root",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
async def generate_book(
    payload: GenerateRequest,
    request: Request,
    service: BookService = Depends(get_service),
) -> Response:
    cancellation = Event()
    try:
        async with cancel_on_disconnect(request, cancellation):
            result = await run_sync(service.generate, payload.repo_url, cancellation=cancellation)
    except BookError:
        raise
    except Exception as exc:
        logger.exception("Unexpected failure while generating a book")
        raise GenerationError(f"PDF generation failed: {exc}") from exc
    return Response(
        content=result.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


__all__ = ["router", "GenerateRequest"]
