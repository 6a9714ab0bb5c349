from __future__ import annotations

from fastapi import APIRouter

from bookfromhub import __version__

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check")
def health() -> dict[str, str]:
    return {"status": "ok", "version": __version__}


__all__ = ["router"]
