"""Liveness endpoint."""

from fastapi import APIRouter

from imobiguard import __version__

router = APIRouter()


@router.get("/api/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "service": "imobiguard", "version": __version__}
