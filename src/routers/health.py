"""Liveness endpoint."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health():
    """Return 200 while the process can serve traffic."""
    return {"status": "ok"}
