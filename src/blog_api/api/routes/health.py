"""
Health check API route
"""

from fastapi import APIRouter

router = APIRouter()

@router.get("/health")
async def health_check():
    """
    Liveness probe - always reports ok

    Storage is deliberately not touched so a slow database never gets the
    process restarted.
    """
    return {"status": "ok"}
