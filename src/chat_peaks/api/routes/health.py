"""Health check endpoints."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
async def health_check():
    """Perform basic health check.

    Returns:
        Dictionary with status and service name.
    """
    return {"status": "healthy", "service": "chat-peaks"}
