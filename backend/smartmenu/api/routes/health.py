"""Health check routes."""

from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/health")
def health_check():
    """Liveness check used by the frontends and load balancer."""
    return {
        "status": "UP",
        "service": "smartmenu",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
