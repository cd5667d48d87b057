from datetime import datetime

from fastapi import APIRouter

from app.config import SERVICE_NAME, SERVICE_VERSION

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check():
    return {
        "ok": True,
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "timestamp": datetime.utcnow().isoformat() + "Z",
    }
