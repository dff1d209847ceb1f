"""DocCenter — System Routes."""

from fastapi import APIRouter

router = APIRouter(tags=["System"])


@router.api_route("/ping", methods=["GET", "POST"])
async def ping():
    """Liveness check."""
    return {"status": "ok", "service": "doccenter", "version": "1.0.0"}
