from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health():
    """Liveness only; does not touch the database."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
