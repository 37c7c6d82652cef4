"""routes/system.py – /health"""
from datetime import datetime
from fastapi import APIRouter
from ..deps import get_connectivity

router = APIRouter(tags=["System"])


@router.get("/health")
async def health():
    return {"status": "ok", "time": datetime.now().isoformat(), "connectivity": get_connectivity().state.value}
