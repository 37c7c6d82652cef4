"""routes/search.py – GET /search"""
from typing import Optional

from fastapi import APIRouter, Query, HTTPException
from ..deps import get_search_handler
from ..models import SearchResponse

router = APIRouter(tags=["Search"])


@router.get("/search", response_model=SearchResponse)
async def search(
    q:   str = Query(..., min_length=1),
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
):
    """Tìm POI theo text; lat/lon (nếu có) được gửi kèm để upstream ưu tiên kết quả gần."""
    try:
        return await get_search_handler().handle(q, lat, lon)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
