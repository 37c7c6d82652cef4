"""
core/query.py – Dựng URL request cho Photon.

    https://photon.komoot.io/api?q=foo&lat=38.8960&lon=-77.0223
"""
from typing import Optional
from urllib.parse import quote, urlencode

from ..config import settings
from ..models import LocationSnapshot


def format_coordinate(value: float) -> str:
    """Fixed-point, đúng 4 chữ số thập phân (38.89610 → '38.8961')."""
    return f"{value:.4f}"


def build_search_url(
    text: str,
    location: Optional[LocationSnapshot] = None,
    base_url: Optional[str] = None,
    limit: Optional[int] = None,
) -> str:
    """q = text thô; thêm lat/lon nếu đã biết vị trí; limit chỉ khi > 0."""
    base  = base_url or settings.GEOCODER_URL
    limit = settings.SEARCH_LIMIT if limit is None else limit

    params: list[tuple[str, str]] = [("q", text)]
    if location is not None:
        params.append(("lat", format_coordinate(location.latitude)))
        params.append(("lon", format_coordinate(location.longitude)))
    if limit > 0:
        params.append(("limit", str(limit)))
    return f"{base}?{urlencode(params, quote_via=quote)}"
