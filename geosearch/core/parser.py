"""
core/parser.py – Parse GeoJSON FeatureCollection của Photon thành list[POI].
Không bao giờ raise: payload hỏng → [], feature hỏng → bỏ qua feature đó.
"""
import json
import math
import logging
from typing import Any, Optional

from ..models import POI

logger = logging.getLogger(__name__)

ADDRESS_KEYS = ("street", "city", "state", "country")


def parse_results(payload: str | bytes | None) -> list[POI]:
    """Giữ nguyên thứ tự feature của upstream."""
    data = _decode(payload)
    if data is None:
        return []
    features = data.get("features")
    if not isinstance(features, list):
        return []

    pois: list[POI] = []
    for feature in features:
        poi = _parse_feature(feature)
        if poi is None:
            # Thiếu name hoặc lat/lon
            continue
        pois.append(poi)
    skipped = len(features) - len(pois)
    if skipped:
        logger.debug("Skipped %d malformed feature(s)", skipped)
    return pois


def assemble_address(properties: dict) -> str:
    """street, city, state, country – chỉ lấy key là string khác rỗng."""
    parts = [properties[k] for k in ADDRESS_KEYS if isinstance(properties.get(k), str) and properties[k]]
    return ", ".join(parts)


# ── Private ────────────────────────────────────────────────────────────────────

def _decode(payload: str | bytes | None) -> Optional[dict]:
    if payload is None:
        return None
    try:
        text = payload.decode("utf-8") if isinstance(payload, (bytes, bytearray)) else payload
        data = json.loads(text)
    except (UnicodeDecodeError, ValueError, TypeError):
        return None
    return data if isinstance(data, dict) else None


def _parse_feature(feature: Any) -> Optional[POI]:
    if not isinstance(feature, dict):
        return None
    properties = feature.get("properties")
    geometry   = feature.get("geometry")
    if not isinstance(properties, dict) or not isinstance(geometry, dict):
        return None
    name = properties.get("name")
    if not isinstance(name, str):
        return None
    coords = geometry.get("coordinates")
    if not _is_coordinate_pair(coords):
        return None
    try:
        lon, lat = float(coords[0]), float(coords[1])
    except (OverflowError, ValueError):
        return None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None
    return POI(name=name, latitude=lat, longitude=lon, address=assemble_address(properties))


def _is_coordinate_pair(value: Any) -> bool:
    # [lon, lat]; bool không tính là số
    return (
        isinstance(value, list)
        and len(value) == 2
        and all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in value)
    )
