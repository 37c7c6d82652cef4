"""
main.py – FastAPI app entry point (slim wire-up only).
Chỉ kết nối routes và lifespan. Không chứa business logic.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routes import search, session, system
from .deps import get_client

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Geocoder: %s", settings.GEOCODER_URL)
    yield
    await get_client().aclose()
    logger.info("Shutdown.")


app = FastAPI(
    title="GeoSearch API",
    description="Tìm địa điểm (POI) qua Photon geocoder, hỗ trợ phiên search qua WebSocket.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.include_router(system.router)
app.include_router(search.router)
app.include_router(session.router)
