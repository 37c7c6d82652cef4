"""routes/session.py – WS /ws/search"""
from fastapi import APIRouter, WebSocket
from ..deps import get_session_handler

router = APIRouter(tags=["Search"])


@router.websocket("/ws/search")
async def ws_search(websocket: WebSocket):
    await get_session_handler().handle_ws(websocket)
