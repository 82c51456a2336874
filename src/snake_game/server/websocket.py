"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_game.server.game_manager import GameManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> GameManager:
    return ws.app.state.game_manager


def _extract_key(raw: str) -> str | None:
    """Pull a key identifier out of a client frame, or ``None``."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None
    key = msg.get("key", msg.get("direction"))
    if not isinstance(key, str):
        return None
    return key


@ws_router.websocket("/games/{game_id}/play")
async def play(websocket: WebSocket, game_id: str) -> None:
    """Player WebSocket: send keys, receive game state on every change."""
    manager = _get_manager(websocket)
    session = manager.get_game(game_id)
    if session is None:
        await websocket.close(code=4004, reason="Game not found.")
        return

    await websocket.accept()
    session.sockets.append(websocket)
    logger.info("Player connected to game %s.", game_id)

    # Send initial state snapshot so the client gets immediate feedback.
    await websocket.send_text(
        json.dumps(session.engine.get_state(), separators=(",", ":")),
    )

    try:
        while True:
            key = _extract_key(await websocket.receive_text())
            if key is None:
                continue
            session.loop.press(key)
    except WebSocketDisconnect:
        logger.info("Player disconnected from game %s.", game_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
