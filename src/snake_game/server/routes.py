"""REST API route handlers for game lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from snake_game.server.game_manager import GameManager
from snake_game.server.models import (
    CreateGameRequest,
    ErrorResponse,
    GameSummary,
    KeyRequest,
)

router = APIRouter(
    prefix="/games",
    tags=["games"],
    responses={404: {"model": ErrorResponse}},
)


def _get_manager(request: Request) -> GameManager:
    return request.app.state.game_manager


@router.post("", status_code=201)
async def create_game(body: CreateGameRequest, request: Request) -> GameSummary:
    """Create a new game; it waits for a start command."""
    manager = _get_manager(request)
    try:
        session = manager.create_game(**body.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_games(request: Request) -> list[GameSummary]:
    """List games that have not ended."""
    return _get_manager(request).list_games()


@router.get("/{game_id}")
async def get_game(game_id: str, request: Request) -> dict:
    """Get game metadata and the current state snapshot."""
    session = _get_manager(request).get_game(game_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Game not found.")
    result = session.summary().model_dump(mode="json")
    result["state"] = session.engine.get_state()
    return result


@router.post("/{game_id}/start", status_code=200)
async def start_game(game_id: str, request: Request) -> dict:
    """Reset the game and start its tick loop."""
    manager = _get_manager(request)
    try:
        await manager.start_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "game_id": game_id}


@router.post("/{game_id}/restart", status_code=200)
async def restart_game(game_id: str, request: Request) -> dict:
    """Reset the game to its initial values and run it again."""
    manager = _get_manager(request)
    try:
        await manager.restart_game(game_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {"status": "restarted", "game_id": game_id}


@router.post("/{game_id}/keys", status_code=202)
async def press_key(game_id: str, body: KeyRequest, request: Request) -> dict:
    """Forward a raw key to the input buffer; unknown keys are ignored."""
    manager = _get_manager(request)
    try:
        session = await manager.press_key(game_id, body.key)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return {
        "game_id": game_id,
        "pending_direction": session.engine.state.pending_direction.name.lower(),
    }
