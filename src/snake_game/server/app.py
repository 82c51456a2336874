"""FastAPI application factory."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from snake_game.config import ENV_PREFIX
from snake_game.server.game_manager import GameManager
from snake_game.server.routes import router
from snake_game.server.websocket import ws_router

MAX_FINISHED_ENV = ENV_PREFIX + "MAX_FINISHED_GAMES"


def _manager_from_env() -> GameManager:
    raw = os.environ.get(MAX_FINISHED_ENV)
    if raw is None:
        return GameManager()
    try:
        bound = int(raw)
    except ValueError as exc:
        raise ValueError(f"{MAX_FINISHED_ENV} must be an integer.") from exc
    return GameManager(max_finished_games=bound)


def create_app(manager: GameManager | None = None) -> FastAPI:
    """Build the application around *manager*.

    Without one, a manager is built whose finished-game bound comes from
    ``SNAKE_GAME_MAX_FINISHED_GAMES``. Its loops are closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await app.state.game_manager.cleanup()

    app = FastAPI(title="Snake Game API", version="0.1.0", lifespan=lifespan)
    app.state.game_manager = manager if manager is not None else _manager_from_env()
    app.include_router(router)
    app.include_router(ws_router)
    return app
