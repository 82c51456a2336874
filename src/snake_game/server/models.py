"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from snake_game.state import GameStatus


class CreateGameRequest(BaseModel):
    """Request body for POST /games."""

    grid_size: int = Field(default=20, ge=4, le=100)
    initial_interval_ms: int = Field(default=200, ge=1, le=2000)
    speed_increment_ms: int = Field(default=5, ge=0, le=1000)
    min_interval_ms: int = Field(default=50, ge=1, le=2000)
    wall_mode: str = "wrap"
    seed: int | None = None


class KeyRequest(BaseModel):
    """Request body for POST /games/{game_id}/keys."""

    key: str = Field(min_length=1, max_length=32)


class GameSummary(BaseModel):
    """Compact game info for list endpoints."""

    game_id: str
    status: GameStatus
    score: int
    interval_ms: int
    grid_size: int
    wall_mode: str


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str
