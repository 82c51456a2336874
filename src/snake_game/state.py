"""Immutable game state and its read-only snapshot."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from snake_game.food import place_food
from snake_game.snake import Direction, Snake

if TYPE_CHECKING:
    import numpy as np

    from snake_game.config import GameConfig
    from snake_game.grid import Cell, Grid


class GameStatus(str, enum.Enum):
    """Lifecycle states of a game."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    OVER = "over"


@dataclass(frozen=True)
class GameState:
    """Everything the core owns about one game.

    Transitions never mutate a state; they return a new one, so a reader
    holding a state always sees a completed tick.
    """

    snake: Snake
    food: Cell
    current_direction: Direction
    pending_direction: Direction
    speed_interval_ms: int
    score: int = 0
    is_over: bool = False
    is_running: bool = False
    is_won: bool = False
    ticks: int = 0

    @property
    def status(self) -> GameStatus:
        if self.is_over:
            return GameStatus.OVER
        if self.is_running:
            return GameStatus.RUNNING
        return GameStatus.NOT_STARTED

    def evolve(self, **changes) -> GameState:
        return replace(self, **changes)

    def snapshot(self) -> dict:
        """Return the JSON-serializable read model."""
        return {
            "status": self.status.value,
            "tick": self.ticks,
            "score": self.score,
            "running": self.is_running,
            "over": self.is_over,
            "won": self.is_won,
            "direction": self.current_direction.name.lower(),
            "interval_ms": self.speed_interval_ms,
            "snake": [list(seg) for seg in self.snake.body],
            "food": list(self.food),
        }


def initial_state(
    config: GameConfig, grid: Grid, rng: np.random.Generator,
) -> GameState:
    """Build the state a game is reset to: one centered segment heading right."""
    center = grid.size // 2
    snake = Snake.spawn((center, center), Direction.RIGHT, length=1)
    return GameState(
        snake=snake,
        food=place_food(grid, snake.body, rng),
        current_direction=Direction.RIGHT,
        pending_direction=Direction.RIGHT,
        speed_interval_ms=config.initial_interval_ms,
    )
