"""Step-based game engine composing grid, snake, food and input logic."""

from __future__ import annotations

import logging

import numpy as np

from snake_game.config import GameConfig
from snake_game.controls import on_direction
from snake_game.food import GridFullError, place_food
from snake_game.grid import Grid
from snake_game.snake import Direction
from snake_game.state import GameState, GameStatus, initial_state

logger = logging.getLogger(__name__)


def tick(
    state: GameState,
    grid: Grid,
    config: GameConfig,
    rng: np.random.Generator,
) -> GameState:
    """Advance the game by one step and return the resulting state.

    A fatal collision ends the game and leaves snake, food, score and
    speed exactly as they were before the step.
    """
    if state.is_over or not state.is_running:
        return state

    direction = state.pending_direction
    snake = state.snake

    # --- boundary check ---
    new_head = grid.resolve(direction.apply(snake.head))
    if new_head is None:
        return _fatal(state, direction, "wall")

    # --- self-collision check (look-ahead) ---
    # The tail moves away this step unless the snake is about to grow.
    will_grow = new_head == state.food
    if snake.collides(new_head, grow=will_grow):
        return _fatal(state, direction, "self")

    # --- move ---
    snake = snake.advance(new_head, grow=will_grow)
    if not will_grow:
        return state.evolve(
            snake=snake, current_direction=direction, ticks=state.ticks + 1,
        )

    score = state.score + 1
    interval = config.next_interval(state.speed_interval_ms)
    try:
        food = place_food(grid, snake.body, rng)
    except GridFullError:
        logger.info("Board filled at tick %d with score %d.", state.ticks + 1, score)
        return state.evolve(
            snake=snake,
            current_direction=direction,
            score=score,
            speed_interval_ms=interval,
            is_won=True,
            is_over=True,
            is_running=False,
            ticks=state.ticks + 1,
        )
    return state.evolve(
        snake=snake,
        food=food,
        current_direction=direction,
        score=score,
        speed_interval_ms=interval,
        ticks=state.ticks + 1,
    )


def _fatal(state: GameState, direction: Direction, cause: str) -> GameState:
    logger.info(
        "Snake died (%s) at tick %d with score %d.",
        cause, state.ticks + 1, state.score,
    )
    return state.evolve(
        current_direction=direction,
        is_over=True,
        is_running=False,
        ticks=state.ticks + 1,
    )


class GameEngine:
    """Single-game engine holding the current :class:`GameState`.

    Each call to :meth:`step` advances the game by one tick and returns the
    updated snapshot. The state object is swapped in one assignment, so
    readers only ever observe whole ticks.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = Grid(size=self.config.grid_size, wall_mode=self.config.wall_mode)
        self.rng = np.random.default_rng(self.config.seed)
        self.state = initial_state(self.config, self.grid, self.rng)

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def game_over(self) -> bool:
        return self.state.is_over

    def reset(self) -> GameState:
        """Reinitialise every value to its starting point, not running."""
        self.state = initial_state(self.config, self.grid, self.rng)
        return self.state

    def start(self) -> GameState:
        """Reset and begin running."""
        self.state = self.reset().evolve(is_running=True)
        logger.debug("Game started, food at %s.", self.state.food)
        return self.state

    def restart(self) -> GameState:
        """Leave the over state through a fresh start."""
        return self.start()

    def stop(self) -> GameState:
        """Halt a running game without ending it."""
        if self.state.is_running:
            self.state = self.state.evolve(is_running=False)
        return self.state

    def end(self) -> GameState:
        """Force the game over without touching snake, food or score."""
        if not self.state.is_over:
            self.state = self.state.evolve(is_over=True, is_running=False)
            logger.warning("Game ended early at tick %d.", self.state.ticks)
        return self.state

    def press(self, key: object) -> bool:
        """Feed a raw key to the input buffer. Returns True if it was buffered."""
        new_state = on_direction(self.state, key)
        changed = new_state is not self.state
        self.state = new_state
        return changed

    def step(self) -> dict:
        """Advance the game by one tick and return the snapshot."""
        self.state = tick(self.state, self.grid, self.config, self.rng)
        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        state = self.state.snapshot()
        state["grid"] = self.grid.to_dict()
        return state
