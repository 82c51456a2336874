"""Keyboard input buffering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from snake_game.snake import Direction

if TYPE_CHECKING:
    from snake_game.state import GameState

KEY_MAP: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}

_FOLDED_KEY_MAP: dict[str, Direction] = {k.lower(): v for k, v in KEY_MAP.items()}


def parse_key(key: object) -> Direction | None:
    """Map a key identifier to a direction, or ``None`` if unmapped."""
    if not isinstance(key, str):
        return None
    direction = KEY_MAP.get(key)
    if direction is None:
        direction = _FOLDED_KEY_MAP.get(key.lower())
    return direction


def on_direction(state: GameState, key: object) -> GameState:
    """Buffer a direction change for the next tick.

    The reversal check is made against the direction committed by the
    last tick, so several presses between two ticks are all validated
    against the same baseline and the last valid one wins.
    """
    if state.is_over:
        return state
    direction = parse_key(key)
    if direction is None:
        return state
    if direction == state.current_direction.reverse:
        return state
    if direction == state.pending_direction:
        return state
    return state.evolve(pending_direction=direction)
