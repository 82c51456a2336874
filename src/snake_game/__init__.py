"""Snake Game: grid snake core engine and game loop."""

from snake_game.config import GameConfig
from snake_game.controls import on_direction, parse_key
from snake_game.engine import GameEngine, tick
from snake_game.food import GridFullError, place_food
from snake_game.grid import Grid, WallMode
from snake_game.scheduler import Command, CommandKind, GameLoop
from snake_game.snake import Direction, Snake
from snake_game.state import GameState, GameStatus, initial_state

__all__ = [
    "Command",
    "CommandKind",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameLoop",
    "GameState",
    "GameStatus",
    "Grid",
    "GridFullError",
    "Snake",
    "WallMode",
    "initial_state",
    "on_direction",
    "parse_key",
    "place_food",
    "tick",
]
