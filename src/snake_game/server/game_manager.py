"""In-memory game registry, lifecycle commands, and state broadcasting."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from snake_game.config import GameConfig
from snake_game.engine import GameEngine
from snake_game.grid import WallMode
from snake_game.scheduler import GameLoop
from snake_game.server.models import GameSummary
from snake_game.state import GameStatus

logger = logging.getLogger(__name__)

_MAX_FINISHED_GAMES = 100


@dataclass
class GameSession:
    """A game, its loop, and the sockets watching it."""

    game_id: str
    engine: GameEngine
    loop: GameLoop | None = None
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    def summary(self) -> GameSummary:
        state = self.engine.state
        config = self.engine.config
        return GameSummary(
            game_id=self.game_id,
            status=state.status,
            score=state.score,
            interval_ms=state.speed_interval_ms,
            grid_size=config.grid_size,
            wall_mode=config.wall_mode.value,
        )


class GameManager:
    """Central registry managing all game sessions."""

    def __init__(self, max_finished_games: int = _MAX_FINISHED_GAMES) -> None:
        if max_finished_games < 0:
            raise ValueError("max_finished_games must be >= 0.")
        self._games: dict[str, GameSession] = {}
        self._max_finished_games = max_finished_games

    @property
    def max_finished_games(self) -> int:
        return self._max_finished_games

    def create_game(
        self,
        grid_size: int = 20,
        initial_interval_ms: int = 200,
        speed_increment_ms: int = 5,
        min_interval_ms: int = 50,
        wall_mode: str = "wrap",
        seed: int | None = None,
    ) -> GameSession:
        """Create a new, not yet started game and return the session."""
        config = GameConfig(
            grid_size=grid_size,
            initial_interval_ms=initial_interval_ms,
            speed_increment_ms=speed_increment_ms,
            min_interval_ms=min_interval_ms,
            wall_mode=WallMode(wall_mode),
            seed=seed,
        )
        game_id = uuid.uuid4().hex[:12]
        session = GameSession(game_id=game_id, engine=GameEngine(config))
        session.loop = GameLoop(
            session.engine,
            on_change=lambda state: self._broadcast(session, state),
            on_game_over=lambda state: self._on_game_over(session, state),
        )
        self._games[game_id] = session
        logger.info(
            "Game %s created (grid=%d, walls=%s).",
            game_id, grid_size, wall_mode,
        )
        return session

    def get_game(self, game_id: str) -> GameSession | None:
        return self._games.get(game_id)

    def _require(self, game_id: str) -> GameSession:
        session = self._games.get(game_id)
        if session is None:
            raise KeyError(f"Game {game_id} not found.")
        return session

    def list_games(self) -> list[GameSummary]:
        """Return summaries of games that have not ended."""
        return [
            g.summary() for g in self._games.values()
            if g.status != GameStatus.OVER
        ]

    async def start_game(self, game_id: str) -> GameSession:
        """Start a game that is not yet running."""
        session = self._require(game_id)
        if session.status == GameStatus.RUNNING:
            raise ValueError("Game is already running.")
        if session.status == GameStatus.OVER:
            raise ValueError("Game is over; restart it instead.")
        session.loop.start()
        await session.loop.join()
        return session

    async def restart_game(self, game_id: str) -> GameSession:
        """Reset a game to its initial values and run it again."""
        session = self._require(game_id)
        session.finished_at = None
        session.loop.restart()
        await session.loop.join()
        return session

    async def press_key(self, game_id: str, key: str) -> GameSession:
        """Forward a raw key to the game's input buffer."""
        session = self._require(game_id)
        session.loop.press(key)
        await session.loop.join()
        return session

    async def _on_game_over(self, session: GameSession, state: dict) -> None:
        session.finished_at = time.monotonic()
        logger.info(
            "Game %s over at tick %d with score %d%s.",
            session.game_id, state["tick"], state["score"],
            " (board filled)" if state["won"] else "",
        )
        self._prune_finished_games()

    def _prune_finished_games(self) -> None:
        """Bound retained finished games to avoid unbounded registry growth."""
        finished_games = [
            g for g in self._games.values() if g.status == GameStatus.OVER
        ]
        overflow = len(finished_games) - self._max_finished_games
        if overflow <= 0:
            return

        finished_games.sort(
            key=lambda g: g.finished_at if g.finished_at is not None else g.created_at,
        )
        for stale in finished_games[:overflow]:
            self._games.pop(stale.game_id, None)
            if stale.loop is not None:
                stale.loop.cancel()
            stale.sockets.clear()
        logger.info(
            "Pruned %d finished games (retaining up to %d).",
            overflow,
            self._max_finished_games,
        )

    async def _broadcast(self, session: GameSession, state: dict) -> None:
        """Send game state to every connected socket."""
        payload = json.dumps(state, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so concurrent disconnect handlers can mutate
        # the live socket list without affecting this send loop.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                logger.warning("Dropping unreachable socket in game %s.", session.game_id)
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Cancel all game loops."""
        for session in list(self._games.values()):
            if session.loop is not None:
                await session.loop.close()
        logger.info("GameManager cleanup complete.")
