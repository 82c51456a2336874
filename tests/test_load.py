"""Load test: many game loops ticking on one event loop."""

from __future__ import annotations

import asyncio

import pytest

from snake_game.config import GameConfig
from snake_game.engine import GameEngine
from snake_game.grid import WallMode
from snake_game.scheduler import GameLoop
from snake_game.server.game_manager import GameManager
from snake_game.state import GameStatus


class TestConcurrentGames:
    @pytest.mark.asyncio
    async def test_50_concurrent_games(self):
        """Start 50 wall-mode games; every one of them must end."""
        loops: list[GameLoop] = []
        for i in range(50):
            config = GameConfig(
                grid_size=10,
                wall_mode=WallMode.DEATH,
                initial_interval_ms=5,
                min_interval_ms=1,
                seed=i,
            )
            loop = GameLoop(GameEngine(config))
            loop.start()
            loops.append(loop)

        for _ in range(200):
            await asyncio.sleep(0.05)
            if all(lp.status == GameStatus.OVER for lp in loops):
                break

        finished = sum(1 for lp in loops if lp.status == GameStatus.OVER)
        assert finished == 50, f"Only {finished}/50 games finished"
        assert not any(lp.tick_pending for lp in loops)
        for lp in loops:
            await lp.close()

    @pytest.mark.asyncio
    async def test_rapid_restarts_leave_one_timer(self):
        config = GameConfig(initial_interval_ms=5, min_interval_ms=1, seed=0)
        engine = GameEngine(config)
        changes: list[dict] = []
        loop = GameLoop(engine, on_change=changes.append)
        for _ in range(20):
            loop.restart()
        await loop.join()
        await asyncio.sleep(0.1)
        await loop.join()

        ticks = [c["tick"] for c in changes if c["tick"] > 0]
        # A single live timer yields strictly increasing tick numbers.
        assert ticks == sorted(set(ticks))
        assert ticks[0] == 1
        await loop.close()


class TestFinishedGamePruning:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("retained", [0, 1])
    async def test_pruned_games_release_their_loops(self, retained):
        """Pruned games leave the registry and their consumer tasks end."""
        manager = GameManager(max_finished_games=retained)
        sessions = []
        for i in range(3):
            session = manager.create_game(
                grid_size=4,
                wall_mode="death",
                initial_interval_ms=10,
                min_interval_ms=1,
                seed=i,
            )
            await manager.start_game(session.game_id)
            sessions.append(session)
        tasks = [s.loop._consumer for s in sessions]

        for _ in range(200):
            await asyncio.sleep(0.02)
            kept = [s for s in sessions if manager.get_game(s.game_id) is not None]
            if len(kept) == retained and sum(t.done() for t in tasks) == 3 - retained:
                break

        remaining = [s for s in sessions if manager.get_game(s.game_id) is not None]
        assert len(remaining) == retained
        pruned = [s for s in sessions if manager.get_game(s.game_id) is None]
        assert len(pruned) == 3 - retained
        for session in pruned:
            assert not session.loop.consumer_active
            assert not session.loop.tick_pending
            assert session.sockets == []
        for task, session in zip(tasks, sessions):
            assert task.done() == (session in pruned)
        await manager.cleanup()
