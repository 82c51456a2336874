"""Async game loop: a single-consumer command queue driving timed ticks."""

from __future__ import annotations

import asyncio
import enum
import inspect
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from snake_game.engine import GameEngine
from snake_game.state import GameStatus

logger = logging.getLogger(__name__)

Listener = Callable[[dict], Awaitable[None] | None]


class CommandKind(enum.Enum):
    """Messages the loop consumes, in arrival order."""

    TICK = "tick"
    KEY = "key"
    START = "start"
    RESTART = "restart"
    STOP = "stop"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    key: str | None = None
    generation: int | None = None


class GameLoop:
    """Serializes ticks and input for one :class:`GameEngine`.

    Every mutation happens inside :meth:`handle`, which is only ever run by
    one consumer task, so ticks and key presses never interleave. At most
    one tick timer is pending at a time. The timer is armed after a tick
    completes, using the interval the tick left behind, so a speed-up
    applies to the very next tick.

    Starting, restarting and stopping cancel the pending timer and bump a
    generation counter; a tick already sitting in the queue from an older
    generation is dropped instead of firing against reset state.
    """

    def __init__(
        self,
        engine: GameEngine,
        on_change: Listener | None = None,
        on_game_over: Listener | None = None,
    ) -> None:
        self.engine = engine
        self.on_change = on_change
        self.on_game_over = on_game_over
        self._queue: asyncio.Queue[Command] = asyncio.Queue()
        self._timer: asyncio.TimerHandle | None = None
        self._generation = 0
        self._consumer: asyncio.Task | None = None

    @property
    def status(self) -> GameStatus:
        return self.engine.status

    @property
    def tick_pending(self) -> bool:
        return self._timer is not None

    @property
    def generation(self) -> int:
        """Counter stamped on ticks; bumped whenever the timer is reset."""
        return self._generation

    # --- commands in ---

    def submit(self, command: Command) -> None:
        """Queue a command for the consumer task, starting it if needed."""
        self._ensure_consumer()
        self._queue.put_nowait(command)

    def start(self) -> None:
        self.submit(Command(CommandKind.START))

    def restart(self) -> None:
        self.submit(Command(CommandKind.RESTART))

    def stop(self) -> None:
        self.submit(Command(CommandKind.STOP))

    def press(self, key: str) -> None:
        self.submit(Command(CommandKind.KEY, key=key))

    # --- consumer ---

    async def run(self) -> None:
        """Consume commands forever; cancel the task to end it."""
        while True:
            command = await self._queue.get()
            try:
                await self.handle(command)
            except Exception:
                logger.exception("Failed handling %s command.", command.kind.value)
                if command.kind == CommandKind.TICK:
                    await self._abort()
            finally:
                self._queue.task_done()

    async def join(self) -> None:
        """Wait until every queued command has been handled."""
        await self._queue.join()

    async def handle(self, command: Command) -> None:
        """Apply one command to the engine and emit notifications."""
        kind = command.kind
        if kind == CommandKind.TICK:
            await self._handle_tick(command)
        elif kind == CommandKind.KEY:
            self.engine.press(command.key)
        elif kind in (CommandKind.START, CommandKind.RESTART):
            self._cancel_timer()
            if kind == CommandKind.RESTART:
                self.engine.restart()
            else:
                self.engine.start()
            logger.info(
                "Game %s (interval %d ms).",
                "restarted" if kind == CommandKind.RESTART else "started",
                self.engine.state.speed_interval_ms,
            )
            self._schedule_tick()
            await self._notify(self.on_change)
        elif kind == CommandKind.STOP:
            self._cancel_timer()
            self.engine.stop()
            await self._notify(self.on_change)

    def cancel(self) -> asyncio.Task | None:
        """Cancel the pending tick and the consumer without waiting for it.

        Commands still queued are discarded so that :meth:`join` callers
        return. Returns the cancelled task, if there was one.
        """
        self._cancel_timer()
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        task, self._consumer = self._consumer, None
        if task is None or task.done():
            return None
        task.cancel()
        return task

    async def close(self) -> None:
        """Cancel the pending tick and wait for the consumer task to end."""
        task = self.cancel()
        # A listener may close its own loop; the task then ends at its next await.
        if task is None or task is asyncio.current_task():
            return
        try:
            await task
        except asyncio.CancelledError:
            logger.debug("Game loop consumer cancelled.")

    # --- internals ---

    async def _handle_tick(self, command: Command) -> None:
        if command.generation != self._generation:
            logger.debug("Dropped stale tick from generation %s.", command.generation)
            return
        self._timer = None
        before = self.engine.state
        self.engine.step()
        after = self.engine.state
        if after is before:
            return

        if after.is_over:
            await self._notify(self.on_change)
            await self._notify(self.on_game_over)
            return
        self._schedule_tick()
        await self._notify(self.on_change)

    def _schedule_tick(self) -> None:
        if not self.engine.state.is_running:
            return
        loop = asyncio.get_running_loop()
        delay = self.engine.state.speed_interval_ms / 1000.0
        self._timer = loop.call_later(
            delay,
            self._queue.put_nowait,
            Command(CommandKind.TICK, generation=self._generation),
        )

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _ensure_consumer(self) -> None:
        if self._consumer is None or self._consumer.done():
            self._consumer = asyncio.get_running_loop().create_task(self.run())

    async def _abort(self) -> None:
        """End the game after a tick that could not be applied."""
        self._cancel_timer()
        if self.engine.state.is_over:
            return
        self.engine.end()
        await self._notify(self.on_change)
        await self._notify(self.on_game_over)

    async def _notify(self, listener: Listener | None) -> None:
        if listener is None:
            return
        try:
            result = listener(self.engine.get_state())
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Game loop listener %r failed.", listener)
