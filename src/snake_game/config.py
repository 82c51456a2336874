"""Game configuration with JSON and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path

from snake_game.grid import MIN_GRID_SIZE, WallMode

logger = logging.getLogger(__name__)

ENV_PREFIX = "SNAKE_GAME_"


@dataclass(frozen=True)
class GameConfig:
    """Tunables for a single game.

    The tick interval starts at ``initial_interval_ms`` and shrinks by
    ``speed_increment_ms`` for every food eaten, never dropping below
    ``min_interval_ms``.
    """

    grid_size: int = 20
    initial_interval_ms: int = 200
    speed_increment_ms: int = 5
    min_interval_ms: int = 50
    wall_mode: WallMode = WallMode.WRAP
    seed: int | None = None

    def __post_init__(self) -> None:
        if isinstance(self.wall_mode, str):
            object.__setattr__(self, "wall_mode", WallMode(self.wall_mode))
        if self.grid_size < MIN_GRID_SIZE:
            raise ValueError(f"grid_size must be at least {MIN_GRID_SIZE}.")
        if self.min_interval_ms < 1:
            raise ValueError("min_interval_ms must be at least 1.")
        if self.initial_interval_ms < self.min_interval_ms:
            raise ValueError(
                "initial_interval_ms must not be below min_interval_ms."
            )
        if self.speed_increment_ms < 0:
            raise ValueError("speed_increment_ms must be >= 0.")

    def next_interval(self, interval_ms: int) -> int:
        """Interval after one more food item has been eaten."""
        return max(self.min_interval_ms, interval_ms - self.speed_increment_ms)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["wall_mode"] = self.wall_mode.value
        return d

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**raw)

    @classmethod
    def from_env(
        cls,
        environ: dict[str, str] | None = None,
        base: GameConfig | None = None,
    ) -> GameConfig:
        """Overlay ``SNAKE_GAME_*`` variables on *base* (or the defaults)."""
        env = os.environ if environ is None else environ
        d = (base or cls()).to_dict()
        for name in d:
            raw = env.get(ENV_PREFIX + name.upper())
            if raw is None:
                continue
            if name == "wall_mode":
                d[name] = raw.lower()
            elif name == "seed" and raw.lower() in ("", "none"):
                d[name] = None
            else:
                try:
                    d[name] = int(raw)
                except ValueError as exc:
                    raise ValueError(
                        f"{ENV_PREFIX}{name.upper()} must be an integer."
                    ) from exc
        return cls(**d)
