"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Collection
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_game.grid import Cell, Grid

logger = logging.getLogger(__name__)

# Rejected draws before switching to sampling from the free-cell list.
MAX_REJECTIONS = 64


class GridFullError(RuntimeError):
    """Raised when no free cell is left for food."""


def place_food(
    grid: Grid,
    occupied: Collection[Cell],
    rng: np.random.Generator | None = None,
) -> Cell:
    """Pick a uniformly random cell that is not in *occupied*.

    Draws cells uniformly and rejects occupied ones. Dense boards fall
    back to a single draw from the list of free cells after
    :data:`MAX_REJECTIONS` misses, so the call always terminates.

    Raises :class:`GridFullError` if every cell is occupied.
    """
    rng = rng if rng is not None else np.random.default_rng()
    taken = set(occupied)
    if len(taken) >= grid.capacity and not grid.free_cells(taken):
        raise GridFullError("No empty cells available for food.")

    for _ in range(MAX_REJECTIONS):
        x, y = rng.integers(0, grid.size, size=2).tolist()
        if (x, y) not in taken:
            return x, y

    free = grid.free_cells(taken)
    if not free:
        raise GridFullError("No empty cells available for food.")
    logger.debug(
        "Rejection sampling missed %d times; sampling from %d free cells.",
        MAX_REJECTIONS, len(free),
    )
    return free[int(rng.integers(len(free)))]
