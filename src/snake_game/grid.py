"""Grid coordinate model for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable

import numpy as np

MIN_GRID_SIZE = 4

Cell = tuple[int, int]


class WallMode(enum.Enum):
    """Defines behavior when the snake steps past the grid boundary."""

    DEATH = "death"
    WRAP = "wrap"


class Grid:
    """Square N×N board.

    Cells are ``(x, y)`` pairs with ``0 <= x, y < size``. Occupancy masks
    are NumPy arrays indexed ``[y, x]``.
    """

    def __init__(self, size: int = 20, wall_mode: WallMode = WallMode.WRAP) -> None:
        if size < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid size must be at least {MIN_GRID_SIZE}×{MIN_GRID_SIZE}."
            )
        self.size = size
        self.wall_mode = wall_mode

    @property
    def capacity(self) -> int:
        return self.size * self.size

    def in_bounds(self, cell: Cell) -> bool:
        """Check whether a coordinate lies within the grid."""
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def wrap(self, cell: Cell) -> Cell:
        """Wrap coordinates around the grid edges."""
        x, y = cell
        return x % self.size, y % self.size

    def resolve(self, cell: Cell) -> Cell | None:
        """Apply the wall policy to a freshly stepped coordinate.

        Returns the cell to move into, or ``None`` when the step hits a
        wall in :attr:`WallMode.DEATH`.
        """
        if self.wall_mode == WallMode.WRAP:
            return self.wrap(cell)
        if not self.in_bounds(cell):
            return None
        return cell

    def all_cells(self) -> list[Cell]:
        return [(x, y) for y in range(self.size) for x in range(self.size)]

    def occupancy(self, cells: Iterable[Cell]) -> np.ndarray:
        """Boolean mask with ``True`` on every given in-bounds cell."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in cells:
            if self.in_bounds((x, y)):
                mask[y, x] = True
        return mask

    def free_cells(self, occupied: Iterable[Cell]) -> list[Cell]:
        """Return every cell not in *occupied*, row-major."""
        ys, xs = np.where(~self.occupancy(occupied))
        return list(zip(xs.tolist(), ys.tolist(), strict=True))

    def to_dict(self) -> dict:
        return {"size": self.size, "wall_mode": self.wall_mode.value}
