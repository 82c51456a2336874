"""Direction vectors and the snake body."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from snake_game.grid import Cell


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downwards, matching screen coordinates.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def delta(self) -> tuple[int, int]:
        return self.value

    @property
    def reverse(self) -> Direction:
        """The direction that would cause an instant 180° turn."""
        dx, dy = self.value
        return Direction((-dx, -dy))

    def apply(self, cell: Cell) -> Cell:
        """Step *cell* one unit in this direction, unbounded."""
        dx, dy = self.value
        x, y = cell
        return x + dx, y + dy


@dataclass(frozen=True)
class Snake:
    """Head-first, immutable body of ``(x, y)`` segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    body: tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.body) < 1:
            raise ValueError("Snake length must be at least 1.")
        if len(set(self.body)) != len(self.body):
            raise ValueError("Snake body must not overlap itself.")

    @classmethod
    def spawn(
        cls, head: Cell, direction: Direction = Direction.RIGHT, length: int = 1,
    ) -> Snake:
        """Build a straight snake trailing behind *head*."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        x, y = head
        return cls(tuple((x - dx * i, y - dy * i) for i in range(length)))

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Cell:
        return self.body[0]

    @property
    def tail(self) -> Cell:
        return self.body[-1]

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def collides(self, cell: Cell, grow: bool = False) -> bool:
        """Check whether moving the head into *cell* hits the body.

        The tail moves away during a normal step, so it only counts when
        the snake is growing on this step.
        """
        segments = self.body if grow else self.body[:-1]
        return cell in segments

    def advance(self, new_head: Cell, grow: bool = False) -> Snake:
        """Return the snake after its head moves into *new_head*."""
        if grow:
            return Snake((new_head, *self.body))
        return Snake((new_head, *self.body[:-1]))

    def to_dict(self) -> dict:
        return {"body": [list(seg) for seg in self.body]}
