"""Tests for the Snake module."""

import pytest

from snake_game.snake import Direction, Snake


class TestDirection:
    def test_reverse_pairs(self):
        assert Direction.UP.reverse == Direction.DOWN
        assert Direction.DOWN.reverse == Direction.UP
        assert Direction.LEFT.reverse == Direction.RIGHT
        assert Direction.RIGHT.reverse == Direction.LEFT

    def test_each_direction_has_exactly_one_reverse(self):
        for direction in Direction:
            others = [d for d in Direction if d.reverse == direction]
            assert others == [direction.reverse]

    def test_apply(self):
        assert Direction.RIGHT.apply((10, 10)) == (11, 10)
        assert Direction.UP.apply((10, 10)) == (10, 9)
        assert Direction.LEFT.apply((0, 0)) == (-1, 0)


class TestSnakeInit:
    def test_spawn_single_segment(self):
        snake = Snake.spawn((10, 10))
        assert snake.body == ((10, 10),)
        assert snake.head == snake.tail == (10, 10)

    def test_body_extends_opposite_to_direction(self):
        snake = Snake.spawn((5, 5), Direction.RIGHT, length=3)
        assert snake.body == ((5, 5), (4, 5), (3, 5))

    def test_body_extends_up(self):
        snake = Snake.spawn((5, 5), Direction.UP, length=3)
        assert snake.body == ((5, 5), (5, 6), (5, 7))

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake.spawn((0, 0), length=0)
        with pytest.raises(ValueError, match="at least 1"):
            Snake(())

    def test_rejects_overlap(self):
        with pytest.raises(ValueError, match="overlap"):
            Snake(((1, 1), (1, 2), (1, 1)))


class TestSnakeMovement:
    def test_advance_without_growth(self):
        snake = Snake.spawn((5, 5), Direction.RIGHT, length=3)
        moved = snake.advance((6, 5))
        assert moved.body == ((6, 5), (5, 5), (4, 5))
        assert len(moved) == 3

    def test_advance_with_growth(self):
        snake = Snake.spawn((5, 5), Direction.RIGHT, length=3)
        grown = snake.advance((6, 5), grow=True)
        assert grown.body == ((6, 5), (5, 5), (4, 5), (3, 5))

    def test_advance_returns_new_snake(self):
        snake = Snake.spawn((5, 5), length=2)
        snake.advance((6, 5))
        assert snake.body == ((5, 5), (4, 5))


class TestSnakeCollision:
    def test_occupies(self):
        snake = Snake.spawn((5, 5), Direction.RIGHT, length=3)
        assert snake.occupies((5, 5))
        assert snake.occupies((3, 5))
        assert not snake.occupies((0, 0))

    def test_departing_tail_is_not_a_collision(self):
        snake = Snake(((1, 1), (2, 1), (2, 2), (1, 2)))
        assert not snake.collides((1, 2))

    def test_tail_counts_when_growing(self):
        snake = Snake(((1, 1), (2, 1), (2, 2), (1, 2)))
        assert snake.collides((1, 2), grow=True)

    def test_body_collision(self):
        snake = Snake.spawn((5, 5), Direction.RIGHT, length=3)
        assert snake.collides((4, 5))

    def test_to_dict(self):
        snake = Snake.spawn((5, 5), Direction.RIGHT, length=2)
        assert snake.to_dict() == {"body": [[5, 5], [4, 5]]}
