"""
Grid snake game used as a fitness environment.

The snake lives on a width x height grid. Each step moves its head one
cell; eating an apple grows it by one and places a new apple on a
random empty cell. The game ends when the head leaves the grid or runs
into the body.
"""
from collections import deque
from enum import Enum, IntEnum
from typing import Deque, Iterable, Iterator, Optional, Tuple

import numpy as np

Position = Tuple[int, int]


class Direction(Enum):
    """Movement directions as (dx, dy) on a grid with y growing downwards."""
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    UP = (0, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


class Cell(IntEnum):
    EMPTY = 0
    APPLE = 1
    SNAKE = 2


class Snake:
    """
    Snake body as a growable ring buffer of positions.

    The tail is at the left end of the deque, the head at the right end.
    Moving appends a new head and, unless the snake grows, drops the tail.
    """

    def __init__(self, body: Iterable[Position]):
        self.body: Deque[Position] = deque(body)
        if not self.body:
            raise ValueError("Snake needs at least one segment")

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.body)

    @property
    def head(self) -> Position:
        return self.body[-1]

    @property
    def tail(self) -> Position:
        return self.body[0]

    def move(self, direction: Direction, grow: bool = False) -> Tuple[Position, Optional[Position]]:
        """
        Move the head one cell.

        Returns:
            Tuple of (new head, vacated tail position or None if grown).
        """
        x, y = self.head
        head = (x + direction.dx, y + direction.dy)
        self.body.append(head)
        vacated = None if grow else self.body.popleft()
        return head, vacated


class SnakeGame:
    """
    One game of snake.

    The snake starts with three segments in the centre of the grid,
    heading up. Randomness (apple placement) comes only from ``rng``, so
    games with separate generators can run on separate threads.
    """

    def __init__(
        self,
        width: int = 32,
        height: int = 32,
        rng: Optional[np.random.Generator] = None,
    ):
        if width < 3 or height < 3:
            raise ValueError(f"Grid must be at least 3x3, got {width}x{height}")

        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cells = np.full((height, width), Cell.EMPTY, dtype=np.int8)
        self.apples_eaten = 0
        self.alive = True
        self.apple: Optional[Position] = None

        x, y = width // 2, height // 2
        self.snake = Snake([(x, y + 1), (x, y), (x, y - 1)])
        for sx, sy in self.snake:
            self.cells[sy, sx] = Cell.SNAKE

        self._place_apple()

    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, position: Position) -> Optional[Cell]:
        """Get the cell at a position, or None outside the grid."""
        if not self.in_bounds(position):
            return None
        x, y = position
        return Cell(int(self.cells[y, x]))

    @property
    def head(self) -> Position:
        return self.snake.head

    def step(self, direction: Direction) -> bool:
        """
        Advance the game by one move.

        Returns:
            True if the snake is still alive.
        """
        if not self.alive:
            return False

        x, y = self.snake.head
        target = (x + direction.dx, y + direction.dy)
        if not self.in_bounds(target):
            self.alive = False
            return False

        grow = self.get(target) == Cell.APPLE
        head, vacated = self.snake.move(direction, grow=grow)

        # The tail moves away before the head arrives
        if vacated is not None:
            self.cells[vacated[1], vacated[0]] = Cell.EMPTY

        if self.get(head) == Cell.SNAKE:
            self.alive = False
            return False

        self.cells[head[1], head[0]] = Cell.SNAKE

        if grow:
            self.apples_eaten += 1
            self._place_apple()

        return True

    def _place_apple(self) -> None:
        """Put an apple on a random empty cell, if any is left."""
        empty = np.argwhere(self.cells == Cell.EMPTY)
        if len(empty) == 0:
            self.apple = None
            return

        y, x = empty[self.rng.integers(len(empty))]
        self.cells[y, x] = Cell.APPLE
        self.apple = (int(x), int(y))
