"""
Snake fitness function for network genomes.

An agent sees the board through seven sensor values and picks one of
four directions from its network outputs. Its fitness is the number of
apples eaten before it dies or runs out of steps; every apple buys it
more steps.
"""
from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from .snake import Cell, Direction, SnakeGame

# Network output index -> direction
ACTIONS = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

SENSOR_SIZE = 7


class Agent(Protocol):
    def activate(self, inputs: np.ndarray) -> np.ndarray: ...


@dataclass
class SnakeConfig:
    """Configuration for snake fitness evaluation."""

    width: int = 32
    height: int = 32

    # Steps before starvation; defaults to 5 * width
    initial_steps: Optional[int] = None
    # Extra steps per apple; defaults to 3 * width
    steps_per_apple: Optional[int] = None

    # Apple placement seed; None gives every game fresh entropy
    seed: Optional[int] = None

    @property
    def step_budget(self) -> int:
        return self.initial_steps if self.initial_steps is not None else self.width * 5

    @property
    def apple_bonus(self) -> int:
        return self.steps_per_apple if self.steps_per_apple is not None else self.width * 3

    def new_game(self) -> SnakeGame:
        return SnakeGame(self.width, self.height, rng=np.random.default_rng(self.seed))


def _squash(d: float) -> float:
    return float(np.sign(d)) / (abs(d) + 1.0)


def sense(game: SnakeGame) -> np.ndarray:
    """
    Encode the board around the snake's head.

    Layout:
        0-3: 1 / distance to the nearest obstacle left, right, up, down
             (the grid edge counts as an obstacle)
        4-5: apple dx, dy squashed to (-1, 1)
        6:   bias, always 1.0
    """
    inputs = np.zeros(SENSOR_SIZE, dtype=np.float32)
    hx, hy = game.head

    def is_obstacle(position) -> bool:
        return game.get(position) in (None, Cell.SNAKE)

    for slot, (dx, dy) in enumerate(((-1, 0), (1, 0), (0, -1), (0, 1))):
        distance = 1
        while not is_obstacle((hx + dx * distance, hy + dy * distance)):
            distance += 1
        inputs[slot] = 1.0 / distance

    if game.apple is not None:
        ax, ay = game.apple
        inputs[4] = _squash(ax - hx)
        inputs[5] = _squash(ay - hy)

    inputs[6] = 1.0
    return inputs


def choose_direction(agent: Agent, game: SnakeGame) -> Direction:
    """Pick the direction with the highest network output."""
    outputs = agent.activate(sense(game))
    # Plain argmax: no threshold and no fallback direction, so all-negative
    # outputs still pick their largest entry and ties go to the first action
    return ACTIONS[int(np.argmax(outputs))]


def play(agent: Agent, game: SnakeGame, step_budget: int, apple_bonus: int) -> int:
    """
    Let an agent play a game to the end.

    Returns:
        Apples eaten.
    """
    remaining = step_budget
    apples = game.apples_eaten

    while remaining > 0 and game.step(choose_direction(agent, game)):
        remaining -= 1
        if game.apples_eaten != apples:
            apples = game.apples_eaten
            remaining += apple_bonus

    return game.apples_eaten


class SnakeFitness:
    """
    Fitness function: apples eaten in one game of snake.

    Every call builds its own game and generator, so one instance can be
    shared by all evaluation threads.

    Example:
        fitness = SnakeFitness(SnakeConfig(width=16, height=16))
        best = population.step(params, fitness)
    """

    def __init__(self, config: Optional[SnakeConfig] = None):
        self.config = config or SnakeConfig()

    def __call__(self, agent: Agent) -> int:
        game = self.config.new_game()
        return play(agent, game, self.config.step_budget, self.config.apple_bonus)
