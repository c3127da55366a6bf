"""
Fitness environments for evolved agents.

This module provides:
- SnakeGame: grid snake simulation with a ring-buffer body
- sense / choose_direction: how a network agent perceives and acts
- SnakeFitness: apples eaten in one game, as a fitness function
"""
from .snake import Cell, Direction, Snake, SnakeGame
from .fitness import (
    ACTIONS,
    SnakeConfig,
    SnakeFitness,
    choose_direction,
    play,
    sense,
)

__all__ = [
    # Simulation
    'Cell',
    'Direction',
    'Snake',
    'SnakeGame',

    # Fitness
    'ACTIONS',
    'SnakeConfig',
    'SnakeFitness',
    'choose_direction',
    'play',
    'sense',
]
