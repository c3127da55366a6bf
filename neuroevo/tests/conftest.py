"""
Pytest fixtures for neuroevo tests.

Provides fixtures for:
- Random generators
- Population parameters
- Engine-level test genomes and fitness recorders
- Small network architectures and snake configs
"""
from typing import Any, Dict

import numpy as np
import pytest

from neuroevo.environments import SnakeConfig
from neuroevo.evolution import PopulationParams
from neuroevo.networks import feed_forward_architecture

from .factories import RecordingFitness, score_by_genes, score_by_id


@pytest.fixture
def rng() -> np.random.Generator:
    """Return a seeded random generator."""
    return np.random.default_rng(12345)


@pytest.fixture
def small_params() -> PopulationParams:
    """Return parameters for a small, fast generation."""
    return PopulationParams(
        total_size=10,
        elite_size=4,
        mutation_count_range=range(1, 4),
    )


@pytest.fixture
def id_fitness() -> RecordingFitness:
    """Return a recording fitness that scores genomes by their id."""
    return RecordingFitness(score_by_id)


@pytest.fixture
def genes_fitness() -> RecordingFitness:
    """Return a recording fitness that scores genomes by their genes."""
    return RecordingFitness(score_by_genes)


@pytest.fixture
def tiny_architecture() -> Dict[str, Any]:
    """Return a 3 -> 2 -> 2 linear architecture."""
    return feed_forward_architecture(input_size=3, hidden_sizes=[2], output_size=2)


@pytest.fixture
def small_snake_config() -> SnakeConfig:
    """Return a small, seeded snake configuration."""
    return SnakeConfig(width=8, height=8, seed=3)
