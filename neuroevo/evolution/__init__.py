"""
Generational evolution engine.

Evolves a population of genomes by repeated breeding, mutation,
parallel fitness evaluation and top-K selection.

This module provides:
- The Genome contract that individuals implement
- Uniform crossover of gene encodings
- Bounded top-K selection
- The Population store and its generational step

Example usage:
    from neuroevo.evolution import Population, PopulationParams
    from neuroevo.networks import NetworkGenome
    from neuroevo.environments import SnakeFitness

    params = PopulationParams(
        total_size=2000,
        elite_size=100,
        mutation_count_range=range(8, 64),
    )

    pop = Population(NetworkGenome, seed=1)
    for gen in range(50):
        best = pop.step(params, SnakeFitness())
        print(f"Gen {gen}: best={best}")

    champion = pop.best()
"""
from .crossover import (
    GenotypeLengthError,
    uniform_mix,
)
from .genome import Genome
from .selection import (
    ScoredEntry,
    BoundedTopK,
    select_top_k,
)
from .population import (
    Population,
    PopulationParams,
    GenerationStats,
    EmptyPopulationError,
)

__all__ = [
    # Genome contract
    'Genome',

    # Crossover
    'GenotypeLengthError',
    'uniform_mix',

    # Selection
    'ScoredEntry',
    'BoundedTopK',
    'select_top_k',

    # Population management
    'Population',
    'PopulationParams',
    'GenerationStats',
    'EmptyPopulationError',
]
