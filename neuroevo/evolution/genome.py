"""
Genome contract for the evolution engine.

A genome is any individual that can be flattened into a fixed-length
sequence of numeric genes and rebuilt from one. The population never
looks inside a genome; it only uses the operations defined here:

- serialize: flat gene encoding of the current state
- deserialize: rebuild a genome from an encoding
- mutate: one small in-place perturbation
- spawn: a fresh random individual
- mix: crossover of two encodings (uniform by default)

Randomness is always passed in explicitly so that callers running on
several threads can hand each worker its own generator.
"""
from abc import ABC, abstractmethod
from typing import Type, TypeVar

import numpy as np

from .crossover import uniform_mix

G = TypeVar('G', bound='Genome')


class Genome(ABC):
    """
    Abstract base class for evolvable individuals.

    All genomes of one concrete type share a genotype length; the
    encoding returned by serialize() always has that length, and
    deserialize() must refuse anything else.

    Example:
        class Bits(Genome):
            ...

        rng = np.random.default_rng(0)
        a, b = Bits.spawn(rng), Bits.spawn(rng)
        child = Bits.deserialize(Bits.mix(a.serialize(), b.serialize(), rng))
        child.mutate(rng)
    """

    @abstractmethod
    def serialize(self) -> np.ndarray:
        """
        Return the flat gene encoding of this genome.

        Must be a pure view of the current state: calling it twice
        without an intervening mutate() yields equal arrays.
        """

    @classmethod
    @abstractmethod
    def deserialize(cls: Type[G], genes: np.ndarray) -> G:
        """
        Rebuild a genome from a gene encoding.

        Raises:
            GenotypeLengthError: If the encoding has the wrong length.
        """

    @abstractmethod
    def mutate(self, rng: np.random.Generator) -> None:
        """Apply exactly one small, localized random change in place."""

    @classmethod
    @abstractmethod
    def spawn(cls: Type[G], rng: np.random.Generator) -> G:
        """Create a new, independently randomized genome."""

    @classmethod
    def mix(
        cls,
        a: np.ndarray,
        b: np.ndarray,
        rng: np.random.Generator,
    ) -> np.ndarray:
        """
        Combine two parent encodings into a child encoding.

        Defaults to uniform crossover; genome types with structure the
        uniform operator would break can override this.
        """
        return uniform_mix(a, b, rng)
