"""
Lightweight genome types for exercising the engine without torch.
"""
import itertools
import threading

import numpy as np

from neuroevo.evolution import Genome, GenotypeLengthError

GENOTYPE_LENGTH = 8

_ids = itertools.count()
_ids_lock = threading.Lock()


def _next_id() -> int:
    with _ids_lock:
        return next(_ids)


class IdGenome(Genome):
    """
    Float-vector genome with a unique, increasing id per instance.

    The id is not part of the genes: every spawn or deserialize makes a
    new individual with a new id. ``mutations`` counts mutate() calls.
    """

    def __init__(self, genes: np.ndarray):
        self.genes = genes
        self.id = _next_id()
        self.mutations = 0

    def serialize(self) -> np.ndarray:
        return self.genes.copy()

    @classmethod
    def deserialize(cls, genes: np.ndarray) -> 'IdGenome':
        if len(genes) != GENOTYPE_LENGTH:
            raise GenotypeLengthError(
                f"Expected {GENOTYPE_LENGTH} genes, got {len(genes)}"
            )
        return cls(np.array(genes, dtype=np.float64))

    def mutate(self, rng: np.random.Generator) -> None:
        self.genes[rng.integers(GENOTYPE_LENGTH)] = rng.random()
        self.mutations += 1

    @classmethod
    def spawn(cls, rng: np.random.Generator) -> 'IdGenome':
        return cls(rng.random(GENOTYPE_LENGTH))


class RecordingFitness:
    """
    Fitness wrapper that remembers every (genome, score) it produced.

    Safe to call from several threads.
    """

    def __init__(self, score_fn):
        self.score_fn = score_fn
        self.calls = []
        self._lock = threading.Lock()

    def __call__(self, genome) -> int:
        score = self.score_fn(genome)
        with self._lock:
            self.calls.append((genome, score))
        return score

    def reset(self) -> None:
        self.calls = []


def score_by_id(genome: IdGenome) -> int:
    return genome.id


def score_by_genes(genome: IdGenome) -> int:
    """Deterministic score with plenty of ties."""
    return int(genome.genes.sum() * 2)
