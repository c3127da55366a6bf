"""
Population management for the generational evolution engine.

A Population stores the elite survivors of the last generation and
advances them one generation at a time:

1. Elite padding: spawn until the store holds elite_size genomes
2. Breeding: cross random parent pairs into total_size - n children
3. Carry-over: move the elites into the new generation unchanged
4. Mutation: k single-gene mutations on random individuals
5. Evaluation: score every individual with the caller's fitness function
6. Selection: keep the elite_size best, best first

Breeding and evaluation run on a bounded thread pool. Every breeding
task gets its own random generator, split from the population's seed,
so workers never contend for shared random state and a seeded run with
a fixed worker count is reproducible. Mutation is sequential.
"""
import logging
import os
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import (
    Any, Callable, Generic, Iterable, List, Optional, Sequence, Type, TypeVar,
)

import numpy as np

from .genome import Genome
from .selection import select_top_k

logger = logging.getLogger(__name__)

G = TypeVar('G', bound=Genome)


class EmptyPopulationError(LookupError):
    """The population holds no individuals."""


@dataclass
class PopulationParams:
    """Parameters for one generational step."""

    # Individuals evaluated per generation
    total_size: int = 8192 * 4
    # Survivors kept between generations
    elite_size: int = 512
    # Half-open range the per-step mutation budget is drawn from
    mutation_count_range: range = field(default_factory=lambda: range(8, 128))

    def validate(self) -> None:
        """
        Check the parameters before any work is done.

        Raises:
            ValueError: If any parameter is out of bounds.
        """
        if self.elite_size <= 0:
            raise ValueError(f"elite_size must be positive, got {self.elite_size}")

        if self.total_size < self.elite_size:
            raise ValueError(
                f"total_size ({self.total_size}) must be at least "
                f"elite_size ({self.elite_size})"
            )

        mutations = self.mutation_count_range
        if not isinstance(mutations, range) or mutations.step != 1:
            raise ValueError("mutation_count_range must be a contiguous range")
        if mutations.start < 0:
            raise ValueError(
                f"mutation_count_range must not be negative, got {mutations}"
            )
        if mutations.stop <= mutations.start:
            raise ValueError(
                f"mutation_count_range must not be empty, got {mutations}"
            )


@dataclass
class GenerationStats:
    """Statistics for a generation."""
    generation: int = 0
    best_score: int = 0
    avg_score: float = 0.0
    min_score: int = 0
    score_std: float = 0.0
    num_mutations: int = 0
    num_bred: int = 0
    num_spawned: int = 0


class Population(Generic[G]):
    """
    Stores the elite of an evolving population and steps it forward.

    Example:
        pop = Population(NetworkGenome, seed=7)
        params = PopulationParams(total_size=1000, elite_size=50,
                                  mutation_count_range=range(8, 32))

        best = 0
        while best < 20:
            best = pop.step(params, SnakeFitness())

        champion = pop.best()
    """

    def __init__(
        self,
        genome_type: Type[G],
        seed: Optional[int] = None,
        max_workers: Optional[int] = None,
        individuals: Optional[Iterable[G]] = None,
    ):
        """
        Initialize the population.

        Args:
            genome_type: Concrete Genome subclass used to spawn and decode.
            seed: Seed for all randomness; None draws fresh entropy.
            max_workers: Thread pool size for breeding and evaluation.
                        Defaults to the CPU count; 1 runs inline.
            individuals: Optional seed individuals, taken over by the
                        population.
        """
        if max_workers is not None and max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")

        self.genome_type = genome_type
        self.max_workers = max_workers or os.cpu_count() or 1
        self.individuals: List[G] = list(individuals or [])
        self.generation = 0
        self.stats_history: List[GenerationStats] = []

        self._seed_sequence = np.random.SeedSequence(seed)
        self.rng = np.random.default_rng(self._seed_sequence.spawn(1)[0])

    def __len__(self) -> int:
        return len(self.individuals)

    def step(
        self,
        params: PopulationParams,
        fitness: Callable[[G], int],
    ) -> int:
        """
        Advance the population by one generation.

        Args:
            params: Generation sizes and mutation budget.
            fitness: Scores one genome with a non-negative integer. Called
                    once per individual, possibly from several threads.

        Returns:
            The best score of this generation.

        Raises:
            ValueError: If params are invalid or fitness returns a bad score.
        """
        params.validate()
        if len(self.individuals) > params.total_size:
            raise ValueError(
                f"Population holds {len(self.individuals)} individuals, more "
                f"than total_size ({params.total_size})"
            )

        stats = GenerationStats(generation=self.generation)

        # The store is only replaced once selection succeeds
        elites = list(self.individuals)

        start = time.perf_counter()
        stats.num_spawned = self._pad_elite(elites, params.elite_size)
        logger.debug(f"Spawned {stats.num_spawned} genomes in {_since(start):.3f}s")

        with self._executor() as pool:
            start = time.perf_counter()
            children = self._breed(pool, elites, params.total_size - len(elites))
            stats.num_bred = len(children)
            logger.debug(f"Bred {stats.num_bred} children in {_since(start):.3f}s")

            generation = children + elites

            start = time.perf_counter()
            stats.num_mutations = self._mutate(generation, params.mutation_count_range)
            logger.debug(
                f"Applied {stats.num_mutations} mutations in {_since(start):.3f}s"
            )

            start = time.perf_counter()
            scores = [
                _check_score(score)
                for score in self._map(pool, fitness, generation)
            ]
            logger.debug(f"Evaluated {len(scores)} genomes in {_since(start):.3f}s")

        start = time.perf_counter()
        survivors, best_score = select_top_k(zip(generation, scores), params.elite_size)
        self.individuals = [entry.genome for entry in survivors]
        logger.debug(f"Selected {len(survivors)} survivors in {_since(start):.3f}s")

        values = np.asarray(scores)
        stats.best_score = best_score
        stats.avg_score = float(values.mean())
        stats.min_score = int(values.min())
        stats.score_std = float(values.std())

        self.stats_history.append(stats)
        self.generation += 1

        logger.info(
            f"Generation {stats.generation}: best={stats.best_score} "
            f"avg={stats.avg_score:.2f} min={stats.min_score} "
            f"mutations={stats.num_mutations}"
        )
        return best_score

    def evolve(
        self,
        params: PopulationParams,
        fitness: Callable[[G], int],
        target_score: int,
        max_generations: Optional[int] = None,
        progress_callback: Optional[Callable[[int, GenerationStats], None]] = None,
    ) -> List[GenerationStats]:
        """
        Step until a generation reaches the target score.

        Args:
            params: Generation parameters.
            fitness: Fitness function, see step().
            target_score: Stop once a generation's best score reaches this.
            max_generations: Optional cap on the number of steps.
            progress_callback: Called with (generation, stats) after each step.

        Returns:
            Statistics of every generation run by this call.
        """
        history = []

        while max_generations is None or len(history) < max_generations:
            best_score = self.step(params, fitness)
            stats = self.stats_history[-1]
            history.append(stats)

            if progress_callback:
                progress_callback(stats.generation, stats)

            if best_score >= target_score:
                logger.info(
                    f"Reached target score {target_score} after "
                    f"{len(history)} generations"
                )
                break
        else:
            logger.info(
                f"Stopped after {max_generations} generations without "
                f"reaching {target_score}"
            )

        return history

    def best(self) -> G:
        """
        Get the best individual of the last completed step.

        Raises:
            EmptyPopulationError: If no individuals are stored.
        """
        if not self.individuals:
            raise EmptyPopulationError("Population is empty; call step() first")
        return self.individuals[0]

    def _pad_elite(self, elites: List[G], elite_size: int) -> int:
        """Spawn genomes until elites holds elite_size of them."""
        missing = max(0, elite_size - len(elites))
        for _ in range(missing):
            elites.append(self.genome_type.spawn(self.rng))
        return missing

    def _breed(self, pool: Optional[Executor], parents: List[G], count: int) -> List[G]:
        """Cross random pairs of parents into count children."""
        if count <= 0:
            return []

        encodings = [genome.serialize() for genome in parents]
        chunks = _split(count, self.max_workers)
        seeds = self._seed_sequence.spawn(len(chunks))

        def breed_chunk(task):
            size, seed = task
            rng = np.random.default_rng(seed)
            pairs = rng.integers(0, len(encodings), size=(size, 2))
            return [
                self.genome_type.deserialize(
                    self.genome_type.mix(encodings[a], encodings[b], rng)
                )
                for a, b in pairs
            ]

        children = []
        for chunk in self._map(pool, breed_chunk, list(zip(chunks, seeds))):
            children.extend(chunk)
        return children

    def _mutate(self, generation: List[G], mutation_count_range: range) -> int:
        """Mutate k random individuals, k drawn from the range."""
        count = int(self.rng.integers(mutation_count_range.start, mutation_count_range.stop))
        for index in self.rng.integers(0, len(generation), size=count):
            generation[index].mutate(self.rng)
        return count

    def _executor(self):
        """Thread pool for the parallel phases, or an inline stand-in."""
        if self.max_workers == 1:
            return _Inline()
        return ThreadPoolExecutor(
            max_workers=self.max_workers,
            thread_name_prefix='neuroevo-step',
        )

    @staticmethod
    def _map(
        pool: Optional[Executor],
        fn: Callable[[Any], Any],
        items: Sequence[Any],
    ) -> List[Any]:
        if pool is None:
            return [fn(item) for item in items]
        return list(pool.map(fn, items))


class _Inline:
    """Context manager yielding no pool, so phases run on the caller thread."""

    def __enter__(self) -> None:
        return None

    def __exit__(self, *exc_info) -> bool:
        return False


def _split(count: int, parts: int) -> List[int]:
    """Split count into at most parts near-equal positive sizes."""
    parts = max(1, min(parts, count))
    base, extra = divmod(count, parts)
    return [base + (1 if i < extra else 0) for i in range(parts)]


def _check_score(score: Any) -> int:
    """Validate a fitness result as a non-negative integer."""
    if isinstance(score, bool) or not isinstance(score, (int, np.integer)):
        raise ValueError(f"Fitness must return an integer, got {score!r}")
    if score < 0:
        raise ValueError(f"Fitness must be non-negative, got {score}")
    return int(score)


def _since(start: float) -> float:
    return time.perf_counter() - start
