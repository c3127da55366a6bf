"""
Top-K selection for the generational step.

After a generation has been scored, only the ``elite_size`` best
individuals survive. This module provides the bounded container that
does that, with a strict ordering contract:

- the survivors are exactly the K highest scores of the generation
- they come out in descending score order, best first
- equal scores keep insertion order (earlier entries rank higher)

The container is a fixed-capacity min-heap: its root is the weakest
survivor so far, which is the only one a newcomer has to beat. The heap
is emptied by repeated extraction, never by iterating its backing list
(that order is not score order).
"""
import heapq
from dataclasses import dataclass
from typing import Generic, Iterable, List, Optional, Tuple, TypeVar

T = TypeVar('T')


@dataclass
class ScoredEntry(Generic[T]):
    """A genome paired with its fitness for the duration of one step."""
    genome: T
    score: int
    index: int = 0


class BoundedTopK(Generic[T]):
    """
    Keep the K best-scoring entries seen so far.

    Example:
        top = BoundedTopK(capacity=3)
        for genome, score in scored:
            top.push(genome, score)
        survivors = top.drain()  # best first
    """

    def __init__(self, capacity: int):
        """
        Initialize the container.

        Args:
            capacity: Number of entries to retain (K), must be positive.
        """
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")

        self.capacity = capacity
        self.max_score: Optional[int] = None
        self.seen = 0
        self._heap: List[Tuple[int, int, ScoredEntry[T]]] = []

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, genome: T, score: int) -> bool:
        """
        Offer an entry to the container.

        Args:
            genome: The individual.
            score: Its fitness.

        Returns:
            True if the entry is currently among the retained K.
        """
        index = self.seen
        self.seen += 1
        if self.max_score is None or score > self.max_score:
            self.max_score = score

        # Later insertions compare lower on equal scores
        key = (score, -index, ScoredEntry(genome, score, index))

        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, key)
            return True

        if key[:2] > self._heap[0][:2]:
            heapq.heapreplace(self._heap, key)
            return True

        return False

    def drain(self) -> List[ScoredEntry[T]]:
        """
        Remove and return all retained entries, best first.

        Returns:
            Entries in strictly descending (score, earlier-first) order.
        """
        ascending = []
        while self._heap:
            ascending.append(heapq.heappop(self._heap)[2])
        ascending.reverse()
        return ascending


def select_top_k(
    scored: Iterable[Tuple[T, int]],
    k: int,
) -> Tuple[List[ScoredEntry[T]], Optional[int]]:
    """
    Select the k best (genome, score) pairs.

    Args:
        scored: Pairs in insertion order.
        k: Number of survivors.

    Returns:
        Tuple of (survivors best first, maximum score or None if empty).
    """
    top: BoundedTopK[T] = BoundedTopK(k)
    for genome, score in scored:
        top.push(genome, score)
    return top.drain(), top.max_score
