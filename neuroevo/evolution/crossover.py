"""
Crossover operators for gene encodings.

Crossover combines two parent encodings into a child encoding of the
same length. The engine only ever crosses genomes of one type, so two
encodings of different lengths mean the caller built genomes of
inconsistent shape; that is reported as GenotypeLengthError and is not
meant to be recovered from.
"""
from typing import Sequence, Union

import numpy as np

Encoding = Union[np.ndarray, Sequence[float]]


class GenotypeLengthError(ValueError):
    """Two encodings (or an encoding and a genome type) disagree in length."""


def check_same_length(a: np.ndarray, b: np.ndarray) -> None:
    """Raise GenotypeLengthError unless both encodings have equal length."""
    if len(a) != len(b):
        raise GenotypeLengthError(
            f"Encodings must have the same length, got {len(a)} and {len(b)}"
        )


def uniform_mix(
    a: Encoding,
    b: Encoding,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform crossover of two encodings.

    Each gene of the child is taken from parent A or parent B by an
    independent fair coin flip. The generator is supplied per call, so
    concurrent callers holding their own generators share no state.

    Args:
        a: First parent encoding.
        b: Second parent encoding.
        rng: Random generator owned by the caller.

    Returns:
        New child encoding with the dtype of ``a``.

    Raises:
        GenotypeLengthError: If the parents differ in length.
    """
    a = np.asarray(a)
    b = np.asarray(b)
    check_same_length(a, b)

    take_b = rng.integers(0, 2, size=len(a)).astype(bool)
    child = a.copy()
    child[take_b] = b[take_b]
    return child
